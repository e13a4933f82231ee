"""The subcommands that work on repositories, objects and configuration."""

from __future__ import annotations

import os
import sys

from .config import cwd_config, global_config
from .fs import PERM_DIR, mkdirp
from .ini import IniError, IniFile
from .objects import GitObject, ObjectError, ObjectType
from .options import (
    ArgFlag,
    ArgParser,
    ArgumentError,
    Description,
    Option,
    OptionKind,
    ParseResult,
    help_option,
)
from .repo import Repository

__all__ = [
    "CommandError",
    "cmd_cat_file",
    "cmd_config",
    "cmd_hash_object",
    "cmd_init",
]

_NOT_A_REPO = "qgit: not a qgit repository (or any of the parent directories)"


class CommandError(Exception):
    """Raised when a subcommand fails; the message is meant for the user."""


def _from_os_error(exc: OSError) -> CommandError:
    return CommandError(f"qgit: {exc.strerror or exc}")


def _parse(parser: ArgParser, argv: list[str] | None) -> ParseResult:
    try:
        return parser.parse(argv or [])
    except ArgumentError as exc:
        raise CommandError(f"qgit: {exc}") from exc


def _write_bytes(data: bytes) -> None:
    sys.stdout.flush()
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(data.decode("utf-8", errors="replace"))
    else:
        buffer.write(data)
        buffer.flush()


def cmd_cat_file(argv: list[str] | None = None) -> int:
    """Show the type, size or payload of a stored object."""
    parser = ArgParser(
        [
            help_option(),
            Option(short="t", kind=OptionKind.BOOL, dest="type", help="Show object type"),
            Option(short="s", kind=OptionKind.BOOL, dest="size", help="Show object size"),
            Option(short="p", kind=OptionKind.BOOL, dest="payload", help="Show object payload"),
        ],
        Description(
            prog="qgit",
            description="Show object contents",
            usage="qgit cat-file [options] <hash>",
            epilog="See 'qgit cat-file --help' for more information.",
        ),
    )
    result = _parse(parser, argv)
    show_type, show_size, show_payload = result["type"], result["size"], result["payload"]

    if show_type and show_size:
        raise CommandError("qgit: options '-t' and '-s' cannot be used together")
    if show_type and show_payload:
        raise CommandError("qgit: options '-t' and '-p' cannot be used together")
    if show_size and show_payload:
        raise CommandError("qgit: options '-s' and '-p' cannot be used together")

    if not result.args:
        raise CommandError("qgit: a hash is required")
    name = result.args[0]

    repo = Repository.find(".")
    if repo is None:
        raise CommandError(_NOT_A_REPO)

    try:
        obj = GitObject.read(repo, name)
    except OSError as exc:
        raise _from_os_error(exc) from exc
    except (ObjectError, ValueError) as exc:
        raise CommandError(f"qgit: not a valid object name '{name}'") from exc

    if show_type:
        print(obj.type.label)
    if show_size:
        print(obj.size)
    if show_payload:
        _write_bytes(obj.payload)
    sys.stdout.flush()
    return 0


def _split_key(arg: str) -> tuple[str, str]:
    section, dot, key = arg.partition(".")
    if not dot:
        raise CommandError("qgit: key must be in section.key format")
    return section, key


def _save(ini: IniFile) -> None:
    try:
        ini.write()
    except IniError as exc:
        raise CommandError(f"qgit: {exc}") from exc


def cmd_config(argv: list[str] | None = None) -> int:
    """Get, set, unset or list repository and global options."""
    parser = ArgParser(
        [
            help_option(),
            Option(kind=OptionKind.GROUP, help="Scope"),
            Option(long="global", kind=OptionKind.BOOL, dest="global", help="use global config file"),
            Option(long="local", kind=OptionKind.BOOL, dest="local", help="use local config file"),
            Option(kind=OptionKind.GROUP_END),
            Option(kind=OptionKind.GROUP, help="Action"),
            Option(short="l", long="list", kind=OptionKind.BOOL, dest="list", help="list all options"),
            Option(short="g", long="get", kind=OptionKind.BOOL, dest="get", help="get the value of a key"),
            Option(short="s", long="set", kind=OptionKind.BOOL, dest="set", help="set the value of a key"),
            Option(short="u", long="unset", kind=OptionKind.BOOL, dest="unset", help="unset a key"),
            Option(kind=OptionKind.GROUP_END),
        ],
        Description(
            prog="qgit",
            description="Get and set repository or global options",
            usage="qgit config [options]",
            epilog="See 'qgit config --help' for more information.",
        ),
    )
    result = _parse(parser, argv)
    use_global, use_local = result["global"], result["local"]
    auto = not use_local and not use_global
    args = result.args

    local_cfg: IniFile | None = None
    global_cfg: IniFile | None = None
    if use_local or auto:
        local_cfg = cwd_config()
    if use_local and local_cfg is None:
        raise CommandError("qgit: --local can only be used inside a qgit repository")
    if use_global or auto:
        global_cfg = global_config()

    if result["list"]:
        for ini in (global_cfg, local_cfg):
            if ini is not None:
                ini.print(sys.stdout)
    elif result["set"]:
        if len(args) != 2:
            raise CommandError("qgit: --set requires two arguments")
        section, key = _split_key(args[0])
        target = global_cfg if use_global else local_cfg
        if target is None:
            raise CommandError("qgit: not inside a qgit repository")
        target.set(section, key, args[1])
        _save(target)
    elif result["unset"]:
        if len(args) != 1:
            raise CommandError("qgit: --unset requires one argument")
        section, key = _split_key(args[0])
        target = global_cfg if use_global else local_cfg
        if target is None:
            raise CommandError("qgit: not inside a qgit repository")
        try:
            target.unset(section, key)
        except KeyError:
            pass
        _save(target)
    elif result["get"]:
        if len(args) != 1:
            raise CommandError("qgit: --get requires one argument")
        section, key = _split_key(args[0])
        if use_global:
            sources = [global_cfg]
        elif use_local:
            sources = [local_cfg]
        else:
            sources = [local_cfg, global_cfg]
        value = next(
            (v for ini in sources if ini is not None for v in [ini.get(section, key)] if v is not None),
            None,
        )
        if value is None:
            return 1
        print(value)
    else:
        raise CommandError("qgit: no action specified")
    return 0


def cmd_hash_object(argv: list[str] | None = None) -> int:
    """Print an object's name for a file, and optionally store the object."""
    parser = ArgParser(
        [
            help_option(),
            Option(short="w", kind=OptionKind.BOOL, dest="write", help="write the object to the repository"),
            Option(short="t", kind=OptionKind.STR, dest="type", help="object type", flags=ArgFlag.REQUIRED),
        ],
        Description(
            prog="qgit",
            description="Create an object from a file or stdin",
            usage="qgit hash-object [options] <file>",
            epilog="See 'qgit hash-object --help' for more information.",
        ),
    )
    result = _parse(parser, argv)
    if not result.args:
        raise CommandError("qgit: a file is required")
    filename = result.args[0]

    type_name = result["type"]
    if type_name is None:
        kind = ObjectType.BLOB
    else:
        try:
            kind = ObjectType.from_label(type_name)
        except ObjectError as exc:
            raise CommandError(f"qgit: invalid object type '{type_name}'") from exc

    try:
        obj = GitObject.from_file(kind, filename)
    except OSError as exc:
        raise _from_os_error(exc) from exc

    print(obj.hash())

    if result["write"]:
        repo = Repository.find(".")
        if repo is None:
            raise CommandError(_NOT_A_REPO)
        try:
            obj.write(repo)
        except OSError as exc:
            raise _from_os_error(exc) from exc
    return 0


def cmd_init(argv: list[str] | None = None) -> int:
    """Create a repository, or report that one already exists."""
    parser = ArgParser(
        [
            help_option(),
            Option(long="bare", kind=OptionKind.BOOL, dest="bare", help="Create a bare repository"),
            Option(
                short="q",
                long="quiet",
                kind=OptionKind.BOOL,
                dest="quiet",
                help="Only print error and warning messages",
            ),
            Option(
                short="b",
                long="initial-branch",
                kind=OptionKind.STR,
                dest="branch",
                help="Specify the name of the initial branch",
                flags=ArgFlag.REQUIRED,
            ),
        ],
        Description(
            prog="qgit",
            description="Initialize a new repository",
            usage="qgit init [options]",
            epilog="See 'qgit init --help' for more information.",
        ),
    )
    result = _parse(parser, argv)

    branch = result["branch"]
    if branch is None:
        config = global_config()
        if config is not None:
            branch = config.get("init", "defaultBranch")
        if branch is None:
            branch = "main"

    if result.args:
        path = result.args[0]
        try:
            mkdirp(path, PERM_DIR)
        except FileExistsError:
            pass
        except OSError as exc:
            raise _from_os_error(exc) from exc
    else:
        path = "."

    try:
        abspath = os.path.realpath(path, strict=True)
        repo = Repository.create(abspath, branch, result["bare"])
    except OSError as exc:
        raise _from_os_error(exc) from exc
    except IniError as exc:
        raise CommandError(f"qgit: {exc}") from exc

    if not result["quiet"]:
        if repo.reinit:
            print(f"Reinitialized existing qgit repository in {repo.qgit}/")
        else:
            print(f"Initialized empty qgit repository in {repo.qgit}/")
    return 0