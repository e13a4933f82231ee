"""The ``qgit`` command: subcommand table, dispatch and entry point."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Sequence

from .commands import (
    CommandError,
    cmd_cat_file,
    cmd_config,
    cmd_hash_object,
    cmd_init,
)

__all__ = ["Subcommand", "SUBCOMMANDS", "show_commands", "run_command", "main"]


@dataclass(frozen=True)
class Subcommand:
    """A named subcommand, its one-line summary and the function it runs."""

    name: str
    description: str
    run: Callable[[list[str]], int]


def _accept(argv: list[str] | None = None) -> int:
    """Accept any command line and succeed without changing anything."""
    return 0


SUBCOMMANDS: tuple[Subcommand, ...] = (
    Subcommand("init", "Initialize a new repository", cmd_init),
    Subcommand("add", "Add file contents to the index", _accept),
    Subcommand("status", "Show the working tree status", _accept),
    Subcommand("commit", "Record changes to the repository", _accept),
    Subcommand("log", "Show commit logs", _accept),
    Subcommand("config", "Get and set repository or global options", cmd_config),
    Subcommand(
        "cat-file",
        "Provide content or type and size information for repository objects",
        cmd_cat_file,
    ),
    Subcommand("check-ignore", "Check if a file is ignored", _accept),
    Subcommand("checkout", "Checkout a branch or paths to the working tree", _accept),
    Subcommand(
        "hash-object",
        "Compute the object ID and optionally creates a blob from a file",
        cmd_hash_object,
    ),
    Subcommand("ls-files", "List files in the index and the working tree", _accept),
    Subcommand("ls-tree", "List the contents of a tree object", _accept),
    Subcommand("rev-parse", "Parse revision or ref arguments", _accept),
    Subcommand("rm", "Remove files from the working tree and from the index", _accept),
    Subcommand("show-ref", "List references in a repository", _accept),
    Subcommand(
        "tag", "Create, list, delete or verify a tag object signed with GPG", _accept
    ),
    Subcommand("merge", "Join two or more development histories together", _accept),
    Subcommand("branch", "List, create, or delete branches", _accept),
)

_BY_NAME = {sub.name: sub for sub in SUBCOMMANDS}


def show_commands() -> None:
    """Print the program summary and the list of subcommands."""
    lines = [
        "qgit - A simplified git like version control system",
        "",
        "Usage: qgit <subcommand> [options]",
        "",
        "Subcommands:",
    ]
    lines.extend(f"  {sub.name:<16} {sub.description}" for sub in SUBCOMMANDS)
    lines.append("")
    sys.stdout.write("\n".join(lines) + "\n")
    sys.stdout.flush()


def run_command(argv: Sequence[str]) -> int:
    """Run the subcommand named by ``argv[0]`` with the rest of ``argv``.

    Raises :class:`CommandError` when the name is not a subcommand.
    """
    args = list(argv)
    if not args:
        show_commands()
        return 1
    name, rest = args[0], args[1:]
    sub = _BY_NAME.get(name)
    if sub is None:
        if name in ("--help", "-h"):
            show_commands()
            return 0
        raise CommandError(f"qgit: '{name}' is not a qgit command. See 'qgit --help'")
    return sub.run(rest)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        show_commands()
        return 1
    try:
        return run_command(args)
    except CommandError as exc:
        sys.stdout.flush()
        print(exc, file=sys.stderr)
    except OSError as exc:
        sys.stdout.flush()
        print(f"qgit: {exc.strerror or exc}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())