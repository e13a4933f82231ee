"""A small command-line option parser in the GNU/POSIX style.

Short options take values as ``-j6`` or ``-j 6`` and booleans combine as
``-abc``; long options take ``--name=value`` or ``--name value``.  A list
option collects every value it is given.  ``--`` ends option parsing.
"""

from __future__ import annotations

import enum
import math
import re
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

__all__ = [
    "OptionKind",
    "ArgFlag",
    "Option",
    "Description",
    "ArgumentError",
    "ParseResult",
    "ArgParser",
    "help_option",
]

_LPAD = 2
_MAX_WIDTH = 80
_DESC_GAP = 2

_INT_MIN, _INT_MAX = -(2**31), 2**31 - 1
_LONG_MIN, _LONG_MAX = -(2**63), 2**63 - 1

_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_FLOAT_RE = re.compile(
    r"[ \t\n\v\f\r]*"
    r"(?P<number>[+-]?(?:"
    r"(?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?)"
    r"|(?P<dec>(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)"
    r"|(?P<special>inf(?:inity)?|nan)"
    r"))",
    re.IGNORECASE,
)


class OptionKind(enum.Enum):
    """What an option holds, or a marker that shapes the help text."""

    INT = "int"
    STR = "str"
    BOOL = "bool"
    LONG = "long"
    DOUBLE = "double"
    LIST = "list"
    GROUP = "group"
    GROUP_END = "group_end"


class ArgFlag(enum.Enum):
    """Whether an option's value must be present.

    Only ``REQUIRED`` makes a missing or bad value an error; with ``NONE`` or
    ``OPTIONAL`` a value that does not convert is left alone.
    """

    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2


class ArgumentError(Exception):
    """Raised when the command line cannot be parsed."""


Callback = Callable[["ArgParser", "Option"], None]


@dataclass
class Option:
    """One option of a parser, or a group marker for the help text.

    ``dest`` names the entry of :attr:`ParseResult.values` the option sets;
    an option without one stores nothing and takes no value.
    """

    short: str | None = None
    long: str | None = None
    kind: OptionKind = OptionKind.BOOL
    dest: str | None = None
    help: str | None = None
    callback: Callback | None = None
    flags: ArgFlag = ArgFlag.NONE
    default: Any = None

    def __post_init__(self) -> None:
        if self.short is not None and len(self.short) != 1:
            raise ValueError(f"a short option name is one character, got {self.short!r}")

    def initial_value(self) -> Any:
        if self.kind is OptionKind.BOOL:
            return False if self.default is None else self.default
        if self.kind is OptionKind.LIST:
            return [] if self.default is None else list(self.default)
        return self.default


@dataclass
class Description:
    """Texts shown by the help output."""

    prog: str | None = None
    description: str | None = None
    usage: str | None = None
    epilog: str | None = None


@dataclass
class ParseResult:
    """Option values by destination, and the positional arguments in order."""

    values: dict[str, Any] = field(default_factory=dict)
    args: list[str] = field(default_factory=list)

    def __getitem__(self, dest: str) -> Any:
        return self.values[dest]


def _parse_int(text: str | None, low: int, high: int) -> int:
    if not text:
        raise ValueError("empty integer")
    match = _INT_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"not an integer: {text!r}")
    sign, digits = match.groups()
    if digits[:2].lower() == "0x":
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits, 10)
    if sign == "-":
        value = -value
    if not low <= value <= high:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _parse_double(text: str | None) -> float:
    if not text:
        raise ValueError("empty number")
    match = _FLOAT_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"not a number: {text!r}")
    number = match.group("number")
    if match.group("special"):
        return float(number)
    if match.group("hex"):
        value = float.fromhex(number)
        significand = re.split(r"[pP]", match.group("hex"))[0][2:]
        nonzero = re.search(r"[1-9a-fA-F]", significand) is not None
    else:
        value = float(number)
        significand = re.split(r"[eE]", match.group("dec"))[0]
        nonzero = re.search(r"[1-9]", significand) is not None
    if math.isinf(value) or (value == 0.0 and nonzero):
        raise ValueError(f"number out of range: {text!r}")
    return value


def _convert(kind: OptionKind, text: str | None) -> Any:
    if kind is OptionKind.BOOL:
        return True
    if kind is OptionKind.STR:
        return text
    if kind is OptionKind.INT:
        return _parse_int(text, _INT_MIN, _INT_MAX)
    if kind is OptionKind.LONG:
        return _parse_int(text, _LONG_MIN, _LONG_MAX)
    if kind is OptionKind.DOUBLE:
        return _parse_double(text)
    raise ValueError(f"option kind {kind.value} holds no value")


def _wrap(text: str | None, indent: int, width: int) -> str:
    """Lay out the words of ``text`` from column ``indent``; the first line's
    indentation is assumed already written."""
    parts: list[str] = []
    col = indent
    for word in (text or "").split(" "):
        if not word:
            continue
        if col > indent and col + 1 + len(word) > width:
            parts.append("\n" + " " * indent)
            col = indent
        elif col > indent:
            parts.append(" ")
            col += 1
        parts.append(word)
        col += len(word)
    parts.append("\n")
    return "".join(parts)


def _print_wrap(text: str | None, indent: int, width: int) -> str:
    return " " * indent + _wrap(text, indent, width)


def _option_spec(opt: Option) -> str:
    has_value = opt.kind not in (OptionKind.BOOL, OptionKind.GROUP)
    suffix = "=<value>" if has_value else ""
    if opt.short and opt.long:
        return f"-{opt.short}, --{opt.long}{suffix}"
    if opt.long:
        return f"--{opt.long}{suffix}"
    if opt.short:
        return f"-{opt.short}" + (" <value>" if has_value else "")
    return ""


def _show_help(parser: "ArgParser", option: Option) -> None:
    parser.print_help()
    raise SystemExit(0)


def help_option() -> Option:
    """Return the ``-h``/``--help`` option, which prints help and exits."""
    return Option(
        short="h",
        long="help",
        kind=OptionKind.BOOL,
        help="show this help message ",
        callback=_show_help,
    )


class ArgParser:
    """Parses a command line (without the program name) against options."""

    def __init__(
        self,
        options: Iterable[Option],
        description: Description | None = None,
        *,
        ignore_unknown: bool = False,
    ) -> None:
        self.options = list(options)
        self.description = description
        self.ignore_unknown = ignore_unknown

    def _find(self, short: str | None = None, long: str | None = None) -> Option | None:
        for opt in self.options:
            if short and opt.short == short:
                return opt
            if long is not None and opt.long is not None and opt.long == long:
                return opt
        return None

    def parse(self, argv: Iterable[str]) -> ParseResult:
        """Parse ``argv``; raise :class:`ArgumentError` on a bad command line."""
        args = list(argv)
        result = ParseResult(
            values={opt.dest: opt.initial_value() for opt in self.options if opt.dest is not None}
        )
        index = 0
        stopped = False
        while index < len(args):
            arg = args[index]
            if stopped or not arg.startswith("-"):
                result.args.append(arg)
                index += 1
            elif arg == "--":
                stopped = True
                index += 1
            elif arg.startswith("--"):
                index = self._parse_long(args, index, result)
            else:
                index = self._parse_short(args, index, result)
        return result

    def _take_value(
        self,
        opt: Option,
        value: str | None,
        from_next: bool,
        label: str,
        result: ParseResult,
    ) -> bool:
        """Store ``value``; return False when a value taken from the next
        argument is to be handed back as an argument of its own."""
        assert opt.dest is not None
        if opt.kind is OptionKind.LIST:
            if value is None:
                raise ArgumentError(f"missing value for option: '{label}'")
            items = result.values.get(opt.dest)
            if items is None:
                items = result.values[opt.dest] = []
            items.append(value)
            return True
        try:
            converted = _convert(opt.kind, value)
        except ValueError:
            if opt.flags is ArgFlag.REQUIRED:
                what = "missing" if value is None else "invalid"
                raise ArgumentError(f"{what} value for option: '{label}'") from None
            return not from_next
        result.values[opt.dest] = converted
        return True

    def _parse_short(self, args: list[str], index: int, result: ParseResult) -> int:
        body = args[index][1:]
        pos = 0
        while pos < len(body):
            char = body[pos]
            opt = self._find(short=char)
            if opt is None:
                if not self.ignore_unknown:
                    raise ArgumentError(f"unknown option: '-{char}'")
                pos += 1
                continue
            if opt.dest is not None:
                if opt.kind is OptionKind.BOOL:
                    result.values[opt.dest] = True
                else:
                    value: str | None = None
                    from_next = False
                    if pos + 1 < len(body):
                        value = body[pos + 1 :]
                        pos = len(body) - 1
                    elif index + 1 < len(args):
                        index += 1
                        value = args[index]
                        from_next = True
                    if not self._take_value(opt, value, from_next, f"-{char}", result):
                        index -= 1
            pos += 1
            if opt.callback:
                opt.callback(self, opt)
        return index + 1

    def _parse_long(self, args: list[str], index: int, result: ParseResult) -> int:
        body = args[index][2:]
        name, eq, inline = body.partition("=")
        opt = self._find(long=name)
        if opt is None:
            if not self.ignore_unknown:
                raise ArgumentError(f"unknown option: '--{body}'")
            return index + 1
        label = "--" + (name if eq and name else body)
        if opt.dest is not None:
            if opt.kind is OptionKind.BOOL:
                result.values[opt.dest] = True
            else:
                value: str | None = None
                from_next = False
                if eq and inline:
                    value = inline
                elif index + 1 < len(args):
                    index += 1
                    value = args[index]
                    from_next = True
                if not self._take_value(opt, value, from_next, label, result):
                    index -= 1
        if opt.callback:
            opt.callback(self, opt)
        return index + 1

    def _format_option(self, opt: Option, width: int) -> str:
        spec = _option_spec(opt)
        indent = _LPAD + width + _DESC_GAP
        lead = " " * _LPAD + spec.ljust(width) + " " * _DESC_GAP
        return lead + _wrap(opt.help, indent, _MAX_WIDTH)

    def _format_options(self) -> str:
        width = max(
            (len(_option_spec(o)) for o in self.options if o.kind is not OptionKind.GROUP),
            default=0,
        )
        parts = ["OPTIONS:\n\n"]
        for opt in self.options:
            if opt.kind is OptionKind.GROUP:
                if opt.help:
                    parts.append(f"{opt.help}:\n")
            elif opt.kind is OptionKind.GROUP_END:
                parts.append("\n")
            else:
                parts.append(self._format_option(opt, width))
        return "".join(parts)

    def format_help(self) -> str:
        """Return the help text; empty when the parser has no description."""
        desc = self.description
        if desc is None:
            return ""
        parts: list[str] = []
        if desc.description:
            parts.append("OVERVIEW: " + _print_wrap(desc.description, 0, _MAX_WIDTH) + "\n")
        if desc.usage:
            parts.append(f"USAGE: {desc.usage}\n\n")
        parts.append(self._format_options())
        parts.append("\n")
        if desc.epilog:
            parts.append(_print_wrap(desc.epilog, 0, _MAX_WIDTH))
        return "".join(parts)

    def print_help(self) -> None:
        """Write the help text to standard output."""
        sys.stdout.write(self.format_help())
        sys.stdout.flush()