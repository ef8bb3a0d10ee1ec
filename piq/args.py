"""A small command-line argument parser with nested subcommands."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ArgKind(Enum):
    """What kind of value an argument carries."""

    FLAG = "flag"
    STRING = "string"
    INT = "int"
    SUBCOMMAND = "subcommand"


_TYPE_STRS = {
    ArgKind.FLAG: "",
    ArgKind.STRING: "STRING",
    ArgKind.INT: "INT",
}
_MAX_TYPE_LEN = max(len(s) for s in _TYPE_STRS.values())


@dataclass(frozen=True)
class Argument:
    """One option or subcommand.

    ``name`` is the long option name, or the subcommand name for subcommands.
    ``short_name`` is a single lower-case letter, or empty for none.
    """

    kind: ArgKind
    name: str
    description: str = ""
    short_name: str = ""
    default: Any = None
    subs: "ArgumentBag | None" = None
    value: int = 0

    def __post_init__(self) -> None:
        if self.short_name and not (
            len(self.short_name) == 1 and "a" <= self.short_name <= "z"
        ):
            raise ValueError(
                f"short name of '{self.name}' must be a single letter a-z"
            )
        if self.kind is ArgKind.SUBCOMMAND and self.subs is None:
            object.__setattr__(self, "subs", ArgumentBag())


@dataclass(frozen=True)
class ArgumentBag:
    """The arguments accepted at one level of the command tree."""

    args: tuple[Argument, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def __iter__(self):
        return iter(self.args)

    @property
    def has_subcommands(self) -> bool:
        return any(a.kind is ArgKind.SUBCOMMAND for a in self.args)


@dataclass(frozen=True)
class ProgramArgs:
    """The root argument bag and the text printed above the usage line."""

    root: ArgumentBag
    preamble: str = ""


@dataclass
class ParsedArgs:
    """The outcome of parsing: option values and the chosen subcommand path."""

    values: dict[str, Any] = field(default_factory=dict)
    subcommands: list[str] = field(default_factory=list)
    subcommand_values: list[int] = field(default_factory=list)

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)


class ArgumentError(Exception):
    """The command line could not be parsed."""

    def __init__(self, message: str, help_text: str) -> None:
        super().__init__(message)
        self.message = message
        self.help_text = help_text


class HelpRequested(Exception):
    """The user asked for help; ``help_text`` holds what should be shown."""

    def __init__(self, help_text: str) -> None:
        super().__init__(help_text)
        self.help_text = help_text


_HELP_ARG = Argument(
    kind=ArgKind.FLAG,
    name="help",
    short_name="h",
    description="list available commands and arguments",
)

_ATOI = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _format_argument(a: Argument, max_long_len: int) -> str:
    short = a.short_name or " "
    pad = " " * (2 + max_long_len - len(a.name))
    type_str = _TYPE_STRS[a.kind].rjust(2 + _MAX_TYPE_LEN)
    return f"  -{short}{pad}--{a.name}{type_str}  {a.description}\n"


def _help_text(program: ProgramArgs, bag: ArgumentBag, argv0: str,
               path: list[str]) -> str:
    parts = [program.preamble, "\n", f"Usage: {argv0}"]
    parts.extend(f" {name}" for name in path)
    parts.append(" [options]")
    has_subs = bag.has_subcommands
    if has_subs:
        parts.append(" <subcommand> [options]")
    parts.append("\n\n")

    max_long_len = max([len(_HELP_ARG.name)] + [len(a.name) for a in bag])

    if has_subs:
        parts.append("subcommands:\n")
        for a in bag:
            if a.kind is ArgKind.SUBCOMMAND:
                name = a.name.rjust(8 + max_long_len)
                blank = " " * (2 + _MAX_TYPE_LEN)
                parts.append(f"{name} {blank} {a.description}\n")
        parts.append("\n")

    parts.append("options:\n")
    for a in bag:
        if a.kind is not ArgKind.SUBCOMMAND:
            parts.append(_format_argument(a, max_long_len))
    parts.append(_format_argument(_HELP_ARG, max_long_len))
    return "".join(parts)


def _defaults(bag: ArgumentBag) -> dict[str, Any]:
    return {
        a.name: (False if a.kind is ArgKind.FLAG else a.default)
        for a in bag
        if a.kind is not ArgKind.SUBCOMMAND
    }


class _Parser:
    def __init__(self, program: ProgramArgs, argv: list[str]) -> None:
        self.program = program
        self.argv = list(argv)
        self.cursor = 1
        self.bag = program.root
        self.result = ParsedArgs(values=_defaults(program.root))

    @property
    def argv0(self) -> str:
        return self.argv[0] if self.argv else ""

    def help(self) -> str:
        return _help_text(self.program, self.bag, self.argv0,
                          self.result.subcommands)

    def fail(self, message: str) -> ArgumentError:
        return ArgumentError(message, self.help())

    def assign(self, a: Argument, text: str) -> None:
        if a.kind is ArgKind.INT:
            self.result.values[a.name] = _atoi(text)
        elif a.kind is ArgKind.STRING:
            self.result.values[a.name] = text
        elif a.kind is ArgKind.FLAG:
            self.result.values[a.name] = True

    def take_value(self, a: Argument, display_name: str, cursor: int) -> int:
        if cursor >= len(self.argv) - 1:
            raise self.fail(
                f"Argument '{display_name}' expected a value, but none given."
            )
        cursor += 1
        self.assign(a, self.argv[cursor])
        return cursor

    def parse_long(self, arg: str) -> None:
        if arg == "help":
            raise HelpRequested(self.help())
        for a in self.bag:
            if a.kind is ArgKind.SUBCOMMAND:
                continue
            prefix = arg.startswith(a.name)
            exact = prefix and len(arg) == len(a.name)
            if a.kind is ArgKind.FLAG:
                if exact:
                    self.assign(a, "")
                    self.cursor += 1
                    return
            elif exact:
                self.cursor = self.take_value(a, a.name, self.cursor) + 1
                return
            elif prefix and arg[len(a.name)] == "=":
                self.assign(a, arg[len(a.name) + 1:])
                self.cursor += 1
                return
        raise self.fail(f"Unknown argument: '{arg}'.")

    def parse_short(self, arg: str) -> None:
        if "h" in arg:
            raise HelpRequested(self.help())
        cursor = self.cursor
        if not arg:
            self.cursor = cursor + 1
            return
        unmatched: list[str] = []
        for c in arg:
            a = next((a for a in self.bag if a.short_name == c), None)
            if a is None:
                unmatched.append(c)
            elif a.kind is ArgKind.FLAG:
                self.assign(a, "")
            elif a.kind in (ArgKind.INT, ArgKind.STRING):
                if len(arg) > 1:
                    raise self.fail(
                        f"Short argument '{c}' takes a parameter, so can't be "
                        "used with other short arguments."
                    )
                cursor = self.take_value(a, c, cursor)
        if unmatched:
            plural = "s" if len(unmatched) > 1 else ""
            listed = ", ".join(f"'{c}'" for c in unmatched)
            raise self.fail(f"Unknown short argument{plural}: {listed}")
        self.cursor = cursor + 1

    def parse_noprefix(self, arg: str) -> None:
        for a in self.bag:
            if a.kind is ArgKind.SUBCOMMAND and a.name == arg:
                self.cursor += 1
                self.result.subcommands.append(a.name)
                self.result.subcommand_values.append(a.value)
                for key, value in _defaults(a.subs).items():
                    self.result.values.setdefault(key, value)
                outer = self.bag
                self.bag = a.subs
                self.run()
                self.bag = outer
                return
        raise self.fail(f"Unknown subcommand: {arg}")

    def run(self) -> None:
        while self.cursor < len(self.argv):
            arg = self.argv[self.cursor]
            if arg.startswith("--"):
                self.parse_long(arg[2:])
            elif arg.startswith("-"):
                self.parse_short(arg[1:])
            else:
                self.parse_noprefix(arg)


def parse_args(program: ProgramArgs, argv: list[str]) -> ParsedArgs:
    """Parse ``argv`` (whose first element is the program name).

    Raises ArgumentError on bad input and HelpRequested for -h/--help.
    """
    parser = _Parser(program, argv)
    parser.run()
    return parser.result


def format_help(program: ProgramArgs, argv: list[str]) -> str:
    """Return the top-level help text."""
    argv0 = argv[0] if argv else ""
    return _help_text(program, program.root, argv0, [])