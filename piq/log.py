"""Verbosity-gated logging to standard output."""

from __future__ import annotations

import sys
from enum import IntEnum


class Verbosity(IntEnum):
    """Named verbosity levels."""

    NONE = 0
    SOME = 1
    VERY = 2


_verbosity: int = Verbosity.NONE


def set_verbosity(level: int) -> None:
    """Set the program-wide verbosity level."""
    global _verbosity
    level = int(level)
    if level < 0:
        raise ValueError("verbosity cannot be negative")
    _verbosity = level


def get_verbosity() -> int:
    """Return the program-wide verbosity level."""
    return _verbosity


def _emit(message: str, args: tuple) -> None:
    sys.stdout.write(message % args if args else message)


def log_verbose(message: str, *args: object) -> None:
    """Write a printf-style message when verbosity is above ``Verbosity.SOME``."""
    if _verbosity > Verbosity.SOME:
        _emit(message, args)


def log_extra_verbose(message: str, *args: object) -> None:
    """Write a printf-style message when verbosity is above ``Verbosity.VERY``."""
    if _verbosity > Verbosity.VERY:
        _emit(message, args)