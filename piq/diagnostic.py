"""Source positions and coloured error-context rendering."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

PROGRAM_NAME = "lang"
PATH_SEP = os.sep
ERROR_LINES_CTX = 2

TERM_ESCAPE = "\x1b"
RED = TERM_ESCAPE + "[0;31m"
BLU = TERM_ESCAPE + "[0;34m"
RESET = TERM_ESCAPE + "[0m"


@dataclass(frozen=True)
class PositionInfo:
    """A one-based line and column."""

    line: int
    column: int


class _State(Enum):
    BEFORE = 0
    BLUE = 1
    AFTER = 2


def find_line_and_col(text: str, target: int) -> PositionInfo:
    """Return the line and column of offset ``target`` in ``text``."""
    if target < 0 or target > len(text):
        raise IndexError("target lies outside the text")
    prefix = text[:target]
    line = prefix.count("\n") + 1
    column = target - (prefix.rfind("\n") + 1) + 1
    return PositionInfo(line, column)


def format_error_ctx(text: str, start: int, length: int) -> str:
    """Render the code around ``start`` with ``length`` characters highlighted."""
    reset_pos = start + length
    line_starts = [0] + [i + 1 for i, c in enumerate(text) if c == "\n"]
    line_ind = max(i for i, s in enumerate(line_starts) if s <= start or i == 0)
    context_start = line_starts[max(line_ind - ERROR_LINES_CTX, 0)]

    out = [RED, "/---\n| ", RESET]
    state = _State.BEFORE
    nls_after = 0
    for i in range(context_start, len(text)):
        c = text[i]
        if c == "\n" and state is _State.AFTER:
            if nls_after == ERROR_LINES_CTX:
                break
            nls_after += 1
        if state is _State.BEFORE:
            if i == start:
                out.append(BLU)
                state = _State.BLUE
        elif state is _State.BLUE:
            if i == reset_pos:
                out.append(RESET)
                state = _State.AFTER
        out.append(c)
        if c == "\n":
            out.extend((RED, "| ", RESET))
            if state is _State.BLUE:
                out.append(BLU)
    out.extend(("\n", RED, "\\---", RESET))
    return "".join(out)


def format_resolution_errors(text: str, bindings: Iterable[tuple[int, int]]) -> str:
    """Describe each unknown binding, given as ``(start, length)``, one per line."""
    messages = []
    for start, length in bindings:
        pos = find_line_and_col(text, start)
        name = text[start:start + length]
        messages.append(f"Unknown binding '{name}' at {pos.line}:{pos.column}")
    return "\n".join(messages)