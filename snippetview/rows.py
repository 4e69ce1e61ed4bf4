"""Display rows and their mapping back to source line numbers.

A rendered block is a sequence of ``CodeRow`` and ``GapRow`` values. Code
rows always carry their true 1-based source line number, so numbering never
depends on how many rows precede them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

GAP_MARKER = "⋯"


@dataclass(frozen=True)
class CodeRow:
    line_number: int
    text: str


@dataclass(frozen=True)
class GapRow:
    first_hidden: int
    last_hidden: int

    @property
    def hidden_count(self) -> int:
        return self.last_hidden - self.first_hidden + 1


DisplayRow = Union[CodeRow, GapRow]


def line_number_of(row: DisplayRow) -> int | None:
    """Return the source line number of ``row``, or ``None`` for gaps."""
    if isinstance(row, CodeRow):
        return row.line_number
    return None


def hidden_span_of(row: DisplayRow) -> tuple[int, int] | None:
    """Return ``(first_hidden, last_hidden)`` for gap rows, else ``None``."""
    if isinstance(row, GapRow):
        return row.first_hidden, row.last_hidden
    return None


def gutter_label(row: DisplayRow) -> str:
    if isinstance(row, CodeRow):
        return str(row.line_number)
    return GAP_MARKER


def gap_label(row: GapRow) -> str:
    noun = "line" if row.hidden_count == 1 else "lines"
    return f"{GAP_MARKER} {row.hidden_count} hidden {noun}"
