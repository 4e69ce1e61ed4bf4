"""Derive hidden gaps from visible ranges."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .selection import VisibleRange


@dataclass(frozen=True)
class HiddenGap:
    start: int
    end: int

    @property
    def hidden_count(self) -> int:
        return self.end - self.start + 1


def compute_gaps(line_count: int, visible_ranges: Sequence[VisibleRange]) -> tuple[HiddenGap, ...]:
    """Return every maximal run of ``1..line_count`` not covered by a range.

    ``visible_ranges`` must be sorted and non-overlapping, as produced by
    ``select_visible``. No zero-length gap is ever emitted.
    """
    if line_count <= 0:
        return ()

    gaps: list[HiddenGap] = []
    next_uncovered = 1
    for visible in visible_ranges:
        if visible.start > next_uncovered:
            gaps.append(HiddenGap(next_uncovered, visible.start - 1))
        next_uncovered = max(next_uncovered, visible.end + 1)
    if next_uncovered <= line_count:
        gaps.append(HiddenGap(next_uncovered, line_count))
    return tuple(gaps)
