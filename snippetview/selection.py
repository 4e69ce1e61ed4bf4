"""Normalize requested visible line numbers into merged ranges.

Requested numbers are deduplicated, sorted, clamped to ``1..line_count`` and
merged into closed ranges. Consecutive numbers share a range; anything
further apart starts a new one unless ``merge_tolerance`` bridges the gap.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisibleRange:
    start: int
    end: int


def select_visible(
    line_count: int,
    show_lines_only: Iterable[int] | None,
    merge_tolerance: int = 0,
) -> tuple[VisibleRange, ...]:
    """Return sorted, merged, non-overlapping visible ranges.

    An empty or missing request makes the whole source visible. Numbers
    outside ``1..line_count`` are dropped silently; if nothing survives the
    result is empty. With ``merge_tolerance`` ``t`` two numbers merge when
    they are at most ``t + 1`` apart.
    """
    if line_count <= 0:
        return ()

    requested = sorted(set(show_lines_only or ()))
    if not requested:
        return (VisibleRange(1, line_count),)

    in_range = [number for number in requested if 1 <= number <= line_count]
    dropped = len(requested) - len(in_range)
    if dropped:
        logger.debug("dropped %d out-of-range line request(s) for %d-line source", dropped, line_count)
    if not in_range:
        return ()

    max_step = 1 + max(0, merge_tolerance)
    ranges: list[VisibleRange] = []
    start = prev = in_range[0]
    for number in in_range[1:]:
        if number - prev <= max_step:
            prev = number
            continue
        ranges.append(VisibleRange(start, prev))
        start = prev = number
    ranges.append(VisibleRange(start, prev))
    return tuple(ranges)


def parse_line_spec(spec: str) -> list[int]:
    """Parse a human line list such as ``"1-3,8,12-13"``.

    Whitespace is ignored. Raises ``ValueError`` for non-numeric parts or
    reversed ranges.
    """
    numbers: list[int] = []
    for raw_part in spec.split(","):
        part = raw_part.strip()
        if not part:
            continue
        if "-" in part[1:]:
            split_at = part.index("-", 1)
            low = int(part[:split_at].strip())
            high = int(part[split_at + 1 :].strip())
            if high < low:
                raise ValueError(f"reversed line range: {part!r}")
            numbers.extend(range(low, high + 1))
            continue
        numbers.append(int(part))
    return numbers
