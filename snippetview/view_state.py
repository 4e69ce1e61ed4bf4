"""Collapsed/expanded view state and row assembly for one code block.

``render_rows`` is the pure row builder. ``CodeBlockView`` owns one display
session: a frozen snapshot of source, options, ranges and gaps plus the
current ``ViewState``. Callers invoke ``recompute`` whenever code or options
change and ``toggle``/``expand`` on user intent.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .gaps import HiddenGap, compute_gaps
from .options import DisplayOptions
from .rows import CodeRow, DisplayRow, GapRow
from .selection import VisibleRange, select_visible
from .source import SourceText

logger = logging.getLogger(__name__)

SHOW_FULL_CODE_LABEL = "Show Full Code"
SHOW_LESS_LABEL = "Show Less"


class ViewState(enum.Enum):
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"

    def toggled(self) -> "ViewState":
        if self is ViewState.COLLAPSED:
            return ViewState.EXPANDED
        return ViewState.COLLAPSED


def render_rows(
    state: ViewState,
    source: SourceText,
    visible_ranges: Sequence[VisibleRange],
    gaps: Sequence[HiddenGap],
) -> tuple[DisplayRow, ...]:
    """Build the row sequence for ``state``.

    Expanded emits every source line. Collapsed interleaves code rows for the
    visible ranges with one gap row per hidden gap, in ascending line order.
    """
    if state is ViewState.EXPANDED:
        return tuple(CodeRow(line_number, text) for line_number, text in enumerate(source.lines, start=1))

    segments: list[tuple[int, VisibleRange | HiddenGap]] = [(r.start, r) for r in visible_ranges]
    segments.extend((gap.start, gap) for gap in gaps)
    segments.sort(key=lambda item: item[0])

    rows: list[DisplayRow] = []
    for _start, segment in segments:
        if isinstance(segment, HiddenGap):
            rows.append(GapRow(segment.start, segment.end))
            continue
        for line_number in range(segment.start, segment.end + 1):
            rows.append(CodeRow(line_number, source.lines[line_number - 1]))
    return tuple(rows)


def is_collapsible(source: SourceText, options: DisplayOptions) -> bool:
    return options.collapsible and bool(options.show_lines_only) and source.line_count > 0


def initial_state(source: SourceText, options: DisplayOptions, gaps: Sequence[HiddenGap]) -> ViewState:
    """Start collapsed only when collapsing would actually hide something."""
    if is_collapsible(source, options) and gaps:
        return ViewState.COLLAPSED
    return ViewState.EXPANDED


@dataclass(frozen=True)
class ViewSnapshot:
    source: SourceText
    options: DisplayOptions
    visible_ranges: tuple[VisibleRange, ...]
    gaps: tuple[HiddenGap, ...]
    collapsible: bool

    @classmethod
    def build(cls, source: SourceText, options: DisplayOptions) -> "ViewSnapshot":
        collapsible = is_collapsible(source, options)
        requested = options.show_lines_only if collapsible else None
        visible_ranges = select_visible(source.line_count, requested, options.merge_tolerance)
        gaps = compute_gaps(source.line_count, visible_ranges)
        return cls(source, options, visible_ranges, gaps, collapsible)


class CodeBlockView:
    """One display session over a code block."""

    def __init__(self, code: str, options: DisplayOptions | None = None) -> None:
        self._snapshot = ViewSnapshot.build(SourceText.from_code(code), options or DisplayOptions())
        self._state = initial_state(self._snapshot.source, self._snapshot.options, self._snapshot.gaps)
        self._rows = self._render()

    def _render(self) -> tuple[DisplayRow, ...]:
        snap = self._snapshot
        return render_rows(self._state, snap.source, snap.visible_ranges, snap.gaps)

    def recompute(self, code: str | None = None, options: DisplayOptions | None = None) -> None:
        """Replace the session snapshot and reset the view state.

        Omitted arguments keep their current values.
        """
        snap = self._snapshot
        source = snap.source if code is None else SourceText.from_code(code)
        self._snapshot = ViewSnapshot.build(source, snap.options if options is None else options)
        self._state = initial_state(self._snapshot.source, self._snapshot.options, self._snapshot.gaps)
        self._rows = self._render()
        logger.debug(
            "recomputed view: %d lines, %d visible range(s), %d gap(s), state=%s",
            self._snapshot.source.line_count,
            len(self._snapshot.visible_ranges),
            len(self._snapshot.gaps),
            self._state.value,
        )

    def toggle(self) -> ViewState:
        """Flip between collapsed and expanded; no-op when not collapsible."""
        if not self._snapshot.collapsible:
            return self._state
        self._state = self._state.toggled()
        self._rows = self._render()
        logger.debug("toggled view to %s", self._state.value)
        return self._state

    def expand(self) -> ViewState:
        """Reveal every line, as a click on a gap placeholder does."""
        if self._snapshot.collapsible and self._state is not ViewState.EXPANDED:
            self._state = ViewState.EXPANDED
            self._rows = self._render()
            logger.debug("expanded view")
        return self._state

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def rows(self) -> tuple[DisplayRow, ...]:
        return self._rows

    @property
    def source(self) -> SourceText:
        return self._snapshot.source

    @property
    def options(self) -> DisplayOptions:
        return self._snapshot.options

    @property
    def visible_ranges(self) -> tuple[VisibleRange, ...]:
        return self._snapshot.visible_ranges

    @property
    def gaps(self) -> tuple[HiddenGap, ...]:
        return self._snapshot.gaps

    @property
    def is_collapsible(self) -> bool:
        return self._snapshot.collapsible

    @property
    def hidden_line_count(self) -> int:
        if self._state is ViewState.EXPANDED:
            return 0
        return sum(gap.hidden_count for gap in self._snapshot.gaps)

    @property
    def toggle_label(self) -> str:
        if self._state is ViewState.COLLAPSED:
            return SHOW_FULL_CODE_LABEL
        return SHOW_LESS_LABEL
