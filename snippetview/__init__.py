"""Selective-line code-block display engine.

Core names are re-exported here; the CLI entrypoint is imported lazily to
keep package imports lightweight.
"""

from __future__ import annotations

from .gaps import HiddenGap, compute_gaps
from .options import DisplayOptions
from .rows import CodeRow, DisplayRow, GapRow, gap_label, gutter_label, hidden_span_of, line_number_of
from .selection import VisibleRange, select_visible
from .source import SourceText
from .view_state import CodeBlockView, ViewState, render_rows


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "CodeBlockView",
    "CodeRow",
    "DisplayOptions",
    "DisplayRow",
    "GapRow",
    "HiddenGap",
    "SourceText",
    "ViewState",
    "VisibleRange",
    "compute_gaps",
    "gap_label",
    "gutter_label",
    "hidden_span_of",
    "line_number_of",
    "main",
    "render_rows",
    "select_visible",
]
