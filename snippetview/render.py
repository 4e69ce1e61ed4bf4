"""Terminal rendering of display rows.

Rows get a right-aligned gutter of true source line numbers, a separator,
and the line text. Gap rows render as a dimmed placeholder naming the hidden
span. Highlighted text is looked up by source line number, so the same
highlighter output serves both collapsed and expanded views.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from .ansi import apply_background, clip_ansi_line
from .rows import CodeRow, DisplayRow, gap_label, gutter_label
from . import syntax
from .syntax import DEFAULT_STYLE, sanitize_terminal_text
from .view_state import CodeBlockView

GUTTER_SEPARATOR = " │ "
_DIM_SGR = "2;38;5;245"


def gutter_width(rows: Sequence[DisplayRow]) -> int:
    widest = 0
    for row in rows:
        widest = max(widest, len(gutter_label(row)))
    return widest


def format_rows(
    rows: Sequence[DisplayRow],
    line_texts: Sequence[str] | None = None,
    show_line_numbers: bool = True,
    highlight_lines: Collection[int] = (),
    no_color: bool = False,
    max_cols: int | None = None,
) -> list[str]:
    """Format rows into terminal strings, one per row.

    ``line_texts`` optionally supplies pre-highlighted text indexed by
    ``line_number - 1``; code rows fall back to their own sanitized text.
    """
    width = gutter_width(rows) if show_line_numbers else 0
    highlighted = set(highlight_lines)
    out: list[str] = []
    for row in rows:
        gutter = ""
        if show_line_numbers:
            gutter = f"{gutter_label(row):>{width}}{GUTTER_SEPARATOR}"

        if isinstance(row, CodeRow):
            if line_texts is not None and 0 < row.line_number <= len(line_texts):
                text = line_texts[row.line_number - 1]
            else:
                text = sanitize_terminal_text(row.text)
            if row.line_number in highlighted:
                text = f"> {text}" if no_color else apply_background(text)
        else:
            text = f"{gap_label(row)} ({row.first_hidden}-{row.last_hidden})"
            if not no_color:
                text = f"\033[{_DIM_SGR}m{text}\033[0m"

        line = f"{gutter}{text}"
        if max_cols is not None:
            line = clip_ansi_line(line, max_cols)
        if not no_color and "\033" in line:
            line += "\033[0m"
        out.append(line)
    return out


def render_block(
    view: CodeBlockView,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
    max_cols: int | None = None,
    show_line_numbers: bool | None = None,
) -> str:
    """Render the current rows of ``view`` as newline-terminated text."""
    options = view.options
    line_texts = None
    if not no_color:
        line_texts = syntax.highlight_lines(
            view.source.lines,
            language=options.language,
            filename=options.filename,
            style=style,
        )
    if show_line_numbers is None:
        show_line_numbers = options.show_line_numbers
    formatted = format_rows(
        view.rows,
        line_texts=line_texts,
        show_line_numbers=show_line_numbers,
        highlight_lines=options.highlight_lines,
        no_color=no_color,
        max_cols=max_cols,
    )
    return "".join(f"{line}\n" for line in formatted)
