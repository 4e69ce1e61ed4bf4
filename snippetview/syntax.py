"""Per-line syntax highlighting and terminal sanitization.

Highlighting runs over the whole source so multi-line tokens keep their
colors, then is split back into one string per source line. The result is
indexed by source line number and knows nothing about collapse state.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")
_FORMATTERS: dict[str, TerminalFormatter] = {}
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()


def sanitize_terminal_text(text: str) -> str:
    """Escape control bytes in one row (bell, cursor moves, CR, etc.).

    Tabs are kept; everything else in C0, DEL and C1 becomes ``\\xNN``.
    """
    if _CONTROL_RE.search(text) is None:
        return text

    out: list[str] = []
    for ch in text:
        code = ord(ch)
        if ch == "\t":
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str) -> str:
    """Return ``style`` when pygments knows it, else the default style."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        _INVALID_STYLES.add(style)
        logger.debug("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def lexer_for(language: str | None, filename: str | None, source: str) -> Lexer:
    """Pick a lexer by language name, then by filename, then plain text."""
    options = {"stripnl": False, "ensurenl": True}
    if language:
        try:
            return get_lexer_by_name(language, **options)
        except ClassNotFound:
            logger.debug("no lexer for language %r", language)
    if filename:
        try:
            return get_lexer_for_filename(filename, source, **options)
        except ClassNotFound:
            logger.debug("no lexer for filename %r", filename)
    return TextLexer(**options)


def highlight_lines(
    lines: Sequence[str],
    language: str | None = None,
    filename: str | None = None,
    style: str = DEFAULT_STYLE,
) -> list[str] | None:
    """Return one ANSI-highlighted string per source line.

    Returns ``None`` when the highlighted output does not line up with
    ``lines`` one-to-one (for example sources containing bare ``\\r``), so
    callers can fall back to plain text.
    """
    if not lines:
        return []

    sanitized = [sanitize_terminal_text(line) for line in lines]
    source = "\n".join(sanitized) + "\n"
    lexer = lexer_for(language, filename, source)
    formatter = _formatter_for_style(normalize_style(style))
    rendered = highlight(source, lexer, formatter)

    out = rendered.split("\n")
    if out and out[-1] == "":
        out.pop()
    if len(out) != len(lines):
        logger.debug("highlighted output has %d lines, expected %d", len(out), len(lines))
        return None
    return out
