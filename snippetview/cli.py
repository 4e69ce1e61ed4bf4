"""Command-line front door for snippetview.

Renders a source file (or every code block of a markdown document) to the
terminal, showing only selected lines with the rest collapsed into gaps.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from . import config
from .markdown_blocks import fill_placeholders, parse_code_blocks
from .options import DisplayOptions
from .render import render_block
from .selection import parse_line_spec
from .source import read_text
from .view_state import CodeBlockView

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_int(value: str) -> int:
    """argparse type for integer values >= 0."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _line_spec(value: str) -> list[int]:
    """argparse type for line lists such as ``1-3,8,12-13``."""
    try:
        return parse_line_spec(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid line list: {value!r}") from exc


def _default_render_width() -> int:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def normalize_file_source(source: str) -> str:
    """Convert CRLF to LF and drop the final line terminator of a file."""
    source = source.replace("\r\n", "\n")
    if source.endswith("\n"):
        source = source[:-1]
    return source


def block_header(options: DisplayOptions) -> str | None:
    parts = [part for part in (options.title, options.filename) if part]
    if not parts:
        return None
    label = " · ".join(parts)
    if options.language:
        label = f"{label} [{options.language}]"
    return label


def render_view(
    view: CodeBlockView,
    style: str,
    no_color: bool,
    max_cols: int,
    show_line_numbers: bool | None,
) -> str:
    out: list[str] = []
    header = block_header(view.options)
    if header:
        out.append(f"{header}\n")
    out.append(render_block(view, style=style, no_color=no_color, max_cols=max_cols, show_line_numbers=show_line_numbers))
    if view.is_collapsible:
        out.append(f"[{view.toggle_label}]\n")
    return "".join(out)


def render_markdown(
    document: str,
    style: str,
    no_color: bool,
    max_cols: int,
    expanded: bool,
    merge_tolerance: int,
    show_line_numbers: bool = True,
    force_line_numbers: bool = False,
) -> str:
    """Render prose verbatim and every code block through a view session.

    ``show_line_numbers`` is the default for blocks that do not set
    ``showLineNumbers``; with ``force_line_numbers`` it applies to every block.
    """
    processed, blocks = parse_code_blocks(document, show_line_numbers_default=show_line_numbers)
    rendered_blocks: dict[str, str] = {}
    for block in blocks:
        metadata = dict(block.metadata)
        metadata.setdefault("mergeTolerance", merge_tolerance)
        view = CodeBlockView(block.code, DisplayOptions.from_mapping(metadata))
        if expanded:
            view.expand()
        block_line_numbers = show_line_numbers if force_line_numbers else None
        rendered = render_view(view, style, no_color, max_cols, show_line_numbers=block_line_numbers)
        rendered_blocks[block.placeholder] = rendered.rstrip("\n")
    processed = fill_placeholders(processed, rendered_blocks)
    return processed if processed.endswith("\n") else f"{processed}\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snippetview",
        description="Show selected lines of a source file with the rest collapsed into gaps.",
    )
    parser.add_argument("path", help="Source file, or markdown document with --markdown.")
    parser.add_argument("--lines", type=_line_spec, default=None, help="Visible lines, e.g. 1-3,8,12-13.")
    parser.add_argument("--highlight", type=_line_spec, default=None, help="Lines to emphasize.")
    parser.add_argument("--expanded", action="store_true", help="Start expanded instead of collapsed.")
    parser.add_argument("--language", default=None, help="Pygments lexer name (default: guess from filename).")
    parser.add_argument("--title", default=None, help="Title shown above the block.")
    parser.add_argument("--style", default=None, help="Pygments style name.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    numbers = parser.add_mutually_exclusive_group()
    numbers.add_argument("--line-numbers", dest="line_numbers", action="store_true", default=None)
    numbers.add_argument("--no-line-numbers", dest="line_numbers", action="store_false")
    parser.add_argument(
        "--merge-tolerance",
        type=_nonnegative_int,
        default=None,
        help="Also merge requested lines separated by up to N hidden lines.",
    )
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for output (default: terminal width).",
    )
    parser.add_argument("--markdown", action="store_true", help="Render every code block of a markdown file.")
    parser.add_argument("--save-defaults", action="store_true", help="Persist style, tolerance and line numbers.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and render the requested file to stdout."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")

    style = args.style if args.style is not None else config.load_style()
    merge_tolerance = args.merge_tolerance if args.merge_tolerance is not None else config.load_merge_tolerance()
    show_line_numbers = args.line_numbers if args.line_numbers is not None else config.load_show_line_numbers()
    max_cols = args.max_cols if args.max_cols is not None else _default_render_width()

    if args.save_defaults:
        config.save_style(style)
        config.save_merge_tolerance(merge_tolerance)
        config.save_show_line_numbers(show_line_numbers)

    source = read_text(path)
    if args.markdown:
        rendered = render_markdown(
            source,
            style,
            args.no_color,
            max_cols,
            args.expanded,
            merge_tolerance,
            show_line_numbers=show_line_numbers,
            force_line_numbers=args.line_numbers is not None,
        )
        sys.stdout.write(rendered)
        return

    options = DisplayOptions(
        show_lines_only=tuple(args.lines or ()),
        collapsible=bool(args.lines),
        show_line_numbers=show_line_numbers,
        highlight_lines=tuple(args.highlight or ()),
        merge_tolerance=merge_tolerance,
        title=args.title,
        filename=path.name,
        language=args.language,
    )
    view = CodeBlockView(normalize_file_source(source), options)
    if args.expanded:
        view.expand()
    logger.debug("rendering %s in %s state", path, view.state.value)
    sys.stdout.write(render_view(view, style, args.no_color, max_cols, show_line_numbers))


if __name__ == "__main__":
    main()
