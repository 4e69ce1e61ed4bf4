"""Display options for one code-block session.

Options are frozen: changing any of them means building a new
``DisplayOptions`` and recomputing the session from scratch.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass


def coerce_line_numbers(value: object) -> tuple[int, ...]:
    """Normalize a raw ``showLinesOnly``/``highlightLines`` value.

    Accepts any iterable of integers or integer-like strings. Booleans and
    entries that are not integers are dropped; ``None`` and scalars yield an
    empty tuple. Order and duplicates are kept (selection dedupes later).
    """
    if value is None or isinstance(value, (str, bytes, Mapping)):
        return ()
    if not isinstance(value, Iterable):
        return ()

    numbers: list[int] = []
    for item in value:
        if isinstance(item, bool):
            continue
        if isinstance(item, int):
            numbers.append(item)
            continue
        if isinstance(item, str):
            stripped = item.strip()
            try:
                numbers.append(int(stripped))
            except ValueError:
                continue
    return tuple(numbers)


def _coerce_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return default


def _coerce_nonnegative_int(value: object) -> int:
    """Accept ints and integer-like strings; anything else becomes ``0``."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return 0
    if not isinstance(value, int):
        return 0
    return max(0, value)


def _coerce_optional_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class DisplayOptions:
    show_lines_only: tuple[int, ...] = ()
    collapsible: bool = False
    show_line_numbers: bool = False
    highlight_lines: tuple[int, ...] = ()
    merge_tolerance: int = 0
    title: str | None = None
    filename: str | None = None
    language: str | None = None
    framework: str | None = None
    difficulty: str | None = None
    description: str | None = None
    tags: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "DisplayOptions":
        """Build options from a camelCase metadata mapping.

        Unknown keys are ignored and malformed values fall back to defaults,
        since the mapping usually comes from hand-written documentation.
        """
        raw_tags = data.get("tags")
        tags: tuple[str, ...] = ()
        if isinstance(raw_tags, (list, tuple)):
            tags = tuple(str(tag) for tag in raw_tags)
        return cls(
            show_lines_only=coerce_line_numbers(data.get("showLinesOnly")),
            collapsible=_coerce_bool(data.get("collapsible"), False),
            show_line_numbers=_coerce_bool(data.get("showLineNumbers"), False),
            highlight_lines=coerce_line_numbers(data.get("highlightLines")),
            merge_tolerance=_coerce_nonnegative_int(data.get("mergeTolerance")),
            title=_coerce_optional_str(data.get("title")),
            filename=_coerce_optional_str(data.get("filename")),
            language=_coerce_optional_str(data.get("language")),
            framework=_coerce_optional_str(data.get("framework")),
            difficulty=_coerce_optional_str(data.get("difficulty")),
            description=_coerce_optional_str(data.get("description")),
            tags=tags,
        )
