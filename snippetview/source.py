"""Immutable source-text snapshot for one display session.

Lines are 1-indexed and never mutated after construction; every view
references them by line number.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def split_source_lines(code: str) -> tuple[str, ...]:
    """Split raw code on ``\\n`` into a tuple of lines.

    Empty trailing lines are kept as lines and line content is never trimmed.
    The empty string has zero lines.
    """
    if not code:
        return ()
    return tuple(code.split("\n"))


@dataclass(frozen=True)
class SourceText:
    code: str
    lines: tuple[str, ...]

    @classmethod
    def from_code(cls, code: str) -> "SourceText":
        return cls(code=code, lines=split_source_lines(code))

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def line(self, line_number: int) -> str:
        """Return the text of 1-based ``line_number``."""
        if line_number < 1 or line_number > len(self.lines):
            raise IndexError(f"line {line_number} outside 1..{len(self.lines)}")
        return self.lines[line_number - 1]
