"""Extract fenced code blocks and their display metadata from markdown.

Two fence forms are recognized::

    ```csharp{
    title: "Retry policy"
    showLinesOnly: [1, 2, 3, 8, 9]
    }
    ...code...
    ```

    ```python
    ...code...
    ```

Each block is replaced by a ``[CODE_BLOCK_n]`` placeholder so the caller can
render the surrounding prose and the blocks separately. Mermaid blocks are
left in place for a diagram renderer.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from .options import DisplayOptions

logger = logging.getLogger(__name__)

_META_BLOCK_RE = re.compile(r"```(\w+)\{([^}]*)\}([\s\S]*?)```")
_PLAIN_BLOCK_RE = re.compile(r"```(\w+)?\n([\s\S]*?)```")
SKIPPED_LANGUAGES = frozenset({"mermaid"})
PLACEHOLDER_RE = re.compile(r"\[CODE_BLOCK_\d+\]")


def placeholder_for(index: int) -> str:
    return f"[CODE_BLOCK_{index}]"


@dataclass
class CodeBlock:
    code: str
    placeholder: str
    metadata: dict[str, object] = field(default_factory=dict)

    @property
    def language(self) -> str | None:
        value = self.metadata.get("language")
        return value if isinstance(value, str) else None

    def display_options(self) -> DisplayOptions:
        return DisplayOptions.from_mapping(self.metadata)


def _parse_value(raw: str) -> object:
    value = raw.strip()
    if value.startswith("[") and value.endswith("]"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return [part.strip().replace('"', "") for part in value[1:-1].split(",")]
    unquoted = re.sub(r"^[\"']|[\"']$", "", value)
    lowered = unquoted.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return unquoted


def parse_metadata(metadata_string: str, show_line_numbers_default: bool = True) -> dict[str, object]:
    """Parse the ``{...}`` body of a fence into a metadata mapping.

    A body that is a JSON object's members is taken as JSON; otherwise each
    non-empty ``key: value`` line becomes one entry and lines without a
    colon are skipped. ``showLineNumbers`` falls back to
    ``show_line_numbers_default`` and ``showCopyButton`` defaults to true.
    """
    metadata: dict[str, object] = {}
    try:
        loaded = json.loads("{" + metadata_string + "}")
    except json.JSONDecodeError:
        loaded = None

    if isinstance(loaded, dict):
        metadata.update(loaded)
    else:
        for raw_line in metadata_string.split("\n"):
            line = raw_line.strip()
            colon_index = line.find(":")
            if colon_index == -1:
                continue
            key = line[:colon_index].strip().replace('"', "")
            if not key:
                continue
            metadata[key] = _parse_value(line[colon_index + 1 :])

    if not isinstance(metadata.get("showLineNumbers"), bool):
        metadata["showLineNumbers"] = show_line_numbers_default
    metadata["showCopyButton"] = metadata.get("showCopyButton") is not False
    return metadata


def parse_code_blocks(content: str, show_line_numbers_default: bool = True) -> tuple[str, list[CodeBlock]]:
    """Replace fenced code blocks with placeholders.

    Returns the processed document and the blocks in placeholder order:
    metadata fences first, then plain fences. Blocks that do not set
    ``showLineNumbers`` themselves use ``show_line_numbers_default``.
    """
    blocks: list[CodeBlock] = []

    def _replace_meta(match: re.Match[str]) -> str:
        metadata = parse_metadata(match.group(2), show_line_numbers_default)
        metadata.setdefault("language", match.group(1))
        show_lines = metadata.get("showLinesOnly")
        if isinstance(show_lines, list) and show_lines:
            metadata["collapsible"] = True
        placeholder = placeholder_for(len(blocks))
        blocks.append(CodeBlock(code=match.group(3).strip(), placeholder=placeholder, metadata=metadata))
        return placeholder

    def _replace_plain(match: re.Match[str]) -> str:
        language = match.group(1) or "text"
        if language in SKIPPED_LANGUAGES:
            return match.group(0)
        metadata: dict[str, object] = {
            "language": language,
            "showLineNumbers": show_line_numbers_default,
            "showCopyButton": True,
            "collapsible": False,
        }
        placeholder = placeholder_for(len(blocks))
        blocks.append(CodeBlock(code=match.group(2).strip(), placeholder=placeholder, metadata=metadata))
        return placeholder

    processed = _META_BLOCK_RE.sub(_replace_meta, content)
    processed = _PLAIN_BLOCK_RE.sub(_replace_plain, processed)
    logger.debug("extracted %d code block(s)", len(blocks))
    return processed, blocks


def fill_placeholders(processed: str, rendered: Mapping[str, str]) -> str:
    """Substitute every placeholder in one pass.

    Rendered block text is never rescanned, so a block that itself mentions
    ``[CODE_BLOCK_n]`` stays intact. Unknown placeholders are left as-is.
    """
    return PLACEHOLDER_RE.sub(lambda match: rendered.get(match.group(0), match.group(0)), processed)
