"""Persistent JSON config helpers.

Stores the default pygments style, range merge tolerance and line-number
preference. All access is defensive: malformed or missing config falls back
safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .syntax import DEFAULT_STYLE

logger = logging.getLogger(__name__)

APP_NAME = "snippetview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks rendering.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_style() -> str:
    """Return the persisted pygments style name, or the default."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE


def save_style(style: str) -> None:
    stripped = str(style).strip()
    if not stripped:
        return
    config = load_config()
    config["style"] = stripped
    save_config(config)


def load_merge_tolerance() -> int:
    """Return the persisted merge tolerance.

    Booleans, non-integers and negatives are treated as invalid and become
    ``0``.
    """
    value = load_config().get("merge_tolerance")
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)


def save_merge_tolerance(tolerance: int) -> None:
    config = load_config()
    config["merge_tolerance"] = max(0, int(tolerance))
    save_config(config)


def load_show_line_numbers() -> bool:
    """Return persisted line-number preference; defaults to ``True``."""
    value = load_config().get("show_line_numbers")
    return value if isinstance(value, bool) else True


def save_show_line_numbers(show_line_numbers: bool) -> None:
    config = load_config()
    config["show_line_numbers"] = bool(show_line_numbers)
    save_config(config)
