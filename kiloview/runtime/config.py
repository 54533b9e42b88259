"""Read-only JSON settings for the viewer.

Loads the welcome banner text and the escape-sequence timeout.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..input import ESC_SEQUENCE_TIMEOUT_MS
from ..viewport import DEFAULT_WELCOME_MESSAGE

APP_NAME = "kiloview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
MAX_ESCAPE_TIMEOUT_MS = 1000


@dataclass(frozen=True)
class ViewerSettings:
    welcome_message: str = DEFAULT_WELCOME_MESSAGE
    escape_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def load_welcome_message(config: dict[str, object] | None = None) -> str:
    """Return the configured banner text, or the default when unset/invalid."""
    value = (load_config() if config is None else config).get("welcome_message")
    if not isinstance(value, str):
        return DEFAULT_WELCOME_MESSAGE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_WELCOME_MESSAGE


def load_escape_timeout_ms(config: dict[str, object] | None = None) -> int:
    """Return the escape-sequence wait in milliseconds.

    Booleans, non-integers, and values outside ``[1, MAX_ESCAPE_TIMEOUT_MS]``
    fall back to ``ESC_SEQUENCE_TIMEOUT_MS``.
    """
    value = (load_config() if config is None else config).get("escape_timeout_ms")
    if isinstance(value, bool) or not isinstance(value, int):
        return ESC_SEQUENCE_TIMEOUT_MS
    if value < 1 or value > MAX_ESCAPE_TIMEOUT_MS:
        return ESC_SEQUENCE_TIMEOUT_MS
    return value


def load_viewer_settings() -> ViewerSettings:
    config = load_config()
    return ViewerSettings(
        welcome_message=load_welcome_message(config),
        escape_timeout_ms=load_escape_timeout_ms(config),
    )
