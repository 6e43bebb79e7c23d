"""User settings stored as one JSON object in the platform config directory.

Holds the rename-mode flag, bookmarked directories and omit patterns. A
missing, corrupt or unwritable file never breaks a session.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "lazydired"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_OMIT_PATTERNS: tuple[str, ...] = ()


def load_config() -> dict[str, object]:
    """Return the stored settings object, or ``{}`` if there is none usable."""
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Write ``data`` as indented JSON; filesystem errors are dropped."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.debug("could not write %s: %s", CONFIG_PATH, exc)


def load_rename_mode() -> bool:
    """Return the persisted rename-mode flag; only explicit booleans count."""
    value = load_config().get("rename_mode")
    return bool(value) if isinstance(value, bool) else False


def save_rename_mode(on: bool) -> None:
    config = load_config()
    config["rename_mode"] = bool(on)
    save_config(config)


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str) and item]


def load_bookmarks() -> list[Path]:
    """Load bookmarked directories, dropping non-string and duplicate entries."""
    bookmarks: list[Path] = []
    for raw in _string_list(load_config().get("bookmarks")):
        path = Path(raw)
        if path not in bookmarks:
            bookmarks.append(path)
    return bookmarks


def save_bookmarks(bookmarks: list[Path]) -> None:
    serialized: list[str] = []
    for path in bookmarks:
        text = str(path)
        if text not in serialized:
            serialized.append(text)
    config = load_config()
    config["bookmarks"] = serialized
    save_config(config)


def load_omit_patterns() -> list[str]:
    """Load raw omit-pattern strings; compiling them is the caller's job."""
    config = load_config()
    if "omit_patterns" not in config:
        return list(DEFAULT_OMIT_PATTERNS)
    return _string_list(config.get("omit_patterns"))


def save_omit_patterns(patterns: list[str]) -> None:
    config = load_config()
    config["omit_patterns"] = [pattern for pattern in patterns if isinstance(pattern, str) and pattern]
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_OMIT_PATTERNS",
    "load_config",
    "save_config",
    "load_rename_mode",
    "save_rename_mode",
    "load_bookmarks",
    "save_bookmarks",
    "load_omit_patterns",
    "save_omit_patterns",
]
