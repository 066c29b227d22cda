"""Persistent JSON config helpers.

Stores the annotation side-file location, UI theme, highlight style and
hidden-entry preference. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir, user_log_dir

APP_NAME = "nershell"
CONFIG_FILENAME = "config.json"
ANNOTATIONS_FILENAME = "annotations.json"
LOG_FILENAME = "nershell.log"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_ANNOTATIONS_PATH = Path(user_data_dir(APP_NAME, appauthor=False)) / ANNOTATIONS_FILENAME
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored to keep runtime behavior non-fatal when
    config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _save_string(key: str, value: str) -> None:
    stripped = str(value).strip()
    if not stripped:
        return
    config = load_config()
    config[key] = stripped
    save_config(config)


def load_annotations_path() -> Path:
    """Return the configured annotation side-file, or the per-user default."""
    value = _load_string("annotations_file")
    if value is None:
        return DEFAULT_ANNOTATIONS_PATH
    return Path(value).expanduser()


def save_annotations_path(path: Path) -> None:
    _save_string("annotations_file", str(path))


def load_show_hidden() -> bool:
    """Return persisted hidden-entry visibility preference.

    Only explicit boolean values are accepted; anything else falls back to
    ``True`` so every entry gets a number by default.
    """
    value = load_config().get("show_hidden")
    return value if isinstance(value, bool) else True


def save_show_hidden(show_hidden: bool) -> None:
    config = load_config()
    config["show_hidden"] = bool(show_hidden)
    save_config(config)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def save_theme_name(theme_name: str) -> None:
    _save_string("theme", theme_name)


def load_style_name() -> str | None:
    """Load persisted Pygments style name for ``visu``."""
    return _load_string("style")


def save_style_name(style_name: str) -> None:
    _save_string("style", style_name)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_ANNOTATIONS_PATH",
    "DEFAULT_LOG_PATH",
    "load_config",
    "save_config",
    "load_annotations_path",
    "save_annotations_path",
    "load_show_hidden",
    "save_show_hidden",
    "load_theme_name",
    "save_theme_name",
    "load_style_name",
    "save_style_name",
]
