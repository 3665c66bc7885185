"""Persistent JSON config helpers.

Stores default color mode, short-form layout, recursion depth cap and palette
overrides. All access is defensive: malformed or missing config falls back to
defaults.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .colors import DEFAULT_PALETTE, Palette, palette_with_overrides
from .flags import COLOR_CHOICES

APP_NAME = "dirlist"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_COLOR_MODE = "auto"


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


def load_color_mode(config: dict[str, object] | None = None) -> str:
    """Return ``auto``, ``always`` or ``never``; anything else means ``auto``."""
    data = load_config() if config is None else config
    value = data.get("color")
    return value if isinstance(value, str) and value in COLOR_CHOICES else DEFAULT_COLOR_MODE


def load_compact(config: dict[str, object] | None = None) -> bool:
    """Return whether the short form joins names on one line.

    Only explicit boolean values are accepted.
    """
    data = load_config() if config is None else config
    value = data.get("compact")
    return value if isinstance(value, bool) else False


def load_max_depth(config: dict[str, object] | None = None) -> int | None:
    """Return the recursion depth cap, or ``None`` for unlimited.

    Booleans, non-integers and values below one are ignored.
    """
    data = load_config() if config is None else config
    value = data.get("max_depth")
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return None
    return value


def load_palette(config: dict[str, object] | None = None) -> Palette:
    """Return the default palette with any valid configured overrides applied."""
    data = load_config() if config is None else config
    value = data.get("palette")
    if not isinstance(value, dict):
        return DEFAULT_PALETTE
    return palette_with_overrides(value)


__all__ = [
    "CONFIG_PATH",
    "load_color_mode",
    "load_compact",
    "load_config",
    "load_max_depth",
    "load_palette",
]
