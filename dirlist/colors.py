"""Stateless file-kind to ANSI color lookup.

Colors are named with ``pygments.console`` attribute strings (``"*blue*"`` is
bold blue), which also produces the escape sequences. Plain files, pipes and
sockets stay uncolored.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass, fields, replace

from pygments.console import ansiformat, codes

from .entry import FileKind, kind_for_mode


@dataclass(frozen=True)
class Palette:
    """Color attribute per colored file category."""

    symlink: str = "*cyan*"
    directory: str = "*blue*"
    device: str = "*yellow*"
    executable: str = "*green*"


DEFAULT_PALETTE = Palette()


def is_valid_color(attr: str) -> bool:
    """Return whether ``attr`` is a color attribute ``ansiformat`` accepts."""
    for marker in ("+", "*", "_"):
        if len(attr) > 2 and attr[:1] == attr[-1:] == marker:
            attr = attr[1:-1]
    return bool(attr) and attr in codes


def palette_with_overrides(overrides: dict[str, object], base: Palette = DEFAULT_PALETTE) -> Palette:
    """Apply valid ``category -> color`` overrides on top of ``base``.

    Unknown categories and unsupported color names are dropped.
    """
    known = {f.name for f in fields(Palette)}
    accepted = {
        key: value
        for key, value in overrides.items()
        if key in known and isinstance(value, str) and is_valid_color(value)
    }
    return replace(base, **accepted) if accepted else base


def color_for_mode(mode: int, palette: Palette = DEFAULT_PALETTE) -> str | None:
    """Return the color attribute for ``mode`` or ``None`` for no color."""
    kind = kind_for_mode(mode)
    if kind is FileKind.SYMLINK:
        return palette.symlink
    if kind is FileKind.DIRECTORY:
        return palette.directory
    if kind in (FileKind.BLOCK_DEVICE, FileKind.CHAR_DEVICE):
        return palette.device
    if kind is FileKind.REGULAR and mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH):
        return palette.executable
    return None


def colorize(name: str, mode: int | None, palette: Palette = DEFAULT_PALETTE, enabled: bool = True) -> str:
    """Wrap ``name`` in the escape sequences for ``mode``.

    ``mode=None`` (unknown metadata) and ``enabled=False`` leave the name as-is.
    """
    if not enabled or mode is None:
        return name
    attr = color_for_mode(mode, palette)
    if attr is None:
        return name
    return ansiformat(attr, name)


__all__ = [
    "DEFAULT_PALETTE",
    "Palette",
    "color_for_mode",
    "colorize",
    "is_valid_color",
    "palette_with_overrides",
]
