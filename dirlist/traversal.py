"""Turn target paths into rendered listing blocks.

Each top-level directory (and, with ``recursive``, each subdirectory below it)
becomes one block: an optional ``path:`` header plus the rendered entries.
Non-directory targets become header-less single-entry blocks. Subdirectories
are visited depth-first in display order using an explicit stack, and
directory symlinks are never descended into.
"""

from __future__ import annotations

import os
import stat
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TextIO

from .errors import listing_error_from_os_error
from .flags import ListingFlags
from .identity import IdentityCache
from .metadata import PARENT_NAME, SELF_NAME, list_directory, stat_entry
from .render import RenderOptions, render_entries
from .sorting import order_entries

CURRENT_DIRECTORY = "."


@dataclass(frozen=True)
class ListingBlock:
    """Rendered output for one visited directory or one non-directory target."""

    header: str | None
    lines: tuple[str, ...]

    def output_lines(self) -> list[str]:
        if self.header is None:
            return list(self.lines)
        return [f"{self.header}:", *self.lines]


def _is_directory_target(path: str) -> bool:
    """Stat ``path`` following symlinks and report whether it is a directory.

    A dangling symlink is still listable as itself, so it counts as a
    non-directory target. Every other stat failure is fatal.
    """
    try:
        st = os.stat(path)
    except OSError as exc:
        try:
            link_st = os.lstat(path)
        except OSError:
            raise listing_error_from_os_error(path, exc) from exc
        if stat.S_ISLNK(link_st.st_mode):
            return False
        raise listing_error_from_os_error(path, exc) from exc
    return stat.S_ISDIR(st.st_mode)


def wants_headers(paths: Sequence[str], flags: ListingFlags) -> bool:
    """Return whether top-level directory blocks carry a ``path:`` header."""
    if len(paths) > 1 or flags.recursive:
        return True
    return bool(paths) and paths[0] != CURRENT_DIRECTORY


def _walk_directory(
    root: str,
    flags: ListingFlags,
    options: RenderOptions,
    identities: IdentityCache,
    show_header: bool,
    max_depth: int | None,
    now: float | None,
) -> Iterator[ListingBlock]:
    """Yield blocks for ``root`` and, when recursive, its subdirectories in pre-order."""
    stack: list[tuple[str, int]] = [(root, 0)]
    while stack:
        directory, depth = stack.pop()
        entries = order_entries(list_directory(directory, flags.show_all), flags)
        header = directory if (show_header or depth > 0) else None
        yield ListingBlock(header, tuple(render_entries(entries, flags, options, identities, now)))

        if not flags.recursive or (max_depth is not None and depth >= max_depth):
            continue
        children = [
            entry.full_path
            for entry in entries
            if entry.is_dir and entry.name not in (SELF_NAME, PARENT_NAME)
        ]
        stack.extend((child, depth + 1) for child in reversed(children))


def iter_listing_blocks(
    paths: Sequence[str],
    flags: ListingFlags,
    options: RenderOptions | None = None,
    identities: IdentityCache | None = None,
    max_depth: int | None = None,
    now: float | None = None,
) -> Iterator[ListingBlock]:
    """Yield listing blocks for ``paths`` in order.

    The first fatal ``ListingError`` propagates out of the iterator; blocks
    produced before it remain valid.
    """
    options = options or RenderOptions()
    identities = identities or IdentityCache()
    show_header = wants_headers(paths, flags)

    for path in paths:
        if _is_directory_target(path):
            yield from _walk_directory(path, flags, options, identities, show_header, max_depth, now)
            continue
        entry = stat_entry(path)
        yield ListingBlock(None, tuple(render_entries([entry], flags, options, identities, now)))


def run(
    paths: Sequence[str],
    flags: ListingFlags,
    out: TextIO,
    options: RenderOptions | None = None,
    identities: IdentityCache | None = None,
    max_depth: int | None = None,
    now: float | None = None,
) -> None:
    """Write every listing block to ``out``, separated by blank lines."""
    blocks = iter_listing_blocks(paths, flags, options, identities, max_depth, now)
    for index, block in enumerate(blocks):
        if index:
            out.write("\n")
        for line in block.output_lines():
            out.write(f"{line}\n")


__all__ = [
    "ListingBlock",
    "iter_listing_blocks",
    "run",
    "wants_headers",
]
