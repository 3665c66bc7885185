"""Filesystem scanning into normalized ``Entry`` records.

Directory reads go through one ``os.scandir`` handle that is drained and
closed before returning. Symlink targets are read and stat'ed best-effort;
only the directory read itself and direct path stats can fail the caller.
"""

from __future__ import annotations

import os
import stat

from .entry import Entry
from .errors import listing_error_from_os_error

SELF_NAME = "."
PARENT_NAME = ".."


def placeholder_entry(name: str, full_path: str) -> Entry:
    """Return an entry standing in for metadata that could not be read."""
    return Entry(name=name, full_path=full_path, mode=0, known=False)


def _symlink_details(path: str) -> tuple[str, int | None]:
    """Return ``(link_target, target_mode)`` for the symlink at ``path``.

    An unreadable link yields an empty target; a dangling or inaccessible
    target yields ``None`` for its mode.
    """
    try:
        target = os.readlink(path)
    except OSError:
        target = ""
    try:
        target_mode: int | None = int(os.stat(path).st_mode)
    except OSError:
        target_mode = None
    return target, target_mode


def entry_from_lstat(name: str, full_path: str, st: os.stat_result) -> Entry:
    """Build an entry from an ``lstat`` result, resolving symlink details."""
    if stat.S_ISLNK(st.st_mode):
        link_target, target_mode = _symlink_details(full_path)
        return Entry.from_stat(name, full_path, st, link_target=link_target, target_mode=target_mode)
    return Entry.from_stat(name, full_path, st)


def stat_entry(path: str) -> Entry:
    """Build one entry from a direct ``lstat`` of ``path``.

    Raises the mapped ``ListingError`` when the path cannot be stat'ed.
    """
    try:
        st = os.lstat(path)
    except OSError as exc:
        raise listing_error_from_os_error(path, exc) from exc
    name = os.path.basename(os.path.normpath(path)) or path
    return entry_from_lstat(name, path, st)


def _synthetic_entry(name: str, full_path: str) -> Entry:
    """Build the ``.`` or ``..`` entry, falling back to a placeholder."""
    try:
        st = os.stat(full_path)
    except OSError:
        return placeholder_entry(name, full_path)
    return Entry.from_stat(name, full_path, st)


def list_directory(directory: str, show_all: bool) -> list[Entry]:
    """List the entries of ``directory`` in filesystem order.

    Dot-prefixed names are skipped unless ``show_all`` is set, in which case
    the synthetic ``.`` and ``..`` entries are included as well. A child that
    disappears between the read and its stat is kept as a placeholder.
    """
    entries: list[Entry] = []
    if show_all:
        entries.append(_synthetic_entry(SELF_NAME, directory))
        entries.append(_synthetic_entry(PARENT_NAME, os.path.join(directory, PARENT_NAME)))

    try:
        with os.scandir(directory) as children:
            for child in children:
                name = child.name
                if not show_all and name.startswith("."):
                    continue
                full_path = os.path.join(directory, name)
                try:
                    st = child.stat(follow_symlinks=False)
                except OSError:
                    entries.append(placeholder_entry(name, full_path))
                    continue
                entries.append(entry_from_lstat(name, full_path, st))
    except OSError as exc:
        raise listing_error_from_os_error(directory, exc) from exc
    return entries


__all__ = [
    "PARENT_NAME",
    "SELF_NAME",
    "entry_from_lstat",
    "list_directory",
    "placeholder_entry",
    "stat_entry",
]
