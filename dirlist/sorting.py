"""Entry ordering by name or modification time."""

from __future__ import annotations

from collections.abc import Iterable

from .entry import Entry
from .flags import ListingFlags


def name_sort_key(entry: Entry) -> tuple[str, str]:
    """Case-insensitive name key ignoring one leading dot.

    The raw name breaks ties so names differing only by case still order
    deterministically.
    """
    name = entry.name
    return (name.removeprefix(".").lower(), name)


def time_sort_key(entry: Entry) -> tuple[int, str, str]:
    """Newest-first key with the name key as tie-break."""
    folded, raw = name_sort_key(entry)
    return (-entry.modified_ns, folded, raw)


def order_entries(entries: Iterable[Entry], flags: ListingFlags) -> list[Entry]:
    """Return ``entries`` in display order without touching the input.

    ``reverse`` is applied after the full ordering, so it composes with both
    name and time modes.
    """
    key = time_sort_key if flags.sort_by_time else name_sort_key
    ordered = sorted(entries, key=key)
    if flags.reverse:
        ordered.reverse()
    return ordered


__all__ = [
    "name_sort_key",
    "order_entries",
    "time_sort_key",
]
