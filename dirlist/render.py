"""Short and long listing renderers.

Both renderers take already-ordered entries and return display lines without
trailing newlines. The long form resolves owner/group names through an
``IdentityCache`` and aligns every column to the widest value in the block.
"""

from __future__ import annotations

import calendar
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from .ansi import display_width, pad_left, pad_right
from .colors import DEFAULT_PALETTE, Palette, colorize
from .entry import Entry
from .flags import ListingFlags
from .identity import IdentityCache
from .permissions import UNKNOWN_MODE_STRING, mode_string

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
RECENT_MONTHS = 6
UNKNOWN_FIELD = "?"
COMPACT_SEPARATOR = "  "


@dataclass(frozen=True)
class RenderOptions:
    """Presentation switches that do not affect which entries are listed."""

    color: bool = False
    compact: bool = False
    palette: Palette = DEFAULT_PALETTE


def _months_before(moment: datetime, months: int) -> datetime:
    """Move ``moment`` back by calendar months, clamping to the month's end."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def format_timestamp(modified_at: float, now: float | None = None) -> str:
    """Format a modification time the way ``ls -l`` does.

    Times older than six calendar months before ``now``, or later than
    ``now``, show the year (``Mon DD  YYYY``); all others show the clock time
    (``Mon DD HH:MM``). A time outside the representable calendar range is
    shown as raw epoch seconds.
    """
    current = datetime.fromtimestamp(time.time() if now is None else now)
    try:
        moment = datetime.fromtimestamp(modified_at)
    except (OverflowError, OSError, ValueError):
        return str(int(modified_at))
    month = MONTH_ABBREVIATIONS[moment.month - 1]
    if moment < _months_before(current, RECENT_MONTHS) or moment > current:
        return f"{month} {moment.day:>2}  {moment.year}"
    return f"{month} {moment.day:>2} {moment.hour:02d}:{moment.minute:02d}"


def total_blocks(entries: Sequence[Entry]) -> int:
    """Sum of on-disk usage in 1024-byte units for the ``total`` line."""
    return sum(entry.blocks * 512 // 1024 for entry in entries if entry.blocks is not None)


def display_name(entry: Entry, options: RenderOptions) -> str:
    """Return the (possibly colored) name, with ``-> target`` for symlinks."""
    mode = entry.mode if entry.known else None
    name = colorize(entry.name, mode, options.palette, options.color)
    if entry.link_target is None:
        return name
    target = colorize(entry.link_target, entry.target_mode, options.palette, options.color)
    return f"{name} -> {target}"


def render_short(entries: Sequence[Entry], options: RenderOptions) -> list[str]:
    """One name per line, or a single line of names in compact mode."""
    names = [colorize(e.name, e.mode if e.known else None, options.palette, options.color) for e in entries]
    if options.compact:
        return [COMPACT_SEPARATOR.join(names)] if names else []
    return names


def _long_fields(entry: Entry, identities: IdentityCache, now: float | None) -> tuple[str, str, str, str, str, str]:
    if not entry.known:
        return (UNKNOWN_MODE_STRING, UNKNOWN_FIELD, UNKNOWN_FIELD, UNKNOWN_FIELD, UNKNOWN_FIELD, UNKNOWN_FIELD)
    return (
        mode_string(entry.mode),
        str(entry.nlink),
        identities.owner_name(entry.owner_id),
        identities.group_name(entry.group_id),
        str(entry.size),
        format_timestamp(entry.modified_at, now),
    )


def render_long(
    entries: Sequence[Entry],
    options: RenderOptions,
    identities: IdentityCache,
    now: float | None = None,
) -> list[str]:
    """``total`` line followed by one seven-column detail line per entry."""
    rows = [_long_fields(entry, identities, now) for entry in entries]
    lines = [f"total {total_blocks(entries)}"]
    if not rows:
        return lines

    widths = [max(display_width(row[col]) for row in rows) for col in range(6)]
    for entry, (mode, nlink, owner, group, size, stamp) in zip(entries, rows):
        columns = [
            mode,
            pad_left(nlink, widths[1]),
            pad_right(owner, widths[2]),
            pad_right(group, widths[3]),
            pad_left(size, widths[4]),
            pad_left(stamp, widths[5]),
            display_name(entry, options),
        ]
        lines.append(" ".join(columns))
    return lines


def render_entries(
    entries: Sequence[Entry],
    flags: ListingFlags,
    options: RenderOptions,
    identities: IdentityCache,
    now: float | None = None,
) -> list[str]:
    """Render ``entries`` in the form selected by ``flags``."""
    if flags.long_listing:
        return render_long(entries, options, identities, now)
    return render_short(entries, options)


__all__ = [
    "RenderOptions",
    "display_name",
    "format_timestamp",
    "render_entries",
    "render_long",
    "render_short",
    "total_blocks",
]
