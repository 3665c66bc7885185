"""Fatal listing errors raised by metadata lookups and directory reads.

Each error carries the offending path plus a short human-readable reason.
The CLI turns them into one diagnostic line and a non-zero exit status.
"""

from __future__ import annotations

import errno


class ListingError(Exception):
    """Base class for errors that abort a listing run."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot access '{path}': {reason}")
        self.path = path
        self.reason = reason


class PathNotFoundError(ListingError):
    """The path (or a component of it) does not exist."""


class PathPermissionError(ListingError):
    """The caller may not stat or read the path."""


class PathIOError(ListingError):
    """Any other operating-system failure while touching the path."""


def listing_error_from_os_error(path: str, exc: OSError) -> ListingError:
    """Map an ``OSError`` raised for ``path`` onto the listing error taxonomy."""
    reason = exc.strerror or str(exc)
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)) or exc.errno == errno.ENOENT:
        return PathNotFoundError(path, reason)
    if isinstance(exc, PermissionError):
        return PathPermissionError(path, reason)
    return PathIOError(path, reason)


__all__ = [
    "ListingError",
    "PathNotFoundError",
    "PathPermissionError",
    "PathIOError",
    "listing_error_from_os_error",
]
