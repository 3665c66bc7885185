"""Domain datatypes for listed filesystem objects."""

from __future__ import annotations

import enum
import os
import stat
from dataclasses import dataclass


class FileKind(enum.Enum):
    """Closed set of file types decoded from ``st_mode``."""

    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    FIFO = "fifo"
    SOCKET = "socket"
    BLOCK_DEVICE = "block_device"
    CHAR_DEVICE = "char_device"
    UNKNOWN = "unknown"


_KIND_BY_FORMAT: dict[int, FileKind] = {
    stat.S_IFREG: FileKind.REGULAR,
    stat.S_IFDIR: FileKind.DIRECTORY,
    stat.S_IFLNK: FileKind.SYMLINK,
    stat.S_IFIFO: FileKind.FIFO,
    stat.S_IFSOCK: FileKind.SOCKET,
    stat.S_IFBLK: FileKind.BLOCK_DEVICE,
    stat.S_IFCHR: FileKind.CHAR_DEVICE,
}


def kind_for_mode(mode: int) -> FileKind:
    """Return the file kind encoded in the type bits of ``mode``."""
    return _KIND_BY_FORMAT.get(stat.S_IFMT(mode), FileKind.UNKNOWN)


@dataclass(frozen=True)
class Entry:
    """One filesystem object as observed by a single ``lstat``.

    ``link_target`` is set only for symlinks (empty when the link could not be
    read). ``target_mode`` is the mode of whatever the link points at, or
    ``None`` when that cannot be stat'ed. ``known`` is ``False`` for the
    placeholder standing in for metadata that could not be read.
    """

    name: str
    full_path: str
    mode: int
    size: int = 0
    modified_ns: int = 0
    owner_id: int = 0
    group_id: int = 0
    nlink: int = 0
    blocks: int | None = None
    link_target: str | None = None
    target_mode: int | None = None
    known: bool = True

    @property
    def kind(self) -> FileKind:
        return kind_for_mode(self.mode)

    @property
    def is_dir(self) -> bool:
        return self.known and self.kind is FileKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is FileKind.SYMLINK

    @property
    def modified_at(self) -> float:
        """Modification time in seconds since the epoch."""
        return self.modified_ns / 1_000_000_000

    @classmethod
    def from_stat(
        cls,
        name: str,
        full_path: str,
        st: os.stat_result,
        link_target: str | None = None,
        target_mode: int | None = None,
    ) -> Entry:
        """Build an entry from an ``os.stat_result``.

        ``blocks`` is left as ``None`` on platforms whose stat results carry no
        ``st_blocks`` field.
        """
        blocks = getattr(st, "st_blocks", None)
        return cls(
            name=name,
            full_path=full_path,
            mode=int(st.st_mode),
            size=int(st.st_size),
            modified_ns=int(st.st_mtime_ns),
            owner_id=int(st.st_uid),
            group_id=int(st.st_gid),
            nlink=int(st.st_nlink),
            blocks=int(blocks) if blocks is not None else None,
            link_target=link_target,
            target_mode=target_mode,
        )


__all__ = [
    "Entry",
    "FileKind",
    "kind_for_mode",
]
