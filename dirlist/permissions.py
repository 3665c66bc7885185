"""Conversion between ``st_mode`` bits and ``ls``-style mode strings.

A mode string is ten characters: one file-type character followed by the
owner, group and other ``rwx`` triplets. The execute slot of each triplet also
carries its special bit (setuid, setgid, sticky): lowercase ``s``/``t`` when
execute is set, uppercase ``S``/``T`` when it is not.
"""

from __future__ import annotations

import stat

from .entry import FileKind, kind_for_mode

_TYPE_CHARS: dict[FileKind, str] = {
    FileKind.DIRECTORY: "d",
    FileKind.SYMLINK: "l",
    FileKind.FIFO: "p",
    FileKind.SOCKET: "s",
    FileKind.BLOCK_DEVICE: "b",
    FileKind.CHAR_DEVICE: "c",
    FileKind.REGULAR: "-",
    FileKind.UNKNOWN: "?",
}

_FORMAT_BY_CHAR: dict[str, int] = {
    "d": stat.S_IFDIR,
    "l": stat.S_IFLNK,
    "p": stat.S_IFIFO,
    "s": stat.S_IFSOCK,
    "b": stat.S_IFBLK,
    "c": stat.S_IFCHR,
    "-": stat.S_IFREG,
    "?": 0,
}

# (read, write, execute, special bit, special char) per triplet.
_TRIPLETS: tuple[tuple[int, int, int, int, str], ...] = (
    (stat.S_IRUSR, stat.S_IWUSR, stat.S_IXUSR, stat.S_ISUID, "s"),
    (stat.S_IRGRP, stat.S_IWGRP, stat.S_IXGRP, stat.S_ISGID, "s"),
    (stat.S_IROTH, stat.S_IWOTH, stat.S_IXOTH, stat.S_ISVTX, "t"),
)

UNKNOWN_MODE_STRING = "?" * 10


def _execute_char(executable: bool, special: bool, special_char: str) -> str:
    if special:
        return special_char if executable else special_char.upper()
    return "x" if executable else "-"


def mode_string(mode: int) -> str:
    """Render ``mode`` as the 10-character type+permission string."""
    out = [_TYPE_CHARS[kind_for_mode(mode)]]
    for read_bit, write_bit, exec_bit, special_bit, special_char in _TRIPLETS:
        out.append("r" if mode & read_bit else "-")
        out.append("w" if mode & write_bit else "-")
        out.append(_execute_char(bool(mode & exec_bit), bool(mode & special_bit), special_char))
    return "".join(out)


def parse_mode_string(text: str) -> int:
    """Return the mode bits described by a 10-character mode string.

    Raises ``ValueError`` for strings that ``mode_string`` cannot produce.
    """
    if len(text) != 10:
        raise ValueError(f"mode string must have 10 characters: {text!r}")
    try:
        mode = _FORMAT_BY_CHAR[text[0]]
    except KeyError:
        raise ValueError(f"unknown file type character: {text[0]!r}") from None

    for index, (read_bit, write_bit, exec_bit, special_bit, special_char) in enumerate(_TRIPLETS):
        read_ch, write_ch, exec_ch = text[1 + index * 3 : 4 + index * 3]
        if read_ch not in "r-" or write_ch not in "w-":
            raise ValueError(f"invalid permission triplet in {text!r}")
        if read_ch == "r":
            mode |= read_bit
        if write_ch == "w":
            mode |= write_bit
        if exec_ch == "x":
            mode |= exec_bit
        elif exec_ch == special_char:
            mode |= exec_bit | special_bit
        elif exec_ch == special_char.upper():
            mode |= special_bit
        elif exec_ch != "-":
            raise ValueError(f"invalid execute character {exec_ch!r} in {text!r}")
    return mode


__all__ = [
    "UNKNOWN_MODE_STRING",
    "mode_string",
    "parse_mode_string",
]
