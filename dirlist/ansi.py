"""ANSI-aware text measurement and padding utilities.

Column alignment in long listings must ignore color escape sequences and
count East Asian wide characters as two cells.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    """Remove escape sequences from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies once printed."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def pad_right(text: str, width: int) -> str:
    """Left-align ``text`` in a field of ``width`` display columns."""
    return text + " " * max(0, width - display_width(text))


def pad_left(text: str, width: int) -> str:
    """Right-align ``text`` in a field of ``width`` display columns."""
    return " " * max(0, width - display_width(text)) + text
