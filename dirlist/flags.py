"""Command-line flag tokenization.

Short options may be bundled (``-laR``). Unknown option characters are
reported through ``warn`` and otherwise ignored, so a typo never aborts a
listing. Everything that is not an option is collected as a target path.
The tokenizer is hand-written because argparse rejects an unknown character
inside a bundle such as ``-lz`` with an error instead of a warning.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

COLOR_CHOICES = ("auto", "always", "never")


@dataclass(frozen=True)
class ListingFlags:
    """Immutable per-invocation listing switches."""

    show_all: bool = False
    long_listing: bool = False
    recursive: bool = False
    reverse: bool = False
    sort_by_time: bool = False


@dataclass(frozen=True)
class CliOptions:
    """Output options given on the command line; ``None`` defers to config."""

    color: str | None = None
    compact: bool | None = None


_SHORT_FLAGS = {
    "a": "show_all",
    "l": "long_listing",
    "R": "recursive",
    "r": "reverse",
    "t": "sort_by_time",
}


def _stderr_warning(message: str) -> None:
    sys.stderr.write(f"{message}\n")


def _parse_long_option(arg: str, options: CliOptions, warn: Callable[[str], None]) -> CliOptions:
    name, has_value, value = arg[2:].partition("=")
    if name == "no-color" and not has_value:
        return replace(options, color="never")
    if name == "compact" and not has_value:
        return replace(options, compact=True)
    if name == "color":
        choice = value if has_value else "always"
        if choice in COLOR_CHOICES:
            return replace(options, color=choice)
        warn(f"Warning: ignoring invalid color choice {choice!r}")
        return options
    warn(f"Warning: ignoring unknown option '{arg}'")
    return options


def parse_flags(
    argv: Sequence[str],
    warn: Callable[[str], None] | None = None,
) -> tuple[ListingFlags, list[str], CliOptions]:
    """Split ``argv`` into listing flags, target paths and output options.

    ``--`` ends option parsing and a lone ``-`` is treated as a path. When no
    paths are given the current directory ``.`` is substituted.
    """
    emit = warn or _stderr_warning
    switches: dict[str, bool] = {}
    options = CliOptions()
    paths: list[str] = []
    options_done = False

    for arg in argv:
        if options_done or arg == "-" or not arg.startswith("-"):
            paths.append(arg)
            continue
        if arg == "--":
            options_done = True
            continue
        if arg.startswith("--"):
            options = _parse_long_option(arg, options, emit)
            continue
        for ch in arg[1:]:
            field_name = _SHORT_FLAGS.get(ch)
            if field_name is None:
                emit(f"Warning: ignoring unknown flag '-{ch}'")
                continue
            switches[field_name] = True

    if not paths:
        paths = ["."]
    return ListingFlags(**switches), paths, options


__all__ = [
    "COLOR_CHOICES",
    "CliOptions",
    "ListingFlags",
    "parse_flags",
]
