"""Command-line front door for dirlist.

Parses flags, merges them with persisted config, and writes the listing to
stdout. A fatal listing error becomes one ``dirlist: ...`` line on stderr and
exit status 1.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from .config import load_color_mode, load_compact, load_config, load_max_depth, load_palette
from .errors import ListingError
from .flags import CliOptions, parse_flags
from .identity import IdentityCache
from .render import RenderOptions
from .traversal import run

PROG = "dirlist"


def _color_enabled(color_mode: str, stream: TextIO) -> bool:
    """Resolve ``auto``/``always``/``never`` against the output stream."""
    if color_mode == "always":
        return True
    if color_mode == "never":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty is not None and isatty())


def build_render_options(cli_options: CliOptions, config: dict[str, object], stream: TextIO) -> RenderOptions:
    """Combine command-line output options with config defaults."""
    color_mode = cli_options.color or load_color_mode(config)
    compact = cli_options.compact if cli_options.compact is not None else load_compact(config)
    return RenderOptions(
        color=_color_enabled(color_mode, stream),
        compact=compact,
        palette=load_palette(config),
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments and list every target path.

    ``argv`` defaults to ``sys.argv[1:]``. Target paths are listed in plain
    code-point order so multi-path output is reproducible.
    """
    flags, paths, cli_options = parse_flags(sys.argv[1:] if argv is None else argv)
    config = load_config()
    options = build_render_options(cli_options, config, sys.stdout)
    try:
        run(
            sorted(paths),
            flags,
            sys.stdout,
            options=options,
            identities=IdentityCache(),
            max_depth=load_max_depth(config),
        )
    except ListingError as exc:
        sys.stdout.flush()
        raise SystemExit(f"{PROG}: {exc}") from exc


if __name__ == "__main__":
    main()
