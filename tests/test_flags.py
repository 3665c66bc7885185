"""Command-line flag tokenization tests."""

from __future__ import annotations

import dataclasses
import io
import unittest
from unittest import mock

from dirlist.flags import CliOptions, ListingFlags, parse_flags


class ShortFlagTests(unittest.TestCase):
    def test_bundled_flags_and_paths(self) -> None:
        flags, paths, options = parse_flags(["-laR", "src", "docs"])
        self.assertEqual(flags, ListingFlags(show_all=True, long_listing=True, recursive=True))
        self.assertEqual(paths, ["src", "docs"])
        self.assertEqual(options, CliOptions())

    def test_separate_flags(self) -> None:
        flags, _paths, _options = parse_flags(["-t", "-r"])
        self.assertTrue(flags.sort_by_time)
        self.assertTrue(flags.reverse)
        self.assertFalse(flags.long_listing)

    def test_default_path_is_current_directory(self) -> None:
        _flags, paths, _options = parse_flags(["-l"])
        self.assertEqual(paths, ["."])

    def test_unknown_flag_warns_and_is_ignored(self) -> None:
        warnings: list[str] = []
        flags, _paths, _options = parse_flags(["-lzq"], warn=warnings.append)
        self.assertTrue(flags.long_listing)
        self.assertEqual(
            warnings,
            ["Warning: ignoring unknown flag '-z'", "Warning: ignoring unknown flag '-q'"],
        )

    def test_default_warning_goes_to_stderr(self) -> None:
        with mock.patch("sys.stderr", new_callable=io.StringIO) as stderr:
            parse_flags(["-x"])
        self.assertEqual(stderr.getvalue(), "Warning: ignoring unknown flag '-x'\n")

    def test_double_dash_and_lone_dash_are_paths(self) -> None:
        flags, paths, _options = parse_flags(["-", "--", "-a"])
        self.assertFalse(flags.show_all)
        self.assertEqual(paths, ["-", "-a"])

    def test_flags_record_is_immutable(self) -> None:
        flags, _paths, _options = parse_flags([])
        with self.assertRaises(dataclasses.FrozenInstanceError):
            flags.reverse = True  # type: ignore[misc]


class LongOptionTests(unittest.TestCase):
    def test_color_options(self) -> None:
        self.assertEqual(parse_flags(["--no-color"])[2].color, "never")
        self.assertEqual(parse_flags(["--color"])[2].color, "always")
        self.assertEqual(parse_flags(["--color=auto"])[2].color, "auto")

    def test_invalid_color_choice_warns(self) -> None:
        warnings: list[str] = []
        options = parse_flags(["--color=rainbow"], warn=warnings.append)[2]
        self.assertIsNone(options.color)
        self.assertEqual(warnings, ["Warning: ignoring invalid color choice 'rainbow'"])

    def test_compact_option(self) -> None:
        self.assertTrue(parse_flags(["--compact"])[2].compact)

    def test_unknown_long_option_warns(self) -> None:
        warnings: list[str] = []
        flags, paths, _options = parse_flags(["--human", "x"], warn=warnings.append)
        self.assertEqual(flags, ListingFlags())
        self.assertEqual(paths, ["x"])
        self.assertEqual(warnings, ["Warning: ignoring unknown option '--human'"])


if __name__ == "__main__":
    unittest.main()
