"""Tests for directory scanning into ``Entry`` records.

Uses real temporary directories, including symlinks and unreadable parents.
"""

from __future__ import annotations

import dataclasses
import os
import stat
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirlist.entry import Entry, FileKind
from dirlist.errors import PathNotFoundError
from dirlist.flags import ListingFlags
from dirlist.metadata import list_directory, placeholder_entry, stat_entry
from dirlist.traversal import iter_listing_blocks


class _VanishedChild:
    """Directory entry whose file is removed before it can be stat'ed."""

    def __init__(self, directory: str, name: str) -> None:
        self.name = name
        self.path = os.path.join(directory, name)

    def stat(self, follow_symlinks: bool = True) -> os.stat_result:
        raise FileNotFoundError(2, "No such file or directory", self.path)


class _FixedScandir:
    """Context manager mimicking ``os.scandir`` over a fixed child list."""

    def __init__(self, children: list[object]) -> None:
        self._children = children

    def __enter__(self):
        return iter(self._children)

    def __exit__(self, *exc_info) -> bool:
        return False


class ListDirectoryTests(unittest.TestCase):
    def test_hidden_entries_skipped_by_default(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "visible.txt").write_text("x", encoding="utf-8")
            (root / ".hidden").write_text("y", encoding="utf-8")

            entries = list_directory(str(root), show_all=False)

            self.assertEqual([e.name for e in entries], ["visible.txt"])
            entry = entries[0]
            self.assertEqual(entry.full_path, os.path.join(str(root), "visible.txt"))
            self.assertIs(entry.kind, FileKind.REGULAR)
            self.assertEqual(entry.size, 1)
            self.assertIsNone(entry.link_target)

    def test_show_all_adds_hidden_and_synthetic_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".hidden").write_text("y", encoding="utf-8")
            (root / "sub").mkdir()

            entries = {e.name: e for e in list_directory(str(root), show_all=True)}

            self.assertEqual(set(entries), {".", "..", ".hidden", "sub"})
            self.assertTrue(entries["."].is_dir)
            self.assertTrue(entries[".."].is_dir)
            self.assertEqual(entries["."].modified_ns, root.stat().st_mtime_ns)
            self.assertTrue(entries["sub"].is_dir)

    def test_unreadable_parent_becomes_placeholder(self) -> None:
        real_stat = os.stat

        def flaky_stat(path, *args, **kwargs):
            if str(path).endswith(".."):
                raise PermissionError(13, "Permission denied", str(path))
            return real_stat(path, *args, **kwargs)

        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("dirlist.metadata.os.stat", side_effect=flaky_stat):
                entries = {e.name: e for e in list_directory(tmp, show_all=True)}

        self.assertTrue(entries["."].known)
        self.assertFalse(entries[".."].known)
        self.assertFalse(entries[".."].is_dir)

    def test_unreadable_self_entry_becomes_placeholder(self) -> None:
        real_stat = os.stat

        with tempfile.TemporaryDirectory() as tmp:

            def flaky_stat(path, *args, **kwargs):
                if str(path) == tmp:
                    raise PermissionError(13, "Permission denied", str(path))
                return real_stat(path, *args, **kwargs)

            with mock.patch("dirlist.metadata.os.stat", side_effect=flaky_stat):
                entries = {e.name: e for e in list_directory(tmp, show_all=True)}

        self.assertFalse(entries["."].known)
        self.assertEqual(entries["."].full_path, tmp)
        self.assertTrue(entries[".."].known)

    def test_child_vanishing_before_stat_becomes_placeholder(self) -> None:
        real_scandir = os.scandir

        with tempfile.TemporaryDirectory() as tmp:

            def scandir(path):
                if path == tmp:
                    return _FixedScandir([_VanishedChild(tmp, "ghost")])
                return real_scandir(path)

            with mock.patch("dirlist.metadata.os.scandir", side_effect=scandir):
                entries = list_directory(tmp, show_all=False)
                blocks = list(iter_listing_blocks([tmp], ListingFlags(recursive=True, long_listing=True)))

        self.assertEqual([e.name for e in entries], ["ghost"])
        self.assertFalse(entries[0].known)
        self.assertEqual(entries[0].full_path, os.path.join(tmp, "ghost"))
        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].lines[1].split(), ["??????????", "?", "?", "?", "?", "?", "ghost"])

    def test_missing_directory_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = os.path.join(tmp, "missing")
            with self.assertRaises(PathNotFoundError) as ctx:
                list_directory(missing, show_all=False)
            self.assertEqual(ctx.exception.path, missing)


@unittest.skipUnless(hasattr(os, "symlink"), "symlinks unsupported")
class SymlinkEntryTests(unittest.TestCase):
    def test_symlink_records_target_and_target_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "target.txt").write_text("x", encoding="utf-8")
            os.symlink("target.txt", root / "link")

            entries = {e.name: e for e in list_directory(str(root), show_all=False)}

            link = entries["link"]
            self.assertTrue(link.is_symlink)
            self.assertEqual(link.link_target, "target.txt")
            self.assertIsNotNone(link.target_mode)
            self.assertTrue(stat.S_ISREG(link.target_mode))

    def test_dangling_symlink_keeps_target_without_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            os.symlink("nowhere", root / "broken")

            entries = list_directory(str(root), show_all=False)

            self.assertEqual(len(entries), 1)
            self.assertEqual(entries[0].link_target, "nowhere")
            self.assertIsNone(entries[0].target_mode)

    def test_unreadable_link_keeps_empty_target(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "target.txt").write_text("x", encoding="utf-8")
            os.symlink("target.txt", root / "link")

            with mock.patch("dirlist.metadata.os.readlink", side_effect=PermissionError(13, "Permission denied")):
                entries = list_directory(str(root), show_all=False)

            link = next(e for e in entries if e.name == "link")
            self.assertTrue(link.is_symlink)
            self.assertEqual(link.link_target, "")

    def test_symlinked_directory_is_not_a_directory_entry(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            os.symlink("real", root / "alias")

            entries = {e.name: e for e in list_directory(str(root), show_all=False)}

            self.assertFalse(entries["alias"].is_dir)
            self.assertTrue(stat.S_ISDIR(entries["alias"].target_mode))


class StatEntryTests(unittest.TestCase):
    def test_single_path_entry_uses_basename(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "notes.txt")
            Path(path).write_text("hello", encoding="utf-8")

            entry = stat_entry(path)

            self.assertEqual(entry.name, "notes.txt")
            self.assertEqual(entry.full_path, path)
            self.assertEqual(entry.size, 5)

    def test_missing_path_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(PathNotFoundError):
                stat_entry(os.path.join(tmp, "missing"))


class EntryTests(unittest.TestCase):
    def test_entries_are_immutable(self) -> None:
        entry = Entry(name="a", full_path="/a", mode=stat.S_IFREG | 0o644)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            entry.name = "b"  # type: ignore[misc]

    def test_modified_at_is_seconds(self) -> None:
        entry = Entry(name="a", full_path="/a", mode=stat.S_IFREG, modified_ns=1_500_000_000)
        self.assertEqual(entry.modified_at, 1.5)

    def test_placeholder_has_unknown_kind(self) -> None:
        entry = placeholder_entry("..", "/x/..")
        self.assertFalse(entry.known)
        self.assertIs(entry.kind, FileKind.UNKNOWN)


if __name__ == "__main__":
    unittest.main()
