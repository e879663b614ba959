"""Tests for the filesystem-backed directory reader."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from reproject.file_tree_model import DirectoryEntry, EntryKind, list_directory_entries


class ListDirectoryEntriesTests(unittest.TestCase):
    def test_lists_immediate_children_with_kinds(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "pkg" / "nested").mkdir(parents=True)
            (root / "pkg" / "nested" / "deep.py").write_text("", encoding="utf-8")
            (root / "setup.cfg").write_text("[metadata]\n", encoding="utf-8")
            (root / ".hidden").write_text("", encoding="utf-8")

            entries = list_directory_entries(root)

            self.assertEqual(
                sorted(entries, key=lambda entry: entry.name),
                [
                    DirectoryEntry(".hidden", EntryKind.FILE),
                    DirectoryEntry("pkg", EntryKind.DIRECTORY),
                    DirectoryEntry("setup.cfg", EntryKind.FILE),
                ],
            )

    def test_symlinked_directory_is_listed_as_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "real").mkdir()
            try:
                os.symlink(root, root / "real" / "loop", target_is_directory=True)
                os.symlink(root / "gone", root / "real" / "dangling")
            except (OSError, NotImplementedError) as exc:
                self.skipTest(f"symlinks unavailable: {exc}")

            entries = list_directory_entries(root / "real")

            self.assertEqual(
                sorted(entries, key=lambda entry: entry.name),
                [
                    DirectoryEntry("dangling", EntryKind.FILE),
                    DirectoryEntry("loop", EntryKind.DIRECTORY),
                ],
            )

    def test_missing_directory_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                list_directory_entries(Path(tmp) / "missing")

    def test_file_path_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "plain.txt"
            target.write_text("x\n", encoding="utf-8")

            with self.assertRaises(NotADirectoryError):
                list_directory_entries(target)


if __name__ == "__main__":
    unittest.main()
