"""Tests for filesystem mutations that keep annotations consistent."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from nershell.annotations import AnnotationStore
from nershell.errors import FileOperationFailure, InvalidCommand
from nershell.operations import delete_entry, find_files, make_directory, make_text_file, rename_entry


class OperationsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        base = Path(self._tmp.name).resolve()
        self.root = base / "root"
        self.root.mkdir()
        self.store = AnnotationStore(base / "annotations.json")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_delete_file_purges_its_annotation(self) -> None:
        target = self.root / "a.txt"
        target.write_text("x", encoding="utf-8")
        self.store.add(target, "note")

        delete_entry(target, self.store)

        self.assertFalse(target.exists())
        self.assertEqual(self.store.records(), [])

    def test_delete_directory_removes_subtree_and_annotations(self) -> None:
        folder = self.root / "folder"
        (folder / "deep").mkdir(parents=True)
        (folder / "deep" / "x.txt").write_text("x", encoding="utf-8")
        sibling = self.root / "folder2"
        sibling.mkdir()
        self.store.add(folder, "top")
        self.store.add(folder / "deep" / "x.txt", "leaf")
        self.store.add(sibling, "keep")

        delete_entry(folder, self.store)

        self.assertFalse(folder.exists())
        self.assertEqual([record.path for record in self.store.records()], [str(sibling)])

    def test_partial_delete_purges_only_removed_entries(self) -> None:
        folder = self.root / "folder"
        folder.mkdir()
        gone = folder / "gone.txt"
        stuck = folder / "stuck.txt"
        self.store.add(folder, "top")
        self.store.add(gone, "gone")
        self.store.add(stuck, "stuck")

        def _fail_half_way(path: Path, on_removed) -> None:
            on_removed(gone)
            raise PermissionError("denied")

        with mock.patch("nershell.operations.fs.delete_tree", side_effect=_fail_half_way):
            with self.assertRaises(FileOperationFailure):
                delete_entry(folder, self.store)

        self.assertEqual(self.store.lookup(gone), "")
        self.assertEqual(self.store.lookup(stuck), "stuck")
        self.assertEqual(self.store.lookup(folder), "top")

    def test_rename_moves_entry_and_annotations(self) -> None:
        folder = self.root / "old"
        folder.mkdir()
        (folder / "x.txt").write_text("x", encoding="utf-8")
        self.store.add(folder / "x.txt", "leaf")

        target = rename_entry(folder, "new", self.store)

        self.assertEqual(target, self.root / "new")
        self.assertTrue((target / "x.txt").is_file())
        self.assertEqual(self.store.lookup(target / "x.txt"), "leaf")
        self.assertEqual(self.store.lookup(folder / "x.txt"), "")

    def test_rename_refuses_existing_target(self) -> None:
        (self.root / "a").write_text("a", encoding="utf-8")
        (self.root / "b").write_text("b", encoding="utf-8")

        with self.assertRaises(FileOperationFailure):
            rename_entry(self.root / "a", "b", self.store)
        self.assertEqual((self.root / "b").read_text(encoding="utf-8"), "b")

    def test_names_with_separators_are_rejected(self) -> None:
        for bad in ("", "  ", ".", "..", "a/b"):
            with self.assertRaises(InvalidCommand):
                make_directory(self.root, bad)

    def test_make_directory(self) -> None:
        created = make_directory(self.root, "photos")

        self.assertTrue(created.is_dir())
        with self.assertRaises(FileOperationFailure):
            make_directory(self.root, "photos")

    def test_make_text_file_appends_txt_without_extension(self) -> None:
        plain = make_text_file(self.root, "notes")
        markdown = make_text_file(self.root, "readme.md")

        self.assertEqual(plain, self.root / "notes.txt")
        self.assertEqual(plain.read_bytes(), b"")
        self.assertEqual(markdown, self.root / "readme.md")
        with self.assertRaises(FileOperationFailure):
            make_text_file(self.root, "notes")

    def test_find_files_matches_exact_names_recursively(self) -> None:
        (self.root / "a" / "b").mkdir(parents=True)
        (self.root / "todo.txt").write_text("1", encoding="utf-8")
        (self.root / "a" / "b" / "todo.txt").write_text("2", encoding="utf-8")
        (self.root / "a" / "todo.txt.bak").write_text("3", encoding="utf-8")
        (self.root / "a" / "todo.txt2").mkdir()

        matches = find_files(self.root, "todo.txt")

        self.assertEqual(matches, sorted([self.root / "todo.txt", self.root / "a" / "b" / "todo.txt"]))
        self.assertEqual(find_files(self.root, "missing.txt"), [])
        self.assertEqual(find_files(self.root, "  "), [])


if __name__ == "__main__":
    unittest.main()
