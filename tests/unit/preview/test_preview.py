"""Tests for visu previews: text detection, sanitizing and highlighting."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from nershell.preview import (
    colorize_source,
    describe_entry,
    is_image_file,
    is_text_file,
    read_text,
    sanitize_terminal_text,
)


class PreviewTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_text_file_is_shown_verbatim_without_color(self) -> None:
        path = self.root / "notes.txt"
        path.write_text("first line\nsecond line\n", encoding="utf-8")

        self.assertEqual(describe_entry(path, no_color=True), "first line\nsecond line\n")

    def test_python_source_is_highlighted(self) -> None:
        path = self.root / "demo.py"
        path.write_text("def answer():\n    return 42\n", encoding="utf-8")

        rendered = describe_entry(path, style="monokai")

        self.assertIn("\x1b[", rendered)
        self.assertIn("answer", rendered)

    def test_unknown_style_falls_back_to_default(self) -> None:
        rendered = colorize_source("x = 1\n", Path("x.py"), style="no-such-style")

        self.assertIn("\x1b[", rendered)

    def test_directory_reports_total_size(self) -> None:
        folder = self.root / "folder"
        (folder / "sub").mkdir(parents=True)
        (folder / "a.bin").write_bytes(b"12345")
        (folder / "sub" / "b.bin").write_bytes(b"123")

        self.assertEqual(describe_entry(folder), "Directory size: 8 bytes")

    def test_binary_file_reports_size(self) -> None:
        path = self.root / "blob.dat"
        path.write_bytes(b"\x00\x01\x02\x03")

        self.assertFalse(is_text_file(path))
        self.assertEqual(describe_entry(path), "File size: 4 bytes")

    def test_image_file_reports_size(self) -> None:
        path = self.root / "photo.PNG"
        path.write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")

        self.assertTrue(is_image_file(path))
        self.assertEqual(describe_entry(path), "Image file: 10 bytes")

    def test_empty_file_is_text(self) -> None:
        path = self.root / "empty.txt"
        path.write_bytes(b"")

        self.assertTrue(is_text_file(path))
        self.assertEqual(describe_entry(path), "")

    def test_multibyte_sequence_cut_at_sample_boundary_is_text(self) -> None:
        path = self.root / "accents.txt"
        path.write_bytes(b"a" * 8191 + "é".encode("utf-8"))

        self.assertTrue(is_text_file(path))

    def test_read_text_falls_back_to_latin1(self) -> None:
        path = self.root / "legacy.txt"
        path.write_bytes(b"caf\xe9\n")

        self.assertEqual(read_text(path), "café\n")

    def test_sanitize_escapes_control_bytes(self) -> None:
        self.assertEqual(sanitize_terminal_text("plain\ttext\n"), "plain\ttext\n")
        self.assertEqual(sanitize_terminal_text("bell\x07!"), "bell\\x07!")
        self.assertEqual(sanitize_terminal_text("\x1b[2J"), "\\x1b[2J")


if __name__ == "__main__":
    unittest.main()
