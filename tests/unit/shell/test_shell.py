"""Tests for the read-eval-print loop with scripted input."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from nershell.annotations import AnnotationStore
from nershell.navigation import Navigator
from nershell.session import Session
from nershell.shell import PROMPT, run_shell
from nershell.ui_theme import PLAIN_THEME


def _scripted(lines: list[str]):
    pending = list(lines)
    prompts: list[str] = []

    def _read(prompt: str) -> str:
        prompts.append(prompt)
        if not pending:
            raise EOFError
        return pending.pop(0)

    return _read, prompts


class RunShellTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        base = Path(self._tmp.name).resolve()
        self.root = base / "root"
        self.root.mkdir()
        (self.root / "a.txt").write_text("alpha\n", encoding="utf-8")
        self.session = Session(
            Navigator(self.root),
            AnnotationStore(base / "annotations.json"),
            no_color=True,
            theme=PLAIN_THEME,
        )
        self.output: list[str] = []

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_exit_stops_the_loop(self) -> None:
        read, prompts = _scripted(["1", "exit", "never read"])

        run_shell(self.session, read_line=read, write=self.output.append)

        self.assertEqual(prompts, [PROMPT, PROMPT])
        self.assertIn("alpha", self.output)
        self.assertEqual(self.output[-1], "Goodbye!")
        self.assertEqual(self.output.count("Goodbye!"), 1)
        self.assertTrue(self.session.closed)

    def test_end_of_input_closes_session_and_commits_cut(self) -> None:
        read, _prompts = _scripted(["1 cut"])

        run_shell(self.session, read_line=read, write=self.output.append)

        self.assertFalse((self.root / "a.txt").exists())
        self.assertEqual(
            self.output[-2:],
            ["Cut entry a.txt was never pasted and has been removed.", "Goodbye!"],
        )

    def test_errors_do_not_end_the_loop(self) -> None:
        read, prompts = _scripted(["42", "bogus", "exit"])

        run_shell(self.session, read_line=read, write=self.output.append)

        self.assertEqual(len(prompts), 3)
        self.assertIn("Invalid reference: 42 (listing has 1 entries).", self.output)
        self.assertTrue(any(line.startswith("Unknown command: 'bogus'") for line in self.output))

    def test_interrupt_closes_session(self) -> None:
        def _interrupt(prompt: str) -> str:
            raise KeyboardInterrupt

        run_shell(self.session, read_line=_interrupt, write=self.output.append)

        self.assertEqual(self.output[-1], "Goodbye!")
        self.assertTrue(self.session.closed)

    def test_listing_is_printed_before_each_prompt(self) -> None:
        read, _prompts = _scripted(["touch b", "exit"])

        run_shell(self.session, read_line=read, write=self.output.append)

        headers = [line for line in self.output if line.startswith("Current directory:")]
        self.assertEqual(len(headers), 2)
        self.assertIn("Created file b.txt.", self.output)


if __name__ == "__main__":
    unittest.main()
