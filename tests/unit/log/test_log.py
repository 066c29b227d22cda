"""Tests for logging bootstrap on the package logger."""

from __future__ import annotations

import logging
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from pathlib import Path

from nershell.log import PACKAGE_LOGGER, configure_logging, parse_level


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger(PACKAGE_LOGGER)
        self._saved = (list(self.logger.handlers), self.logger.level, self.logger.propagate)

    def tearDown(self) -> None:
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
        handlers, level, propagate = self._saved
        for handler in handlers:
            self.logger.addHandler(handler)
        self.logger.setLevel(level)
        self.logger.propagate = propagate

    def test_parse_level(self) -> None:
        self.assertEqual(parse_level("debug"), logging.DEBUG)
        self.assertEqual(parse_level("WARN"), logging.WARNING)
        self.assertEqual(parse_level(None), logging.WARNING)
        self.assertEqual(parse_level("nonsense"), logging.WARNING)

    def test_console_only(self) -> None:
        logger = configure_logging("ERROR")

        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.handlers[0].level, logging.ERROR)
        self.assertEqual(logger.level, logging.ERROR)
        self.assertFalse(logger.propagate)

    def test_file_handler_records_info_and_replaces_previous_handlers(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "logs" / "nershell.log"

            configure_logging("WARNING")
            logger = configure_logging("WARNING", log_file)
            logging.getLogger("nershell.clipboard").info("Staged something")
            for handler in logger.handlers:
                handler.flush()

            self.assertEqual(len(logger.handlers), 2)
            self.assertTrue(any(isinstance(handler, RotatingFileHandler) for handler in logger.handlers))
            self.assertEqual(logger.level, logging.INFO)
            self.assertIn("nershell.clipboard | Staged something", log_file.read_text(encoding="utf-8"))

            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()


if __name__ == "__main__":
    unittest.main()
