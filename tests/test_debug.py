"""Logger setup tests.

The package logger must never write to the terminal, so only file and null
handlers are acceptable.
"""

from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from snapview import debug


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger(debug.LOGGER_NAME)
        saved = (list(self.logger.handlers), self.logger.level, self.logger.propagate)
        self.addCleanup(self._restore, saved)
        self.logger.handlers = []
        patcher = mock.patch.object(debug, "_CONFIGURED", False)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _restore(self, saved) -> None:
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers, level, self.logger.propagate = saved
        self.logger.setLevel(level)

    def test_log_file_receives_child_logger_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "nested" / "snapview.log"
            with mock.patch.dict(os.environ, {}, clear=True):
                debug.configure_logging(log_path)
            debug.get_logger("backend").info("running restic")
            for handler in self.logger.handlers:
                handler.flush()
                handler.close()

            text = log_path.read_text(encoding="utf-8")

        self.assertIn("INFO snapview.backend: running restic", text)

    def test_without_destination_uses_null_handler(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            logger = debug.configure_logging()

        self.assertEqual([type(handler) for handler in logger.handlers], [logging.NullHandler])
        self.assertFalse(logger.propagate)
        self.assertEqual(logger.level, logging.INFO)

    def test_debug_env_enables_debug_level(self) -> None:
        with mock.patch.dict(os.environ, {"SNAPVIEW_DEBUG": "1"}, clear=True):
            logger = debug.configure_logging()

        self.assertEqual(logger.level, logging.DEBUG)

    def test_configuration_happens_once(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            debug.configure_logging()
            debug.configure_logging()

        self.assertEqual(len(self.logger.handlers), 1)


if __name__ == "__main__":
    unittest.main()
