"""Bootstrap wiring tests for ``snapview.runtime.app.run_app``."""

from __future__ import annotations

import sys
import unittest
from unittest import mock

from snapview.commands import ListSnapshots
from snapview.config import AppConfig, ResticSettings
from snapview.errors import SnapviewError
from snapview.runtime.app import run_app
from snapview.state import LOADING


class RunAppTests(unittest.TestCase):
    def setUp(self) -> None:
        for name, fd in (("stdin", 0), ("stdout", 1)):
            patcher = mock.patch.object(sys, name, mock.Mock(fileno=lambda fd=fd: fd))
            patcher.start()
            self.addCleanup(patcher.stop)
        self.settings = ResticSettings(repository="/srv/repo")

    def test_non_tty_stdin_is_rejected(self) -> None:
        with mock.patch("snapview.runtime.app.os.isatty", return_value=False), mock.patch(
            "snapview.runtime.app.run_main_loop"
        ) as loop_mock:
            with self.assertRaises(SnapviewError):
                run_app(self.settings)

        loop_mock.assert_not_called()

    def test_initial_listing_is_dispatched_before_loop(self) -> None:
        with mock.patch("snapview.runtime.app.os.isatty", return_value=True), mock.patch(
            "snapview.runtime.app.TerminalController"
        ) as terminal_cls, mock.patch("snapview.runtime.app.TaskOrchestrator") as orchestrator_cls, mock.patch(
            "snapview.runtime.app.run_main_loop"
        ) as loop_mock:
            run_app(self.settings, AppConfig(theme="ocean"), no_color=True)

        terminal_cls.assert_called_once_with(0, 1)
        orchestrator = orchestrator_cls.return_value
        orchestrator.submit.assert_called_once_with(ListSnapshots())

        kwargs = loop_mock.call_args.kwargs
        self.assertIs(kwargs["orchestrator"], orchestrator)
        self.assertIs(kwargs["terminal"], terminal_cls.return_value)
        self.assertEqual(kwargs["stdin_fd"], 0)
        self.assertEqual(kwargs["timing"].poll_ms, 80)
        self.assertEqual(kwargs["controller"].state.mode, LOADING)


if __name__ == "__main__":
    unittest.main()
