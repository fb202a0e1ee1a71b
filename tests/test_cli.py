"""CLI argument and startup validation tests.

Verifies how ``snapview.cli.main`` builds settings, applies overrides and
reports missing configuration before any terminal setup happens.
"""

from __future__ import annotations

import io
import os
import unittest
from unittest import mock

from snapview import cli
from snapview.config import AppConfig
from snapview.errors import SnapviewError

ENV = {"RESTIC_REPOSITORY": "/srv/repo", "RESTIC_PASSWORD": "pw"}


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        load_patch = mock.patch("snapview.cli.load_app_config", return_value=AppConfig())
        logging_patch = mock.patch("snapview.cli.configure_logging")
        self.load_config_mock = load_patch.start()
        self.logging_mock = logging_patch.start()
        self.addCleanup(load_patch.stop)
        self.addCleanup(logging_patch.stop)

    def test_main_runs_app_with_environment_settings(self) -> None:
        with mock.patch.dict(os.environ, ENV, clear=True), mock.patch("snapview.cli.run_app") as run_app:
            cli.main([])

        run_app.assert_called_once()
        settings, app_config = run_app.call_args.args
        self.assertEqual(settings.repository, "/srv/repo")
        self.assertEqual(settings.binary, "restic")
        self.assertEqual(app_config, AppConfig())
        self.assertEqual(run_app.call_args.kwargs, {"theme_name": None, "no_color": False})
        self.logging_mock.assert_called_once_with(None)

    def test_options_override_environment_and_config(self) -> None:
        self.load_config_mock.return_value = AppConfig(restic_binary="/usr/bin/restic", log_file="/tmp/cfg.log")
        argv = [
            "--repo",
            "s3:bucket",
            "--restic-binary",
            "/opt/restic",
            "-l",
            "/tmp/cli.log",
            "--theme",
            "ocean",
            "--no-color",
        ]

        with mock.patch.dict(os.environ, ENV, clear=True), mock.patch("snapview.cli.run_app") as run_app:
            cli.main(argv)

        settings, _app_config = run_app.call_args.args
        self.assertEqual(settings.repository, "s3:bucket")
        self.assertEqual(settings.binary, "/opt/restic")
        self.assertEqual(run_app.call_args.kwargs, {"theme_name": "ocean", "no_color": True})
        self.logging_mock.assert_called_once_with("/tmp/cli.log")

    def test_config_file_supplies_binary_and_log_file(self) -> None:
        self.load_config_mock.return_value = AppConfig(restic_binary="/usr/bin/restic", log_file="/tmp/cfg.log")

        with mock.patch.dict(os.environ, ENV, clear=True), mock.patch("snapview.cli.run_app") as run_app:
            cli.main([])

        settings, _app_config = run_app.call_args.args
        self.assertEqual(settings.binary, "/usr/bin/restic")
        self.logging_mock.assert_called_once_with("/tmp/cfg.log")

    def test_missing_environment_exits_with_status_one(self) -> None:
        stderr = io.StringIO()
        with mock.patch.dict(os.environ, {}, clear=True), mock.patch("snapview.cli.run_app") as run_app, mock.patch(
            "snapview.cli.sys.stderr", stderr
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main([])

        self.assertEqual(ctx.exception.code, 1)
        run_app.assert_not_called()
        self.assertIn("Error: RESTIC_REPOSITORY environment variable not set", stderr.getvalue())
        self.assertIn("RESTIC_PASSWORD_FILE", stderr.getvalue())

    def test_runtime_errors_exit_with_message(self) -> None:
        with mock.patch.dict(os.environ, ENV, clear=True), mock.patch(
            "snapview.cli.run_app", side_effect=SnapviewError("snapview needs an interactive terminal on stdin")
        ):
            with self.assertRaises(SystemExit) as ctx:
                cli.main([])

        self.assertEqual(ctx.exception.code, "Error: snapview needs an interactive terminal on stdin")


if __name__ == "__main__":
    unittest.main()
