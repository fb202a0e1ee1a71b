"""Environment validation and JSON config loading tests."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from snapview.config import AppConfig, ResticSettings, load_app_config, load_config
from snapview.errors import ConfigError


class ResticSettingsTests(unittest.TestCase):
    def test_repository_and_password_file_are_accepted(self) -> None:
        settings = ResticSettings.from_env(
            {"RESTIC_REPOSITORY": "/srv/repo", "RESTIC_PASSWORD_FILE": "/root/.pw"}
        )

        self.assertEqual(settings.repository, "/srv/repo")
        self.assertEqual(settings.binary, "restic")
        self.assertEqual(settings.list_timeout, 300.0)

    def test_repo_option_overrides_environment(self) -> None:
        settings = ResticSettings.from_env(
            {"RESTIC_REPOSITORY": "/srv/repo", "RESTIC_PASSWORD": "pw"},
            repository="s3:other",
            binary="/opt/restic",
        )

        self.assertEqual(settings.repository, "s3:other")
        self.assertEqual(settings.binary, "/opt/restic")

    def test_missing_repository_is_fatal(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            ResticSettings.from_env({"RESTIC_PASSWORD": "pw"})

        self.assertEqual(str(ctx.exception), "RESTIC_REPOSITORY environment variable not set")

    def test_missing_password_is_fatal(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            ResticSettings.from_env({"RESTIC_REPOSITORY": "/srv/repo", "RESTIC_PASSWORD": ""})

        self.assertIn("RESTIC_PASSWORD_COMMAND", str(ctx.exception))

    def test_password_command_counts(self) -> None:
        settings = ResticSettings.from_env({"RESTIC_REPOSITORY": "/srv/repo", "RESTIC_PASSWORD_COMMAND": "pass x"})

        self.assertEqual(settings.repository, "/srv/repo")


class ConfigFileTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "config.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(load_config(self.path), {})
        self.assertEqual(load_app_config(self.path), AppConfig())

    def test_malformed_or_non_object_file_gives_defaults(self) -> None:
        for payload in ("{broken", "[1, 2]"):
            with self.subTest(payload=payload):
                self.path.write_text(payload, encoding="utf-8")
                self.assertEqual(load_config(self.path), {})

    def test_string_options_are_read_and_stripped(self) -> None:
        self.path.write_text(
            json.dumps({"theme": " ocean ", "restic_binary": "/opt/restic", "log_file": "", "extra": 1}),
            encoding="utf-8",
        )

        config = load_app_config(self.path)
        self.assertEqual(config, AppConfig(theme="ocean", restic_binary="/opt/restic", log_file=None))

    def test_non_string_options_are_ignored(self) -> None:
        self.path.write_text(json.dumps({"theme": 3, "log_file": ["x"]}), encoding="utf-8")

        self.assertEqual(load_app_config(self.path), AppConfig())


if __name__ == "__main__":
    unittest.main()
