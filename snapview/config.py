"""Startup configuration.

Repository credentials come from the restic environment variables. Display
and binary preferences come from an optional JSON file; all access to that
file is defensive and malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .errors import ConfigError

APP_NAME = "snapview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_RESTIC_BINARY = "restic"
DEFAULT_LIST_TIMEOUT_SECONDS = 300.0
PASSWORD_VARIABLES = ("RESTIC_PASSWORD", "RESTIC_PASSWORD_FILE", "RESTIC_PASSWORD_COMMAND")


@dataclass(frozen=True)
class ResticSettings:
    """How to reach the repository."""

    repository: str
    binary: str = DEFAULT_RESTIC_BINARY
    list_timeout: float | None = DEFAULT_LIST_TIMEOUT_SECONDS

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        repository: str | None = None,
        binary: str | None = None,
    ) -> ResticSettings:
        """Read repository and password presence from the environment.

        ``repository`` overrides ``RESTIC_REPOSITORY``. The password itself is
        never read here; restic picks it up from the inherited environment.
        Raises ``ConfigError`` when the repository or every password source
        is missing.
        """
        env = os.environ if environ is None else environ
        repo = repository or env.get("RESTIC_REPOSITORY", "")
        if not repo:
            raise ConfigError("RESTIC_REPOSITORY environment variable not set")
        if not any(env.get(name) for name in PASSWORD_VARIABLES):
            raise ConfigError(
                "No password configured. Set RESTIC_PASSWORD, RESTIC_PASSWORD_FILE, or RESTIC_PASSWORD_COMMAND"
            )
        return cls(repository=repo, binary=binary or DEFAULT_RESTIC_BINARY)


@dataclass(frozen=True)
class AppConfig:
    theme: str | None = None
    restic_binary: str | None = None
    log_file: str | None = None


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path or CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _string_option(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def load_app_config(path: Path | None = None) -> AppConfig:
    data = load_config(path)
    return AppConfig(
        theme=_string_option(data, "theme"),
        restic_binary=_string_option(data, "restic_binary"),
        log_file=_string_option(data, "log_file"),
    )


__all__ = [
    "APP_NAME",
    "AppConfig",
    "CONFIG_PATH",
    "PASSWORD_VARIABLES",
    "ResticSettings",
    "load_app_config",
    "load_config",
]
