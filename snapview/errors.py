"""Exception hierarchy shared by configuration, backend, and runtime layers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .oplog import CommandRecord


class SnapviewError(Exception):
    """Base class for all snapview errors."""


class ConfigError(SnapviewError):
    """Startup configuration is missing or invalid. Fatal before the UI starts."""


class BackendError(SnapviewError):
    """A restic invocation failed.

    ``record`` describes the command that was run so the operation log can
    show it even though no value was produced.
    """

    def __init__(self, message: str, record: CommandRecord | None = None) -> None:
        super().__init__(message)
        self.record = record
