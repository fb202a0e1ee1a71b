"""Operation log of backend commands shown in the bottom panel.

Entries are mirrored to the ``snapview.commands`` logger so a ``--log-file``
keeps a transcript of every restic invocation.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime

from .debug import get_logger

DEFAULT_MAX_ENTRIES = 200

logger = get_logger("commands")


@dataclass(frozen=True)
class CommandRecord:
    """What was run and how it ended, as reported by the backend."""

    command: str
    success: bool
    error_output: str | None = None


@dataclass(frozen=True)
class LogEntry:
    timestamp: datetime
    command: str
    success: bool
    error_output: str | None = None

    @property
    def status_label(self) -> str:
        return "OK" if self.success else "FAIL"

    @property
    def error_lines(self) -> list[str]:
        """First three lines of stderr for failed commands."""
        if self.success or not self.error_output:
            return []
        return self.error_output.strip().splitlines()[:3]


@dataclass
class OperationLog:
    max_entries: int = DEFAULT_MAX_ENTRIES
    _entries: deque[LogEntry] = field(default_factory=deque)

    def add(self, record: CommandRecord, timestamp: datetime | None = None) -> LogEntry:
        entry = LogEntry(
            timestamp=timestamp or datetime.now(),
            command=record.command,
            success=record.success,
            error_output=record.error_output,
        )
        self._entries.append(entry)
        while len(self._entries) > self.max_entries:
            self._entries.popleft()
        if record.success:
            logger.info("[OK] %s", record.command)
        else:
            logger.warning("[FAIL] %s: %s", record.command, (record.error_output or "").strip())
        return entry

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["CommandRecord", "DEFAULT_MAX_ENTRIES", "LogEntry", "OperationLog"]
