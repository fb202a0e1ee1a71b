"""Background execution of backend commands.

Each submitted command runs on its own daemon thread and reports exactly one
typed result on a bounded queue that the control loop drains every tick.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from queue import Empty, Queue

from ..backend import ResticClient
from ..commands import (
    Command,
    Download,
    FilesLoaded,
    ListSnapshots,
    LoadSnapshot,
    NavigateDir,
    RestoreFinished,
    SnapshotsLoaded,
    TaskResult,
)
from ..debug import get_logger
from ..errors import BackendError

DEFAULT_MAX_PENDING_RESULTS = 10

logger = get_logger("orchestrator")


class TaskOrchestrator:
    """Runs commands off the control thread and funnels their results back."""

    def __init__(self, client: ResticClient, max_pending: int = DEFAULT_MAX_PENDING_RESULTS) -> None:
        self._client = client
        self._results: Queue[TaskResult] = Queue(maxsize=max_pending)

    def _job_for(self, command: Command) -> Callable[[], TaskResult] | None:
        client = self._client
        if isinstance(command, ListSnapshots):

            def list_snapshots() -> TaskResult:
                try:
                    snapshots, record = client.list_snapshots()
                except BackendError as exc:
                    return SnapshotsLoaded(error=f"Failed to load snapshots: {exc}", record=exc.record)
                return SnapshotsLoaded(snapshots=tuple(snapshots), record=record)

            return list_snapshots

        if isinstance(command, (LoadSnapshot, NavigateDir)):

            def list_entries() -> TaskResult:
                try:
                    entries, record = client.list_entries(command.snapshot_id, command.path)
                except BackendError as exc:
                    return FilesLoaded(path=command.path, error=f"Failed to list files: {exc}", record=exc.record)
                return FilesLoaded(path=command.path, entries=tuple(entries), record=record)

            return list_entries

        if isinstance(command, Download):

            def restore() -> TaskResult:
                try:
                    target, record = client.restore(command.snapshot_id, command.path, command.target)
                except BackendError as exc:
                    return RestoreFinished(
                        path=command.path,
                        target=command.target,
                        error=f"Download failed: {exc}",
                        record=exc.record,
                    )
                return RestoreFinished(path=command.path, target=target, record=record)

            return restore

        return None

    def submit(self, command: Command) -> threading.Thread | None:
        """Start ``command`` in the background. ``Quit`` and unknown commands are ignored."""
        job = self._job_for(command)
        if job is None:
            return None

        def worker() -> None:
            result = job()
            self._results.put(result)

        logger.debug("submitting %s", type(command).__name__)
        thread = threading.Thread(
            target=worker,
            name=f"snapview-{type(command).__name__.lower()}",
            daemon=True,
        )
        thread.start()
        return thread

    def drain_results(self) -> list[TaskResult]:
        """Drain all completed results without blocking."""
        out: list[TaskResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = ["DEFAULT_MAX_PENDING_RESULTS", "TaskOrchestrator"]
