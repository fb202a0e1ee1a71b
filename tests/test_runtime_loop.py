from __future__ import annotations

import unittest
from contextlib import contextmanager
from datetime import datetime, timezone

from snapview.commands import ListSnapshots, LoadSnapshot, SnapshotsLoaded
from snapview.controller import AppController
from snapview.input.keys import ENTER, KeyEvent
from snapview.model import Snapshot
from snapview.runtime import RuntimeLoopTiming, run_main_loop
from snapview.runtime.loop import dispatch_command
from snapview.state import LOADING, READY, AppState


def _snapshot(snapshot_id: str, hour: int) -> Snapshot:
    return Snapshot(
        id=snapshot_id,
        short_id=snapshot_id,
        time=datetime(2024, 5, 1, hour, tzinfo=timezone.utc),
        paths=("/home",),
    )


class _FakeTerminal:
    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0

    @contextmanager
    def raw_mode(self):
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1

    def size(self) -> tuple[int, int]:
        return 100, 30


class _FakeOrchestrator:
    def __init__(self, pending: list | None = None) -> None:
        self.submitted: list = []
        self.pending = list(pending or [])

    def submit(self, command) -> None:
        self.submitted.append(command)

    def drain_results(self) -> list:
        out, self.pending = self.pending, []
        return out


def _scripted_keys(*items):
    """Return a key reader replaying ``items``; exception classes are raised."""
    queue = list(items)

    def reader(_fd: int, _timeout_ms: int):
        item = queue.pop(0)
        if isinstance(item, type) and issubclass(item, BaseException):
            raise item()
        return item

    return reader


class RuntimeLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self.controller = AppController(AppState(last_download_dir="/tmp"))
        self.state = self.controller.state
        self.terminal = _FakeTerminal()
        self.frames: list[tuple[int, int]] = []

    def _render(self, _state: AppState, width: int, height: int) -> None:
        self.frames.append((width, height))

    def _run(self, orchestrator: _FakeOrchestrator, *keys) -> None:
        run_main_loop(
            controller=self.controller,
            terminal=self.terminal,
            stdin_fd=0,
            orchestrator=orchestrator,
            timing=RuntimeLoopTiming(),
            render=self._render,
            key_reader=_scripted_keys(*keys),
        )

    def test_initial_listing_is_folded_before_keys(self) -> None:
        orchestrator = _FakeOrchestrator()
        dispatch_command(self.controller, orchestrator, ListSnapshots())
        self.assertEqual(self.state.mode, LOADING)
        orchestrator.pending.append(SnapshotsLoaded(snapshots=(_snapshot("b", 2), _snapshot("a", 1))))

        self._run(orchestrator, None, KeyEvent("j"), KeyEvent("q"))

        self.assertEqual(orchestrator.submitted, [ListSnapshots()])
        self.assertEqual(self.state.mode, READY)
        self.assertEqual(self.state.snapshot_cursor, 1)
        self.assertTrue(self.state.should_quit)
        self.assertEqual(self.frames, [(100, 30)] * 3)
        self.assertEqual(self.state.spinner_frame, 3)
        self.assertEqual((self.terminal.entered, self.terminal.exited), (1, 1))

    def test_commands_are_dispatched_and_quit_works_while_busy(self) -> None:
        orchestrator = _FakeOrchestrator([SnapshotsLoaded(snapshots=(_snapshot("a", 1),))])

        self._run(orchestrator, KeyEvent(ENTER), KeyEvent("q"))

        self.assertEqual(orchestrator.submitted, [LoadSnapshot(snapshot_id="a", path="/home")])
        self.assertEqual(self.state.mode, LOADING)
        self.assertTrue(self.state.should_quit)

    def test_keyboard_interrupt_while_reading_is_ignored(self) -> None:
        self._run(_FakeOrchestrator(), KeyboardInterrupt, KeyEvent("q"))

        self.assertTrue(self.state.should_quit)
        self.assertEqual(len(self.frames), 2)

    def test_terminal_is_restored_when_render_fails(self) -> None:
        def broken_render(_state, _width, _height) -> None:
            raise RuntimeError("boom")

        with self.assertRaises(RuntimeError):
            run_main_loop(
                controller=self.controller,
                terminal=self.terminal,
                stdin_fd=0,
                orchestrator=_FakeOrchestrator(),
                timing=RuntimeLoopTiming(),
                render=broken_render,
                key_reader=_scripted_keys(),
            )
        self.assertEqual(self.terminal.exited, 1)

    def test_default_poll_interval(self) -> None:
        self.assertEqual(RuntimeLoopTiming().poll_ms, 80)


if __name__ == "__main__":
    unittest.main()
