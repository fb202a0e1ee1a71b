"""Main interactive event loop for the terminal UI.

Each tick folds finished background work, redraws, then waits a short while
for one key. The timeout keeps the busy spinner animated.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from ..commands import Command, Quit
from ..controller import AppController
from ..input import KeyEvent, read_key
from ..state import AppState
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    poll_ms: int = 80


class CommandSink(Protocol):
    def submit(self, command: Command) -> object: ...

    def drain_results(self) -> list: ...


RenderFn = Callable[[AppState, int, int], None]
KeyReader = Callable[[int, int], "KeyEvent | None"]


def dispatch_command(controller: AppController, orchestrator: CommandSink, command: Command) -> None:
    """Hand ``command`` to the orchestrator and enter its busy mode."""
    if isinstance(command, Quit):
        return
    controller.begin_command(command)
    orchestrator.submit(command)


def run_main_loop(
    controller: AppController,
    terminal: TerminalController,
    stdin_fd: int,
    orchestrator: CommandSink,
    timing: RuntimeLoopTiming,
    render: RenderFn,
    key_reader: KeyReader = read_key,
) -> None:
    """Run the interactive loop until the quit flag is set."""
    state = controller.state
    with terminal.raw_mode():
        while not state.should_quit:
            state.tick_spinner()
            for result in orchestrator.drain_results():
                controller.apply_result(result)

            columns, lines = terminal.size()
            render(state, columns, lines)

            try:
                event = key_reader(stdin_fd, timing.poll_ms)
            except KeyboardInterrupt:
                # Ignore SIGINT-style interrupts so terminal copy shortcuts do not exit the app.
                continue
            if event is None:
                continue

            command = controller.handle_key(event)
            if command is not None:
                dispatch_command(controller, orchestrator, command)


__all__ = ["CommandSink", "RuntimeLoopTiming", "dispatch_command", "run_main_loop"]
