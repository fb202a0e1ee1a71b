"""Runtime composition layer for snapview.

Builds the client, orchestrator and initial state, issues the first snapshot
listing, and starts the loop.
"""

from __future__ import annotations

import os
import sys

from ..backend import ResticClient
from ..commands import ListSnapshots
from ..config import AppConfig, ResticSettings
from ..controller import AppController
from ..debug import get_logger
from ..errors import SnapviewError
from ..render import make_renderer
from ..state import AppState
from ..ui_theme import resolve_theme
from .loop import RuntimeLoopTiming, dispatch_command, run_main_loop
from .orchestrator import TaskOrchestrator
from .terminal import TerminalController

logger = get_logger("app")


def run_app(
    settings: ResticSettings,
    app_config: AppConfig | None = None,
    theme_name: str | None = None,
    no_color: bool = False,
) -> None:
    """Run the interactive browser against ``settings.repository``."""
    app_config = app_config or AppConfig()
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not os.isatty(stdin_fd):
        raise SnapviewError("snapview needs an interactive terminal on stdin")

    theme = resolve_theme(theme_name or app_config.theme, no_color=no_color)
    client = ResticClient(settings)
    orchestrator = TaskOrchestrator(client)
    controller = AppController(AppState())
    terminal = TerminalController(stdin_fd, stdout_fd)

    logger.info("browsing repository %s", settings.repository)
    dispatch_command(controller, orchestrator, ListSnapshots())
    run_main_loop(
        controller=controller,
        terminal=terminal,
        stdin_fd=stdin_fd,
        orchestrator=orchestrator,
        timing=RuntimeLoopTiming(),
        render=make_renderer(theme),
    )


__all__ = ["run_app"]
