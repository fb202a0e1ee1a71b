"""Public runtime orchestration entry points.

This package groups the interactive bootstrap (`run_app`), the background
task orchestrator and the event loop contracts used by tests and
composition code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .loop import RuntimeLoopTiming
    from .orchestrator import TaskOrchestrator


def run_app(*args, **kwargs):
    """Lazily import app entrypoint to avoid heavy runtime bootstrap on import."""
    from .app import run_app as _run_app

    return _run_app(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name == "RuntimeLoopTiming":
        from . import loop as _loop

        return getattr(_loop, name)
    if name == "TaskOrchestrator":
        from . import orchestrator as _orchestrator

        return getattr(_orchestrator, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "run_app",
    "RuntimeLoopTiming",
    "TaskOrchestrator",
    "run_main_loop",
]
