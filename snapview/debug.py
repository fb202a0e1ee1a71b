"""Package logger setup.

Nothing may reach the terminal while it is in raw mode, so the package
logger only ever writes to a file or to a ``NullHandler``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

LOGGER_NAME = "snapview"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED = False


def _debug_enabled() -> bool:
    level_env = os.environ.get("SNAPVIEW_DEBUG", "0").lower()
    return level_env in {"1", "true", "yes", "on", "debug"}


def configure_logging(log_file: str | Path | None = None) -> logging.Logger:
    """Attach handlers to the package logger once.

    ``log_file`` wins over ``SNAPVIEW_LOG``. When neither is set the logger
    is silenced with a ``NullHandler``.
    """
    global _CONFIGURED
    logger = logging.getLogger(LOGGER_NAME)
    if _CONFIGURED:
        return logger

    level = logging.DEBUG if _debug_enabled() else logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    log_path = log_file or os.environ.get("SNAPVIEW_LOG")
    if log_path:
        log_path = Path(os.path.expanduser(str(log_path)))
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            handler = logging.NullHandler()
        else:
            handler.setLevel(level)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    logger.addHandler(handler)
    _CONFIGURED = True
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger, e.g. ``get_logger("backend")``."""
    return logging.getLogger(LOGGER_NAME).getChild(name)
