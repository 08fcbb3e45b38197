"""Mini README: Logging set-up shared by the ledger, web app and CLI.

Structure:
    * configure_root_logger - installs the console handler once and applies
      the ``EXPENSE_TRACKER_LOG_LEVEL`` setting (name or number).
    * get_logger - module logger factory used at import time.

Usage:
    Ledger modules log appends/removals at INFO and rejected input at
    WARNING. ``create_application`` and ``main_tracker run`` both apply the
    configured level, so the uvicorn reloader's worker process honours it
    too. Later calls only change the level; the handler is never duplicated.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
_LOGGER_INITIALISED = False


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Attach the console handler on first use and set the root level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module logger, installing the console handler if needed."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
