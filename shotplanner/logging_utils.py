"""Mini README: Application-wide logging helpers for shotplanner.

Structure:
    * get_logger - factory returning module loggers once the root is set up.
    * configure_root_logger - installs the shared handler and applies the
      verbosity requested by the caller or by ``SHOTPLANNER_LOG_LEVEL``.

Usage:
    Modules call ``get_logger(__name__)`` at import time. The first call
    installs a single stream handler on the root logger using the level
    from the environment-aware settings; later calls never touch the level,
    so a CLI that picked a verbosity keeps it. ``configure_root_logger`` may
    be called again at any time to change the level without adding handlers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from .configuration import get_settings

_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Install the shotplanner handler once and set the root level.

    ``level`` defaults to ``ShotPlannerSettings.log_level``.
    """

    global _LOGGER_INITIALISED
    if level is None:
        level = get_settings().log_level
    elif isinstance(level, str):
        level = level.upper()

    root_logger = logging.getLogger()
    if not _LOGGER_INITIALISED:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        root_logger.addHandler(handler)
        _LOGGER_INITIALISED = True
    root_logger.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger, configuring the root on first use."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
