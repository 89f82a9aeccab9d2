"""Mini README: Application-wide logging helpers for the household ledger.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - one-shot helper installing the shared handler.

Usage:
    Modules import ``get_logger`` and keep a module level ``LOGGER``. The CLI
    and the web application call ``configure_root_logger`` with the level from
    settings before doing any work. Configuration happens exactly once so
    reloading modules in development does not stack handlers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _resolve_level(level: Union[int, str]) -> int:
    """Accept either numeric levels or names such as ``"debug"``."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger with the ledger's log format.

    Passing an explicit ``level`` after initialisation only adjusts the level.
    """

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        if level is not None:
            logging.getLogger().setLevel(_resolve_level(level))
        return
    level = logging.INFO if level is None else _resolve_level(level)

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
