"""Mini README: Application-wide logging helpers for dailybudget.

Structure:
    * get_logger - factory returning module loggers with baseline setup.
    * configure_root_logger - installs the shared handler and level once.

Usage:
    Every module keeps a module-level ``LOGGER = get_logger(__name__)``. The
    first call installs a single stream handler so recomputes, ledger
    mutations and collaborator failures all share one format. Repeated calls
    (for example when the web app reloads in development) never stack
    duplicate handlers.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False


def configure_root_logger(level: int = logging.INFO) -> None:
    """Configure the root logger once with the shared budget formatter."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        logging.getLogger().setLevel(level)
        return

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
