"""
Logging setup for the arm_sim package.

Every module logs through ``logging.getLogger(__name__)``, so all arm_sim
records flow through the ``arm_sim`` logger configured here: parameter
updates at DEBUG, figure acquisition and release at INFO, rejected updates
at WARNING.

Functions:
    setup_logging: Attach console (and optional file) handlers to ``arm_sim``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER: str = "arm_sim"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: str = "%H:%M:%S"


def _release_handlers(logger: logging.Logger) -> None:
    """Detach and close every handler on *logger*.

    Args:
        logger: Logger whose handlers are dropped.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    """Format *handler* with the package layout and attach it to *logger*.

    Args:
        logger: Target logger.
        handler: Handler to configure.
        level: Minimum level the handler emits.
    """
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(
    level: int = logging.INFO, log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """Configure the ``arm_sim`` logger.

    Calling it again replaces the previous handlers, so arm figures that are
    reopened do not log twice.

    Args:
        level: Logging level (e.g. ``logging.DEBUG`` to see every ``configure``).
        log_file: Optional path; the file is truncated and receives the same records.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    _release_handlers(logger)

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode="w", encoding="utf-8"), level)

    logger.debug("arm_sim logging set to %s", logging.getLevelName(level))
    return logger
