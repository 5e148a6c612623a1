"""Logging setup for the ``shikaku`` package logger.

Only the package logger is configured; the root logger and any handlers an
embedding application installs are left alone. Generation attempts log at
INFO, solver statistics at DEBUG.
"""

from __future__ import annotations

import logging
from typing import IO, Optional

PACKAGE_LOGGER = "shikaku"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


def configure_logging(level: int = logging.INFO, stream: Optional[IO[str]] = None) -> logging.Logger:
    """Route package records to ``stream`` (stderr by default) at ``level``.

    Calling it again replaces the previous handler, so CLI entrypoints can
    reconfigure after the lazy default installed by :func:`get_logger`.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger below the package logger, installing a WARNING default once."""

    package = logging.getLogger(PACKAGE_LOGGER)
    if not package.handlers:
        configure_logging(logging.WARNING)
    if not name or name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name or PACKAGE_LOGGER)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
