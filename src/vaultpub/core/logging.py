"""Logging setup for the vaultpub package logger"""

import logging
import sys
from typing import IO, Optional


LOGGER_NAME = "vaultpub"


def setup_logging(debug: bool = False, stream: Optional[IO[str]] = None) -> logging.Logger:
    """Attach a single plain-message handler to the package logger.

    Per-file trace lines are emitted at DEBUG and only show up with debug=True.
    Calling this again replaces the previous handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger for a module; names under 'vaultpub.' share the package handler."""
    return logging.getLogger(name)
