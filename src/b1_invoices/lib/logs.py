"""
Logging utilities for the B1 Invoices client.

Every module logger lives under the `b1_invoices` package logger, which owns
the single stream handler. Module loggers only propagate, so records are
emitted once and LOG_LEVEL applies to the whole package from one place.
"""

import logging
import os
from pathlib import Path

ROOT_LOGGER = "b1_invoices"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _root() -> logging.Logger:
    log = logging.getLogger(ROOT_LOGGER)
    if not log.handlers:
        level = os.getenv("LOG_LEVEL", "INFO").upper()
        log.setLevel(getattr(logging, level, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        log.addHandler(handler)
    return log


def logger(name: str) -> logging.Logger:
    """
    Return the package logger for a module.

    Args:
        name: Logger name or __file__ path. A path becomes
              `b1_invoices.<module>`; bare names are nested under the
              package logger too.

    Returns:
        logging.Logger that propagates to the configured package logger.
    """
    if "/" in name or "\\" in name:
        name = Path(name).stem
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    _root()
    return logging.getLogger(name)
