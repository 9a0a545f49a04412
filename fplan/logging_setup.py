"""Logging configuration for the ``fplan`` package.

``configure_logging`` attaches a single handler to the package root logger
and is called once by the CLI. Library modules only call
``get_logger(__name__)`` and never attach handlers themselves.
"""

import logging
import os
import sys
from typing import IO

LOG_LEVEL_ENV_VAR = "FPLAN_LOG_LEVEL"

_PKG_LOGGER_NAME = "fplan"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_configured = False


def parse_level(level: int | str | None) -> int:
    """Resolve a level given as int, name or numeric string.

    When level is None the FPLAN_LOG_LEVEL environment variable is used,
    falling back to WARNING.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV_VAR)
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level = level.strip().upper()
        if level.isdigit():
            return int(level)
        numeric = getattr(logging, level, None)
        if isinstance(numeric, int):
            return numeric
    return logging.WARNING


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure the package root logger exactly once.

    Args:
        level: Logging level as int or name. None defers to FPLAN_LOG_LEVEL.
        fmt: Optional format string.
        stream: Output stream, stderr by default.
    """
    global _configured
    if _configured:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)

    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    resolved = parse_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    # The root logger must not print these a second time.
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger, keeping the package silent until configured."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _configured and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
