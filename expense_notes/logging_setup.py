"""Logging for the ``expense_notes`` package.

Library modules obtain loggers with ``get_logger("expense_notes.<module>")``
and never attach handlers. The CLI calls :func:`configure_logging` once at
startup, which installs one ``StreamHandler`` on the ``expense_notes`` logger.
Until then a ``NullHandler`` keeps the package silent when embedded elsewhere.

The level is taken from the explicit argument, else ``EXPENSE_NOTES_LOG_LEVEL``,
else ``INFO``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "expense_notes"
LOG_LEVEL_ENV = "EXPENSE_NOTES_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.StreamHandler | None = None


def resolve_level(level: int | str | None = None) -> int:
    """Turn ``level`` (number, numeric string, or name) into a logging level.

    Unknown names fall back to ``INFO`` rather than failing the command.
    """

    if level is None:
        level = os.getenv(LOG_LEVEL_ENV)
    if isinstance(level, int):
        return level
    if not level or not level.strip():
        return logging.INFO
    text = level.strip().upper()
    if text.isdigit():
        return int(text)
    return logging.getLevelNamesMapping().get(text, logging.INFO)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Send package log records to ``stream`` (``sys.stderr`` by default).

    Repeated calls reuse the handler installed by the first call, pointing it
    at the new stream and level.
    """

    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    resolved = resolve_level(level)

    if _handler is None:
        for h in list(logger.handlers):
            if isinstance(h, logging.NullHandler):
                logger.removeHandler(h)
        _handler = logging.StreamHandler(stream or sys.stderr)
        _handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
        logger.addHandler(_handler)
        # Records stop here; the root logger would print them a second time.
        logger.propagate = False
    else:
        _handler.setStream(stream or sys.stderr)

    _handler.setLevel(resolved)
    logger.setLevel(resolved)


def reset_logging() -> None:
    """Undo :func:`configure_logging` (used between tests)."""

    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
