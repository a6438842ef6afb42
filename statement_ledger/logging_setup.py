"""Logging for the ``statement_ledger`` package.

Library modules only call ``get_logger("statement_ledger.<module>")``; the CLI
calls ``configure_logging`` once at startup to attach a single stderr handler
to the package root logger. Stdout is never used: the ledger may be written
there.

The level also decides how the ledger is written. With DEBUG enabled
(``--log-level DEBUG`` or ``STATEMENT_LEDGER_LOG_LEVEL=DEBUG``) the writer
flushes its sink after every transaction, so when a statement fails halfway
the complete transactions before the failure are already on disk next to the
debug trail that explains it (see ``debug_enabled``).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "statement_ledger"
_LEVEL_ENV = "STATEMENT_LEDGER_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_CONFIGURED = False


def resolve_level(level: int | str | None = None) -> int:
    """Return a numeric level from an int, a level name, or the environment.

    ``None`` falls back to ``STATEMENT_LEDGER_LOG_LEVEL`` and then ``INFO``.
    Unknown names raise ``ValueError`` instead of silently logging at the
    wrong level.
    """

    if level is None:
        level = os.getenv(_LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    if numeric is None:
        raise ValueError(f"unknown log level: {level!r}")
    return numeric


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> int:
    """Attach the stderr handler to the package logger; return the level in effect.

    Idempotent: later calls leave the first configuration in place.
    """

    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _CONFIGURED:
        return logger.level

    resolved = resolve_level(level)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True
    return resolved


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


def debug_enabled() -> bool:
    """Whether the ledger writer should flush after every transaction."""

    return logging.getLogger(_PKG_LOGGER_NAME).isEnabledFor(logging.DEBUG)


__all__ = ["configure_logging", "debug_enabled", "get_logger", "resolve_level"]
