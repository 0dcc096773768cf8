"""
logging_utils.py -- engine loggers

Every module logs through ``get_logger("<module>")``, a child of the
``craps_engine`` logger. The package logger carries a NullHandler so a host
that never configures logging sees nothing; ``setup_logging`` attaches the
engine's own stderr handler:

    -v  -> INFO   state transitions, shooter changes
    -vv -> DEBUG  every placement and settlement
    default WARNING: validation inconsistencies, RNG fallback, dropped bets
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional, Union

ENGINE_LOGGER = "craps_engine"

_LEVELS_BY_VERBOSE = (logging.WARNING, logging.INFO, logging.DEBUG)
_HANDLER_TAG = "_craps_engine_handler"

logging.getLogger(ENGINE_LOGGER).addHandler(logging.NullHandler())


class _TableFormatter(logging.Formatter):
    """Drops the package prefix: ``craps_engine.table`` prints as ``table``."""

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(ENGINE_LOGGER + "."):
            name = name[len(ENGINE_LOGGER) + 1:]
        record.component = name
        return super().format(record)


def get_logger(module: Optional[str] = None) -> logging.Logger:
    if not module:
        return logging.getLogger(ENGINE_LOGGER)
    return logging.getLogger(f"{ENGINE_LOGGER}.{module}")


def _level(verbose: Union[int, str]) -> int:
    if isinstance(verbose, str):
        level = logging.getLevelName(verbose.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level {verbose!r}")
        return level
    return _LEVELS_BY_VERBOSE[min(max(verbose, 0), len(_LEVELS_BY_VERBOSE) - 1)]


def setup_logging(
    verbose: Union[int, str] = 0,
    stream: Optional[IO[str]] = None,
    *,
    logger_name: Optional[str] = ENGINE_LOGGER,
) -> logging.Logger:
    """
    Point engine logging at ``stream`` (stderr by default).

    ``verbose`` is a -v count or a level name ("info"). Calling again
    re-targets the one engine handler instead of stacking another.
    """
    level = _level(verbose)
    logger = logging.getLogger(logger_name or "")
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)), None)
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        setattr(handler, _HANDLER_TAG, True)
        handler.setFormatter(_TableFormatter("%(asctime)s %(levelname)-7s %(component)s: %(message)s", "%H:%M:%S"))
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
    return logger
