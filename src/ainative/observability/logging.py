"""Logging for the SDK: one stderr handler per named logger, UTC timestamps.

SDK loggers do not propagate, so an application's own root configuration
never prints the same line twice. Debug mode (`ClientConfig.debug` or the CLI
`--verbose` flag) lowers the level so every request attempt and span is shown.

Usage example:
    from ainative.observability.logging import get_logger

    logger = get_logger("ainative.infrastructure.http")
    logger.warning("Retrying %s %s in %.2fs", method, path, delay)
"""

from __future__ import annotations

import logging
import time

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _utc_formatter() -> logging.Formatter:
    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
    formatter.converter = time.gmtime
    return formatter


def get_logger(name: str, *, level: int = logging.INFO) -> logging.Logger:
    """Return the named SDK logger, attaching its handler on first use.

    `level` only applies the first time a name is requested; later calls
    return the logger unchanged.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(_utc_formatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def set_debug(logger: logging.Logger, enabled: bool) -> None:
    logger.setLevel(logging.DEBUG if enabled else logging.INFO)
