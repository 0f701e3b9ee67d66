"""Tracer implementations used when the caller does not inject one.

Any object satisfying `ainative.protocols.Tracer` can be passed to the client,
for example a thin adapter over an OpenTelemetry tracer.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import override

from ..protocols import Span, Tracer
from .logging import get_logger, set_debug


class NoopSpan(Span):
    """Span that discards everything."""

    @override
    def set_attribute(self, key: str, value: object) -> None:
        return None

    @override
    def record_error(self, error: BaseException) -> None:
        return None

    @override
    def end(self) -> None:
        return None


_NOOP_SPAN = NoopSpan()


class NoopTracer(Tracer):
    """Default tracer: spans cost nothing and record nothing."""

    @override
    def start_span(self, name: str) -> Span:
        return _NOOP_SPAN


def _empty_attributes() -> dict[str, object]:
    return {}


@dataclass
class LoggingSpan(Span):
    """Span that writes its duration and attributes to a logger on `end()`."""

    name: str
    logger: logging.Logger
    started_at: float = field(default_factory=time.monotonic)
    attributes: dict[str, object] = field(default_factory=_empty_attributes)
    error: BaseException | None = None
    ended: bool = False

    @override
    def set_attribute(self, key: str, value: object) -> None:
        self.attributes[key] = value

    @override
    def record_error(self, error: BaseException) -> None:
        self.error = error

    @override
    def end(self) -> None:
        if self.ended:
            return
        self.ended = True
        elapsed_ms = (time.monotonic() - self.started_at) * 1000
        if self.error is None:
            self.logger.debug("span %s ok in %.1fms %s", self.name, elapsed_ms, self.attributes)
        else:
            self.logger.debug(
                "span %s failed in %.1fms %s: %s",
                self.name,
                elapsed_ms,
                self.attributes,
                self.error,
            )


def _debug_logger() -> logging.Logger:
    logger = get_logger("ainative.tracing")
    set_debug(logger, True)
    return logger


@dataclass
class LoggingTracer(Tracer):
    """Tracer used in debug mode; emits one DEBUG line per finished span.

    The default logger is switched to DEBUG so spans show without further
    setup. An injected logger keeps whatever level its owner gave it.
    """

    logger: logging.Logger = field(default_factory=_debug_logger)

    @override
    def start_span(self, name: str) -> Span:
        return LoggingSpan(name=name, logger=self.logger)
