"""Logging and tracing helpers."""

from .logging import get_logger, set_debug
from .tracing import LoggingTracer, NoopTracer

__all__ = ["LoggingTracer", "NoopTracer", "get_logger", "set_debug"]
