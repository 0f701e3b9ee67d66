"""Exports for test fakes."""

from .dispatcher import DispatchCall, FakeDispatcher
from .http import make_response, make_session
from .resilience import FakeRateLimiter, RecordingSleep
from .tracing import FakeSpan, FakeTracer

__all__ = [
    "DispatchCall",
    "FakeDispatcher",
    "FakeRateLimiter",
    "FakeSpan",
    "FakeTracer",
    "RecordingSleep",
    "make_response",
    "make_session",
]
