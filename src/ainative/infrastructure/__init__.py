"""Concrete infrastructure implementations and shared helpers."""

from .classification import classify_response, classify_transport_error
from .http import (
    RequestDispatcher,
    authorization_header,
    build_dispatcher,
    build_session,
    serialise_body,
)
from .resilience import RetryPolicy, TokenBucketRateLimiter, cancellable_sleep

__all__ = [
    "RequestDispatcher",
    "RetryPolicy",
    "TokenBucketRateLimiter",
    "authorization_header",
    "build_dispatcher",
    "build_session",
    "cancellable_sleep",
    "classify_response",
    "classify_transport_error",
    "serialise_body",
]
