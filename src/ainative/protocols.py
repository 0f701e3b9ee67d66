"""Protocol definitions for dependency injection.

These protocols define the seams the SDK depends on, so the dispatcher and the
domain services can be unit tested with fakes instead of a live platform.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .exceptions import AINativeError


@dataclass(frozen=True)
class RequestScope:
    """Per-call overrides for the tenant scoping headers.

    `None` means "use the client default"; an empty string suppresses the header.
    """

    project_id: str | None = None
    organization_id: str | None = None


@runtime_checkable
class RateLimiter(Protocol):
    """Abstract rate limiter for outbound requests."""

    def acquire(self, cancel: threading.Event | None = None) -> bool:
        """Block until a request is allowed.

        Returns:
            True once a token was consumed, False if `cancel` fired first
            (in which case no token is consumed).
        """
        ...


@runtime_checkable
class RetryPolicy(Protocol):
    """Abstract retry policy for transient failures."""

    max_retries: int

    def should_retry(self, attempt: int, error: AINativeError) -> bool:
        """Return True if a failure on 0-based `attempt` should be re-attempted."""
        ...

    def next_delay(self, attempt: int) -> float:
        """Return the delay in seconds before retry number `attempt` (1-based)."""
        ...


@runtime_checkable
class Span(Protocol):
    """A single traced operation."""

    def set_attribute(self, key: str, value: object) -> None:
        """Attach a key/value attribute to the span."""
        ...

    def record_error(self, error: BaseException) -> None:
        """Mark the span as failed with the given error."""
        ...

    def end(self) -> None:
        """Finish the span."""
        ...


@runtime_checkable
class Tracer(Protocol):
    """Factory for spans around logical operations."""

    def start_span(self, name: str) -> Span:
        """Start and return a new span."""
        ...


@runtime_checkable
class Dispatcher(Protocol):
    """The single call contract every domain service depends on."""

    def execute[ResultT](
        self,
        method: str,
        path: str,
        body: object = None,
        result_type: type[ResultT] | None = None,
        *,
        cancel: threading.Event | None = None,
        scope: RequestScope | None = None,
    ) -> ResultT | None:
        """Perform one logical call and return the decoded result.

        Raises:
            AINativeError: Exactly one typed error on failure.
        """
        ...
