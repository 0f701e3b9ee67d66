"""Resilience utilities for infrastructure.

Usage example:
    from ainative.infrastructure.resilience import RetryPolicy, TokenBucketRateLimiter

    rate_limiter = TokenBucketRateLimiter(rate_per_second=100)
    retry_policy = RetryPolicy(max_retries=3, initial_delay_seconds=0.1)
"""

from __future__ import annotations

import random
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import override

from ..config import RetryConfig
from ..exceptions import AINativeError
from ..protocols import RateLimiter as RateLimiterProtocol
from ..protocols import RetryPolicy as RetryPolicyProtocol

_JITTER_LOW = 0.5
_JITTER_HIGH = 1.5


def cancellable_sleep(
    seconds: float,
    cancel: threading.Event | None,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Sleep for `seconds`, returning early if `cancel` fires.

    Returns:
        True if the sleep was cut short by cancellation.
    """
    if cancel is None:
        if seconds > 0:
            sleep(seconds)
        return False
    if cancel.is_set():
        return True
    if seconds <= 0:
        return False
    return cancel.wait(seconds)


class TokenBucketRateLimiter(RateLimiterProtocol):
    """Thread-safe token bucket with continuous refill.

    The bucket starts full. Refill and consume happen under one lock, so two
    threads can never both spend the same token. Waiters sleep outside the lock
    and recompute their wait after waking.
    """

    def __init__(
        self,
        rate_per_second: float,
        burst: int | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if rate_per_second <= 0:
            raise ValueError("rate_per_second must be greater than zero")
        capacity = burst if burst is not None else max(1, int(rate_per_second))
        if capacity < 1:
            raise ValueError("burst must be at least 1")
        self.rate_per_second = float(rate_per_second)
        self.burst = capacity
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._tokens = float(capacity)
        self._last_refill = clock()

    @property
    def available_tokens(self) -> float:
        with self._lock:
            self._refill(self._clock())
            return self._tokens

    @override
    def acquire(self, cancel: threading.Event | None = None) -> bool:
        """Block until a token is available, then consume it."""
        while True:
            if cancel is not None and cancel.is_set():
                return False
            with self._lock:
                self._refill(self._clock())
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return True
                wait_seconds = (1.0 - self._tokens) / self.rate_per_second
            if cancellable_sleep(wait_seconds, cancel, sleep=self._sleep):
                return False

    def _refill(self, now: float) -> None:
        elapsed = now - self._last_refill
        if elapsed > 0:
            self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate_per_second)
            self._last_refill = now


def _default_rng() -> random.Random:
    return random.Random()


@dataclass(frozen=True)
class RetryPolicy(RetryPolicyProtocol):
    """Exponential backoff retry policy for retryable failures.

    Delay before retry n (1-based) is
    `min(max_delay, initial_delay * backoff_multiplier ** (n - 1))`, scaled by a
    uniform factor in [0.5, 1.5] when jitter is on and clamped to `max_delay`.
    """

    max_retries: int = 3
    initial_delay_seconds: float = 0.1
    max_delay_seconds: float = 10.0
    backoff_multiplier: float = 2.0
    jitter: bool = True
    rng: random.Random = field(default_factory=_default_rng, compare=False, repr=False)

    @classmethod
    def from_config(cls, config: RetryConfig) -> RetryPolicy:
        return cls(
            max_retries=config.max_retries,
            initial_delay_seconds=config.initial_delay_seconds,
            max_delay_seconds=config.max_delay_seconds,
            backoff_multiplier=config.backoff_multiplier,
            jitter=config.jitter,
        )

    @override
    def should_retry(self, attempt: int, error: AINativeError) -> bool:
        return attempt < self.max_retries and error.retryable

    @override
    def next_delay(self, attempt: int) -> float:
        exponent = max(attempt, 1) - 1
        try:
            base = self.initial_delay_seconds * (self.backoff_multiplier**exponent)
        except OverflowError:
            base = self.max_delay_seconds
        delay = min(self.max_delay_seconds, base)
        if self.jitter:
            delay = min(self.max_delay_seconds, delay * self.rng.uniform(_JITTER_LOW, _JITTER_HIGH))
        return max(0.0, delay)
