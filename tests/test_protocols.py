"""Structural conformance checks for the injectable seams."""

import requests

from ainative import Client, ClientConfig
from ainative.infrastructure.http import RequestDispatcher
from ainative.infrastructure.resilience import RetryPolicy, TokenBucketRateLimiter
from ainative.observability import LoggingTracer, NoopTracer
from ainative.protocols import Dispatcher, RateLimiter, Span, Tracer
from ainative.protocols import RetryPolicy as RetryPolicyProtocol
from tests.fakes import FakeDispatcher, FakeRateLimiter, FakeSpan, FakeTracer


def test_default_implementations_satisfy_protocols() -> None:
    config = ClientConfig(api_key="k")

    assert isinstance(TokenBucketRateLimiter(rate_per_second=1), RateLimiter)
    assert isinstance(RetryPolicy(), RetryPolicyProtocol)
    assert isinstance(NoopTracer(), Tracer)
    assert isinstance(LoggingTracer(), Tracer)
    assert isinstance(NoopTracer().start_span("x"), Span)
    assert isinstance(RequestDispatcher(session=requests.Session(), config=config), Dispatcher)
    assert isinstance(Client(config, dispatcher=FakeDispatcher()), Dispatcher)


def test_fakes_satisfy_protocols() -> None:
    assert isinstance(FakeDispatcher(), Dispatcher)
    assert isinstance(FakeRateLimiter(), RateLimiter)
    assert isinstance(FakeTracer(), Tracer)
    assert isinstance(FakeSpan("x"), Span)
