"""Resilient request dispatcher for the AINative REST API.

Usage example:
    from ainative.config import ClientConfig
    from ainative.infrastructure.http import build_dispatcher

    dispatcher = build_dispatcher(ClientConfig(api_key="ak_live_..."))
    health = dispatcher.execute("GET", "/health", result_type=HealthResponse)
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Mapping
from typing import override
from urllib.parse import urljoin

import requests
from pydantic import BaseModel
from requests.adapters import HTTPAdapter

from .. import __version__
from ..config import ClientConfig
from ..exceptions import AINativeError, APIError, ConfigError, NetworkError
from ..observability import LoggingTracer, NoopTracer, get_logger, set_debug
from ..protocols import Dispatcher, RateLimiter, RequestScope, RetryPolicy, Span, Tracer
from .classification import REQUEST_ID_HEADER, classify_response, classify_transport_error
from .resilience import RetryPolicy as RetryPolicyImpl
from .resilience import TokenBucketRateLimiter, cancellable_sleep
from .validation import IncomingDataError, describe_schema, validate_json_as

logger = get_logger("ainative.infrastructure.http")

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
USER_AGENT = f"AINative-Python-SDK/{__version__}"
ORGANIZATION_HEADER = "X-Organization-ID"
PROJECT_HEADER = "X-Project-ID"

_POOL_CONNECTIONS = 10
_POOL_MAXSIZE = 100


def build_session() -> requests.Session:
    """Create a pooled session; retries are owned by the dispatcher, not urllib3."""
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=_POOL_CONNECTIONS, pool_maxsize=_POOL_MAXSIZE, max_retries=0
    )
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def build_dispatcher(
    config: ClientConfig,
    *,
    session: requests.Session | None = None,
    tracer: Tracer | None = None,
) -> RequestDispatcher:
    """Validate `config` and wire a dispatcher with its default collaborators.

    Raises:
        ConfigError: If the configuration is invalid.
    """
    config.validate()
    return RequestDispatcher(
        session=session or build_session(),
        config=config,
        rate_limiter=TokenBucketRateLimiter(rate_per_second=config.rate_limit),
        retry_policy=RetryPolicyImpl.from_config(config.retry),
        tracer=tracer or (LoggingTracer() if config.debug else NoopTracer()),
    )


def authorization_header(api_key: str, api_secret: str = "") -> str:
    if api_secret:
        return f"Bearer {api_key}:{api_secret}"
    return f"Bearer {api_key}"


def serialise_body(body: object) -> object:
    """Convert a request body into JSON-compatible data."""
    if body is None:
        return None
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    if isinstance(body, Mapping):
        return {str(key): value for key, value in body.items()}
    return body


class RequestDispatcher(Dispatcher):
    """Execute one logical API call with rate limiting, retries and tracing.

    Error handling:
    - Unsupported verbs raise ConfigError before any rate-limit or network use
    - Network failures, 5xx and 429 are retried with backoff up to max_retries
    - Other 4xx responses and undecodable 2xx bodies raise immediately
    - Exhausted retries raise the last classified error unchanged
    - Cancellation raises NetworkError(reason="cancelled") at any wait point
    """

    def __init__(
        self,
        *,
        session: requests.Session,
        config: ClientConfig,
        rate_limiter: RateLimiter | None = None,
        retry_policy: RetryPolicy | None = None,
        tracer: Tracer | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session = session
        self.config = config
        self.rate_limiter = rate_limiter or TokenBucketRateLimiter(
            rate_per_second=config.rate_limit
        )
        self.retry_policy = retry_policy or RetryPolicyImpl.from_config(config.retry)
        self.tracer = tracer or NoopTracer()
        self._sleep = sleep
        self._base_url = config.base_url.rstrip("/") + "/"
        set_debug(logger, config.debug)

    @override
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
        """Send the request and decode the response into `result_type`.

        Returns:
            The decoded result, or None when `result_type` is None.

        Raises:
            ConfigError: Unsupported HTTP method.
            APIError: Non-2xx response, or a 2xx body that fails to decode.
            NetworkError: Transport failure, timeout or cancellation.
        """
        verb = method.upper()
        if verb not in SUPPORTED_METHODS:
            raise ConfigError("method", f"unsupported HTTP method: {method}")

        span = self.tracer.start_span(f"ainative.{verb} {path}")
        span.set_attribute("http.method", verb)
        span.set_attribute("http.path", path)
        try:
            return self._execute(verb, path, body, result_type, cancel, scope, span)
        except AINativeError as exc:
            span.record_error(exc)
            raise
        finally:
            span.end()

    def _execute[ResultT](
        self,
        verb: str,
        path: str,
        body: object,
        result_type: type[ResultT] | None,
        cancel: threading.Event | None,
        scope: RequestScope | None,
        span: Span,
    ) -> ResultT | None:
        if not self.rate_limiter.acquire(cancel):
            raise NetworkError.for_cancellation("rate limit wait")

        url = self._url(path)
        headers = self._headers(scope)
        payload = serialise_body(body)

        attempt = 0
        while True:
            span.set_attribute("http.attempts", attempt + 1)
            logger.debug("%s %s attempt %d", verb, path, attempt + 1)
            error: AINativeError
            try:
                response = self.session.request(
                    verb,
                    url,
                    headers=headers,
                    json=payload,
                    timeout=self.config.timeout_seconds,
                )
            except requests.RequestException as exc:
                error = classify_transport_error(exc)
            else:
                span.set_attribute("http.status_code", response.status_code)
                api_error = classify_response(response)
                if api_error is None:
                    if cancel is not None and cancel.is_set():
                        raise NetworkError.for_cancellation("request")
                    return self._decode(response, result_type)
                error = api_error

            if cancel is not None and cancel.is_set():
                raise NetworkError.for_cancellation("request")

            if not self.retry_policy.should_retry(attempt, error):
                if attempt > 0 and error.retryable:
                    logger.warning(
                        "%s %s failed after %d attempts: %s", verb, path, attempt + 1, error
                    )
                raise error

            delay = self.retry_policy.next_delay(attempt + 1)
            logger.warning(
                "%s %s attempt %d failed (%s); retrying in %.2fs",
                verb,
                path,
                attempt + 1,
                error,
                delay,
            )
            if cancellable_sleep(delay, cancel, sleep=self._sleep):
                raise NetworkError.for_cancellation("retry backoff")
            attempt += 1

    def _url(self, path: str) -> str:
        return urljoin(self._base_url, path.lstrip("/"))

    def _headers(self, scope: RequestScope | None) -> dict[str, str]:
        headers = {
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": authorization_header(self.config.api_key, self.config.api_secret),
        }
        organization_id = self.config.organization_id
        project_id = self.config.project_id
        if scope is not None:
            if scope.organization_id is not None:
                organization_id = scope.organization_id
            if scope.project_id is not None:
                project_id = scope.project_id
        if organization_id:
            headers[ORGANIZATION_HEADER] = organization_id
        if project_id:
            headers[PROJECT_HEADER] = project_id
        return headers

    def _decode[ResultT](
        self, response: requests.Response, result_type: type[ResultT] | None
    ) -> ResultT | None:
        if result_type is None:
            return None
        try:
            return validate_json_as(result_type, response.content or b"null")
        except IncomingDataError as exc:
            request_id = response.headers.get(REQUEST_ID_HEADER, "") if response.headers else ""
            raise APIError.for_undecodable_result(
                response.status_code, describe_schema(result_type), request_id=request_id
            ) from exc
