"""Map transport failures and HTTP responses onto typed SDK errors."""

from __future__ import annotations

import requests

from ..exceptions import APIError, NetworkError
from .validation import ErrorBody, IncomingDataError, validate_json_as

REQUEST_ID_HEADER = "X-Request-ID"


def classify_transport_error(error: requests.RequestException) -> NetworkError:
    """Wrap a failure that happened before any response was received."""
    if isinstance(error, requests.Timeout):
        return NetworkError("request timed out", error, reason="timeout")
    return NetworkError("request failed", error)


def classify_response(response: requests.Response) -> APIError | None:
    """Return None for 2xx responses, otherwise the typed API error.

    The error body is optional: when it is missing or malformed the error is
    still built from the status code, so a failing status is never dropped.
    """
    status = response.status_code
    if 200 <= status < 300:
        return None

    header_request_id = response.headers.get(REQUEST_ID_HEADER, "") if response.headers else ""
    body = _decode_error_body(response)
    if body is None:
        return APIError.for_status(status, request_id=header_request_id)

    return APIError(
        status,
        body.message or f"API request failed with status {status}",
        code=body.code,
        details=body.details,
        request_id=body.request_id or header_request_id,
        timestamp=body.timestamp,
    )


def _decode_error_body(response: requests.Response) -> ErrorBody | None:
    content = response.content
    if not content:
        return None
    try:
        return validate_json_as(ErrorBody, content)
    except IncomingDataError:
        return None
