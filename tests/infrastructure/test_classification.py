"""Tests for response and transport error classification."""

import pytest
import requests

from ainative.exceptions import ERROR_CODE_INVALID_REQUEST, APIError, ErrorKind, NetworkError
from ainative.infrastructure.classification import classify_response, classify_transport_error
from tests.fakes import make_response


class TestClassifyResponse:
    """Tests for classify_response."""

    @pytest.mark.parametrize("status", [200, 201, 204, 299])
    def test_success_statuses_are_not_errors(self, status: int) -> None:
        assert classify_response(make_response(status, {"ok": True})) is None

    def test_error_body_fields_are_carried(self) -> None:
        response = make_response(
            400,
            {
                "message": "name is required",
                "code": ERROR_CODE_INVALID_REQUEST,
                "details": {"field": "name"},
                "request_id": "req-body",
                "timestamp": "2024-01-01T00:00:00Z",
            },
        )

        error = classify_response(response)

        assert isinstance(error, APIError)
        assert error.kind is ErrorKind.API
        assert error.status_code == 400
        assert error.message == "name is required"
        assert error.code == ERROR_CODE_INVALID_REQUEST
        assert error.details == {"field": "name"}
        assert error.request_id == "req-body"
        assert error.retryable is False
        assert str(error) == "AINative API error [400:INVALID_REQUEST]: name is required"

    def test_request_id_falls_back_to_header(self) -> None:
        response = make_response(
            404, {"message": "not found"}, headers={"X-Request-ID": "req-header"}
        )

        error = classify_response(response)

        assert error is not None
        assert error.request_id == "req-header"

    def test_body_request_id_wins_over_header(self) -> None:
        response = make_response(
            404,
            {"message": "not found", "request_id": "req-body"},
            headers={"X-Request-ID": "req-header"},
        )

        error = classify_response(response)

        assert error is not None
        assert error.request_id == "req-body"

    @pytest.mark.parametrize("raw", [b"", b"<html>Bad Gateway</html>", b"[1, 2]"])
    def test_unusable_body_still_yields_status_error(self, raw: bytes) -> None:
        """A failing status is never dropped because the body is missing or malformed."""
        error = classify_response(make_response(502, raw=raw))

        assert error is not None
        assert error.status_code == 502
        assert error.message == "API request failed with status 502"
        assert error.retryable is True

    def test_empty_message_uses_status_fallback(self) -> None:
        error = classify_response(make_response(500, {"code": "INTERNAL_ERROR"}))

        assert error is not None
        assert error.message == "API request failed with status 500"
        assert error.code == "INTERNAL_ERROR"

    @pytest.mark.parametrize(
        ("status", "retryable"),
        [(400, False), (401, False), (403, False), (404, False), (429, True), (500, True)],
    )
    def test_retryability_follows_status(self, status: int, retryable: bool) -> None:
        error = classify_response(make_response(status, {"message": "x"}))

        assert error is not None
        assert error.retryable is retryable


class TestClassifyTransportError:
    """Tests for classify_transport_error."""

    def test_timeout_is_marked(self) -> None:
        cause = requests.Timeout("read timed out")

        error = classify_transport_error(cause)

        assert isinstance(error, NetworkError)
        assert error.timed_out is True
        assert error.cancelled is False
        assert error.retryable is True
        assert error.__cause__ is cause

    def test_connection_error_is_transport(self) -> None:
        cause = requests.ConnectionError("connection refused")

        error = classify_transport_error(cause)

        assert error.reason == "transport"
        assert error.timed_out is False
        assert error.retryable is True
        assert "connection refused" in str(error)
