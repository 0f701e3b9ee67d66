"""Error taxonomy for the AINative SDK.

Every failed operation raises exactly one `AINativeError`, and every
`AINativeError` is one of four concrete kinds. Callers can branch on the class
or on `err.kind`:

    try:
        client.zerodb.projects.get(project_id)
    except AINativeError as err:
        match err.kind:
            case ErrorKind.API if err.status_code == 404:
                ...
            case ErrorKind.NETWORK:
                ...
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import ClassVar, Literal

ERROR_CODE_INVALID_REQUEST = "INVALID_REQUEST"
ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"
ERROR_CODE_FORBIDDEN = "FORBIDDEN"
ERROR_CODE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_RATE_LIMIT = "RATE_LIMIT"
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"
ERROR_CODE_SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
ERROR_CODE_DECODE_ERROR = "DECODE_ERROR"

STATUS_UNKNOWN = 0

NetworkFailureReason = Literal["transport", "timeout", "cancelled"]


class ErrorKind(StrEnum):
    """Discriminator for the closed set of SDK error kinds."""

    VALIDATION = "validation"
    API = "api"
    NETWORK = "network"
    CONFIG = "config"


class AINativeError(Exception):
    """Base exception for all SDK errors.

    Not raised directly; see the four subclasses below.
    """

    kind: ClassVar[ErrorKind]

    @property
    def retryable(self) -> bool:
        return False


class ValidationError(AINativeError):
    """Raised when a caller-supplied argument fails local validation.

    Raised before any network or rate-limiter interaction.
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, field: str, message: str, value: object = None) -> None:
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"validation error for field '{field}': {message}")


class APIError(AINativeError):
    """Raised when the platform rejects or fails a request (non-2xx status)."""

    kind = ErrorKind.API

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        code: str = "",
        details: Mapping[str, object] | None = None,
        request_id: str = "",
        timestamp: str = "",
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.code = code
        self.details = dict(details) if details else {}
        self.request_id = request_id
        self.timestamp = timestamp
        if code:
            text = f"AINative API error [{status_code}:{code}]: {message}"
        else:
            text = f"AINative API error [{status_code}]: {message}"
        super().__init__(text)

    @classmethod
    def for_status(cls, status_code: int, *, request_id: str = "") -> APIError:
        """Build the fallback error used when no usable error body was returned."""
        return cls(
            status_code,
            f"API request failed with status {status_code}",
            request_id=request_id,
        )

    @classmethod
    def for_undecodable_result(
        cls, status_code: int, target: str, *, request_id: str = ""
    ) -> APIError:
        return cls(
            status_code,
            f"Response body could not be decoded as {target}",
            code=ERROR_CODE_DECODE_ERROR,
            request_id=request_id,
        )

    @classmethod
    def for_missing_result(cls, target: str) -> APIError:
        """Build the error for a successful call that produced no result.

        No HTTP status is known at this point, so `status_code` is
        `STATUS_UNKNOWN`.
        """
        return cls(
            STATUS_UNKNOWN,
            f"Response carried no result to decode as {target}",
            code=ERROR_CODE_DECODE_ERROR,
        )

    @property
    def is_authentication_error(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def is_rate_limit_error(self) -> bool:
        return self.status_code == 429

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def retryable(self) -> bool:
        return self.is_server_error or self.is_rate_limit_error


class NetworkError(AINativeError):
    """Raised when no HTTP response was obtained.

    `reason` separates plain transport failures from timeouts and from
    cancellation by the caller. Only cancellation is not retryable.
    """

    kind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        *,
        reason: NetworkFailureReason = "transport",
    ) -> None:
        self.message = message
        self.cause = cause
        self.reason: NetworkFailureReason = reason
        if cause is not None:
            text = f"network error: {message} (caused by: {cause})"
        else:
            text = f"network error: {message}"
        super().__init__(text)
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def for_cancellation(cls, stage: str) -> NetworkError:
        return cls(f"request cancelled during {stage}", reason="cancelled")

    @property
    def timed_out(self) -> bool:
        return self.reason == "timeout"

    @property
    def cancelled(self) -> bool:
        return self.reason == "cancelled"

    @property
    def retryable(self) -> bool:
        return self.reason != "cancelled"


class ConfigError(AINativeError):
    """Raised for client misconfiguration. Never retried."""

    kind = ErrorKind.CONFIG

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"configuration error for field '{field}': {message}")


class TokenDecodeError(ValueError):
    """Raised when a bearer token cannot be parsed as a JWT."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"failed to parse token: {detail}")
