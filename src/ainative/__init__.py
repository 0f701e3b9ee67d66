"""Package metadata and public surface for the AINative Python SDK."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

_PACKAGE_NAME = "ainative-sdk"


def _resolve_version() -> str:
    try:
        return version(_PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0+unknown"


__version__ = _resolve_version()

from .client import Client  # noqa: E402
from .config import ClientConfig, RetryConfig  # noqa: E402
from .exceptions import (  # noqa: E402
    AINativeError,
    APIError,
    ConfigError,
    ErrorKind,
    NetworkError,
    TokenDecodeError,
    ValidationError,
)

__all__ = [
    "AINativeError",
    "APIError",
    "Client",
    "ClientConfig",
    "ConfigError",
    "ErrorKind",
    "NetworkError",
    "RetryConfig",
    "TokenDecodeError",
    "ValidationError",
    "__version__",
]
