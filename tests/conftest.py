"""Pytest fixtures shared by the whole suite.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket
from collections.abc import Iterator

import pytest

from tests.support.errors import NetworkIsolationError

_ENV_VARS = (
    "AINATIVE_API_KEY",
    "AINATIVE_API_SECRET",
    "AINATIVE_BASE_URL",
    "AINATIVE_ORG_ID",
    "AINATIVE_PROJECT_ID",
    "AINATIVE_TIMEOUT_SECONDS",
    "AINATIVE_RATE_LIMIT",
    "AINATIVE_MAX_RETRIES",
    "AINATIVE_RETRY_INITIAL_DELAY_SECONDS",
    "AINATIVE_RETRY_MAX_DELAY_SECONDS",
    "AINATIVE_RETRY_BACKOFF_MULTIPLIER",
    "AINATIVE_RETRY_JITTER",
    "AINATIVE_DEBUG",
)


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Block all network access in tests.

    Tests that need HTTP should use `MagicMock(spec=requests.Session)` or
    `FakeDispatcher` instead.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)
    yield


@pytest.fixture(autouse=True)
def clean_ainative_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test without AINATIVE_* variables from the developer's shell.

    Each name is registered with monkeypatch before removal, so values written
    by .env loading during a test are also removed afterwards.
    """
    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
