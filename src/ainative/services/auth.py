"""Authentication and API key management."""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime, timedelta

from ..protocols import Dispatcher
from ..schemas.auth import (
    APIKeyInfo,
    APIKeyList,
    CreateAPIKeyRequest,
    CreateAPIKeyResponse,
    LoginRequest,
    RefreshTokenRequest,
    TokenResponse,
    UserInfo,
    ValidateTokenRequest,
)
from ._base import fetch, path_segment, require_text

_AUTH_PATH = "/api/v1/auth"


def _with_expiry(token: TokenResponse) -> TokenResponse:
    """Fill in `expires_at` from `issued_at + expires_in`.

    When the platform omits `issued_at` the local receipt time is used.
    """
    issued_at = token.issued_at or datetime.now(UTC)
    return token.model_copy(
        update={
            "issued_at": issued_at,
            "expires_at": issued_at + timedelta(seconds=token.expires_in),
        }
    )


class AuthService:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def login(
        self, username: str, password: str, *, cancel: threading.Event | None = None
    ) -> TokenResponse:
        require_text(username, "username", "username is required")
        require_text(password, "password", "password is required")
        request = LoginRequest(username=username, password=password)
        token = fetch(
            self._dispatcher, "POST", f"{_AUTH_PATH}/login", request, TokenResponse, cancel=cancel
        )
        return _with_expiry(token)

    def refresh(
        self, refresh_token: str, *, cancel: threading.Event | None = None
    ) -> TokenResponse:
        require_text(refresh_token, "refresh_token", "refresh token is required")
        request = RefreshTokenRequest(refresh_token=refresh_token)
        token = fetch(
            self._dispatcher,
            "POST",
            f"{_AUTH_PATH}/refresh",
            request,
            TokenResponse,
            cancel=cancel,
        )
        return _with_expiry(token)

    def me(self, *, cancel: threading.Event | None = None) -> UserInfo:
        return fetch(self._dispatcher, "GET", f"{_AUTH_PATH}/me", None, UserInfo, cancel=cancel)

    def list_api_keys(self, *, cancel: threading.Event | None = None) -> list[APIKeyInfo]:
        result = fetch(
            self._dispatcher, "GET", f"{_AUTH_PATH}/api-keys", None, APIKeyList, cancel=cancel
        )
        return result.api_keys

    def create_api_key(
        self,
        name: str,
        permissions: Sequence[str] | None = None,
        expires_at: datetime | None = None,
        metadata: Mapping[str, str] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> CreateAPIKeyResponse:
        """Create a key; the secret in the response is only ever returned once."""
        require_text(name, "name", "name is required")
        request = CreateAPIKeyRequest(
            name=name,
            permissions=list(permissions) if permissions else None,
            expires_at=expires_at,
            metadata=dict(metadata) if metadata else None,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_AUTH_PATH}/api-keys",
            request,
            CreateAPIKeyResponse,
            cancel=cancel,
        )

    def revoke_api_key(self, key_id: str, *, cancel: threading.Event | None = None) -> None:
        require_text(key_id, "key_id", "key ID is required")
        self._dispatcher.execute(
            "DELETE", f"{_AUTH_PATH}/api-keys/{path_segment(key_id)}", cancel=cancel
        )

    def get_api_key(self, key_id: str, *, cancel: threading.Event | None = None) -> APIKeyInfo:
        require_text(key_id, "key_id", "key ID is required")
        path = f"{_AUTH_PATH}/api-keys/{path_segment(key_id)}"
        return fetch(self._dispatcher, "GET", path, None, APIKeyInfo, cancel=cancel)

    def validate_token(self, token: str, *, cancel: threading.Event | None = None) -> UserInfo:
        """Ask the platform whether `token` is valid and who it belongs to."""
        require_text(token, "token", "token is required")
        request = ValidateTokenRequest(token=token)
        return fetch(
            self._dispatcher, "POST", f"{_AUTH_PATH}/validate", request, UserInfo, cancel=cancel
        )

    def logout(self, *, cancel: threading.Event | None = None) -> None:
        self._dispatcher.execute("POST", f"{_AUTH_PATH}/logout", cancel=cancel)
