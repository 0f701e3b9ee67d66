"""Offline helpers for inspecting bearer tokens and minting API key strings.

Nothing here verifies a signature or talks to the network: a token that parses
is not thereby authenticated. Use `client.auth.validate_token()` for that.

Usage example:
    from ainative.tokens import expiration_time, is_expired, parse_claims

    claims = parse_claims(access_token)
    if is_expired(access_token):
        ...
"""

from __future__ import annotations

import base64
import secrets
from datetime import UTC, datetime

import jwt
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from .exceptions import TokenDecodeError
from .schemas.base import ApiModel

_API_KEY_RANDOM_BYTES = 32
DEFAULT_API_KEY_PREFIX = "ak"


class TokenClaims(ApiModel):
    """Platform claims plus the registered JWT claims."""

    user_id: str = ""
    email: str = ""
    organization: str | None = None
    role: str = ""
    permissions: list[str] = Field(default_factory=list)
    sub: str | None = None
    iss: str | None = None
    aud: str | list[str] | None = None
    exp: float | None = None
    nbf: float | None = None
    iat: float | None = None
    jti: str | None = None

    @property
    def expires_at(self) -> datetime | None:
        if self.exp is None:
            return None
        return datetime.fromtimestamp(self.exp, tz=UTC)


def parse_claims(token: str) -> TokenClaims:
    """Decode the claims of `token` without verifying its signature.

    Raises:
        TokenDecodeError: If the token is not a structurally valid JWT or its
            claims have the wrong types.
    """
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as exc:
        raise TokenDecodeError(str(exc)) from exc
    try:
        return TokenClaims.model_validate(payload)
    except PydanticValidationError as exc:
        raise TokenDecodeError("invalid token claims") from exc


def expiration_time(token: str) -> datetime | None:
    """Return the `exp` claim as an aware UTC datetime, or None if absent."""
    return parse_claims(token).expires_at


def is_expired(token: str, *, now: datetime | None = None) -> bool:
    """Return True if the token has an `exp` claim in the past.

    A token without `exp` never expires.
    """
    expires_at = expiration_time(token)
    if expires_at is None:
        return False
    return expires_at < (now or datetime.now(UTC))


def generate_api_key(prefix: str = DEFAULT_API_KEY_PREFIX) -> str:
    """Return `<prefix>_<url-safe base64 of 32 random bytes>`."""
    key_part = base64.urlsafe_b64encode(secrets.token_bytes(_API_KEY_RANDOM_BYTES)).decode("ascii")
    return f"{prefix or DEFAULT_API_KEY_PREFIX}_{key_part}"
