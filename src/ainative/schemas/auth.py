"""Authentication payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import ApiModel


class LoginRequest(ApiModel):
    username: str
    password: str


class RefreshTokenRequest(ApiModel):
    refresh_token: str


class TokenResponse(ApiModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int = 0
    refresh_token: str | None = None
    scope: str | None = None
    issued_at: datetime | None = None
    expires_at: datetime | None = None


class UserInfo(ApiModel):
    id: str
    email: str = ""
    name: str = ""
    organization: str | None = None
    role: str = ""
    is_active: bool = False
    created_at: datetime | None = None
    last_login_at: datetime | None = None


class APIKeyInfo(ApiModel):
    id: str
    name: str = ""
    prefix: str = ""
    is_active: bool = False
    created_at: datetime | None = None
    last_used_at: datetime | None = None
    usage_count: int = 0
    permissions: list[str] = Field(default_factory=list)
    metadata: dict[str, str] | None = None


class APIKeyList(ApiModel):
    api_keys: list[APIKeyInfo] = Field(default_factory=list)


class CreateAPIKeyRequest(ApiModel):
    name: str
    permissions: list[str] | None = None
    expires_at: datetime | None = None
    metadata: dict[str, str] | None = None


class CreateAPIKeyResponse(ApiModel):
    id: str
    name: str = ""
    key: str = ""
    prefix: str = ""


class ValidateTokenRequest(ApiModel):
    token: str
