"""Typed parsing and validation for client config files (`ainative.toml`)."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigError

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class ClientConfigFile:
    """Validated client config values loaded from a TOML file."""

    base_url: str | None = None
    organization_id: str | None = None
    project_id: str | None = None
    timeout_seconds: float | None = None
    rate_limit: int | None = None
    max_retries: int | None = None
    debug: bool | None = None


class _ClientSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str | None = None
    organization_id: str | None = None
    project_id: str | None = None
    timeout_seconds: float | None = None
    rate_limit: int | None = None
    max_retries: int | None = None
    debug: bool | None = None

    @field_validator("base_url")
    @classmethod
    def _validate_base_url(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        parsed = urlparse(text)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ValueError
        return text

    @field_validator("organization_id", "project_id")
    @classmethod
    def _validate_identifier(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip()

    @field_validator("timeout_seconds")
    @classmethod
    def _validate_timeout(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value <= 0:
            raise ValueError
        return value

    @field_validator("rate_limit")
    @classmethod
    def _validate_rate_limit(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value

    @field_validator("max_retries")
    @classmethod
    def _validate_max_retries(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 0:
            raise ValueError
        return value


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    client: _ClientSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_client_config_file(path: Path) -> ClientConfigFile:
    """Load and validate a client TOML config file.

    Raises:
        ConfigError: If the file is missing, is not valid TOML, or fails schema
            validation.
    """
    if not path.exists():
        raise ConfigError("config_file", f"config file not found: {path}")

    raw_payload = path.read_text(encoding="utf-8")
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError("config_file", f"invalid TOML in {path}: {exc}") from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(
            "config_file", f"invalid config in {path}: {_format_validation_error(exc)}"
        ) from exc

    section = model.client
    return ClientConfigFile(
        base_url=section.base_url,
        organization_id=section.organization_id,
        project_id=section.project_id,
        timeout_seconds=section.timeout_seconds,
        rate_limit=section.rate_limit,
        max_retries=section.max_retries,
        debug=section.debug,
    )
