"""Centralised, injectable configuration for the AINative client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Self
from urllib.parse import urlparse

from dotenv import load_dotenv

from .config_file import ClientConfigFile
from .exceptions import ConfigError

DEFAULT_BASE_URL = "https://api.ainative.studio"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_RATE_LIMIT = 100
DEFAULT_MAX_RETRIES = 3


@dataclass(frozen=True)
class RetryConfig:
    """Retry behaviour for transient failures (network errors, 5xx, 429)."""

    max_retries: int = DEFAULT_MAX_RETRIES
    initial_delay_seconds: float = 0.1
    max_delay_seconds: float = 10.0
    backoff_multiplier: float = 2.0
    jitter: bool = True

    def validate(self) -> None:
        if self.max_retries < 0:
            raise ConfigError("max_retries", "must be zero or greater")
        if self.initial_delay_seconds <= 0:
            raise ConfigError("initial_delay_seconds", "must be greater than zero")
        if self.max_delay_seconds < self.initial_delay_seconds:
            raise ConfigError("max_delay_seconds", "must not be less than initial_delay_seconds")
        if self.backoff_multiplier <= 1:
            raise ConfigError("backoff_multiplier", "must be greater than 1")


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration for one client instance.

    Load from environment with `ClientConfig.from_env()` or construct directly.
    Per-request tenant scoping is done with `Client.scoped()`, not by mutating
    this object.
    """

    api_key: str = ""
    api_secret: str = ""
    base_url: str = DEFAULT_BASE_URL
    organization_id: str = ""
    project_id: str = ""
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    rate_limit: int = DEFAULT_RATE_LIMIT
    retry: RetryConfig = field(default_factory=RetryConfig)
    debug: bool = False

    def validate(self) -> None:
        """Fail fast on misconfiguration.

        Raises:
            ConfigError: For a missing API key, a malformed base URL, or
                out-of-range numeric settings.
        """
        if not self.api_key.strip():
            raise ConfigError("api_key", "API key is required")
        parsed = urlparse(self.base_url)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            raise ConfigError("base_url", f"invalid base URL: {self.base_url!r}")
        if self.timeout_seconds <= 0:
            raise ConfigError("timeout_seconds", "must be greater than zero")
        if self.rate_limit <= 0:
            raise ConfigError("rate_limit", "must be greater than zero")
        self.retry.validate()

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            ClientConfig instance populated from environment. Not validated, so
            commands that never touch the network can still run without a key.
        """
        load_dotenv(dotenv_path)

        return cls(
            api_key=os.getenv("AINATIVE_API_KEY", "").strip(),
            api_secret=os.getenv("AINATIVE_API_SECRET", "").strip(),
            base_url=os.getenv("AINATIVE_BASE_URL", "").strip() or DEFAULT_BASE_URL,
            organization_id=os.getenv("AINATIVE_ORG_ID", "").strip(),
            project_id=os.getenv("AINATIVE_PROJECT_ID", "").strip(),
            timeout_seconds=_parse_float(
                os.getenv("AINATIVE_TIMEOUT_SECONDS", ""),
                default=DEFAULT_TIMEOUT_SECONDS,
                env_name="AINATIVE_TIMEOUT_SECONDS",
            ),
            rate_limit=_parse_int(
                os.getenv("AINATIVE_RATE_LIMIT", ""),
                default=DEFAULT_RATE_LIMIT,
                env_name="AINATIVE_RATE_LIMIT",
            ),
            retry=RetryConfig(
                max_retries=_parse_int(
                    os.getenv("AINATIVE_MAX_RETRIES", ""),
                    default=DEFAULT_MAX_RETRIES,
                    env_name="AINATIVE_MAX_RETRIES",
                ),
                initial_delay_seconds=_parse_float(
                    os.getenv("AINATIVE_RETRY_INITIAL_DELAY_SECONDS", ""),
                    default=0.1,
                    env_name="AINATIVE_RETRY_INITIAL_DELAY_SECONDS",
                ),
                max_delay_seconds=_parse_float(
                    os.getenv("AINATIVE_RETRY_MAX_DELAY_SECONDS", ""),
                    default=10.0,
                    env_name="AINATIVE_RETRY_MAX_DELAY_SECONDS",
                ),
                backoff_multiplier=_parse_float(
                    os.getenv("AINATIVE_RETRY_BACKOFF_MULTIPLIER", ""),
                    default=2.0,
                    env_name="AINATIVE_RETRY_BACKOFF_MULTIPLIER",
                ),
                jitter=_parse_bool(
                    os.getenv("AINATIVE_RETRY_JITTER", ""),
                    default=True,
                    env_name="AINATIVE_RETRY_JITTER",
                ),
            ),
            debug=_parse_bool(
                os.getenv("AINATIVE_DEBUG", ""),
                default=False,
                env_name="AINATIVE_DEBUG",
            ),
        )

    def with_overrides(
        self,
        *,
        api_key: str | None = None,
        api_secret: str | None = None,
        base_url: str | None = None,
        organization_id: str | None = None,
        project_id: str | None = None,
        debug: bool | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            api_key=self.api_key if api_key is None else api_key.strip(),
            api_secret=self.api_secret if api_secret is None else api_secret.strip(),
            base_url=self.base_url if base_url is None else base_url.strip(),
            organization_id=self.organization_id
            if organization_id is None
            else organization_id.strip(),
            project_id=self.project_id if project_id is None else project_id.strip(),
            debug=self.debug if debug is None else debug,
        )

    def with_file_overrides(self, file_config: ClientConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            base_url=self.base_url if file_config.base_url is None else file_config.base_url,
            organization_id=self.organization_id
            if file_config.organization_id is None
            else file_config.organization_id,
            project_id=self.project_id
            if file_config.project_id is None
            else file_config.project_id,
            timeout_seconds=self.timeout_seconds
            if file_config.timeout_seconds is None
            else file_config.timeout_seconds,
            rate_limit=self.rate_limit
            if file_config.rate_limit is None
            else file_config.rate_limit,
            retry=self.retry
            if file_config.max_retries is None
            else replace(self.retry, max_retries=file_config.max_retries),
            debug=self.debug if file_config.debug is None else file_config.debug,
        )


def _parse_float(value: str, *, default: float, env_name: str) -> float:
    text = value.strip()
    if not text:
        return default
    try:
        return float(text)
    except ValueError as exc:
        raise ConfigError(env_name, "must be a number") from exc


def _parse_int(value: str, *, default: int, env_name: str) -> int:
    text = value.strip()
    if not text:
        return default
    try:
        return int(text)
    except ValueError as exc:
        raise ConfigError(env_name, "must be an integer") from exc


def _parse_bool(value: str, *, default: bool, env_name: str) -> bool:
    """Parse an optional boolean from an environment variable."""
    text = value.strip().lower()
    if not text:
        return default
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    raise ConfigError(env_name, "must be a boolean value (true/false, 1/0, yes/no, on/off)")
