"""Platform health payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import ApiModel


class HealthResponse(ApiModel):
    status: str = ""
    version: str = ""
    timestamp: datetime | None = None
    services: dict[str, str] = Field(default_factory=dict)
