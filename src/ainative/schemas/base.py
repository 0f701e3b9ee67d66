"""Shared base model for request and response payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ApiModel(BaseModel):
    """Tolerant base for platform payloads: unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
