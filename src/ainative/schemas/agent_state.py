"""Agent state snapshots and checkpoint payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import ApiModel


class AgentStateResponse(ApiModel):
    agent_id: str
    version: int = 0
    state: dict[str, object] = Field(default_factory=dict)
    timestamp: datetime | None = None


class Checkpoint(ApiModel):
    id: str
    agent_id: str = ""
    name: str = ""
    description: str | None = None
    data: dict[str, object] = Field(default_factory=dict)
    version: int = 0
    created_at: datetime | None = None


class CreateCheckpointRequest(ApiModel):
    agent_id: str
    name: str
    description: str | None = None
    data: dict[str, object]


class CreateCheckpointResponse(ApiModel):
    checkpoint_id: str
    version: int = 0
    message: str = ""
    timestamp: datetime | None = None


class RestoreCheckpointRequest(ApiModel):
    checkpoint_id: str
    agent_id: str


class RestoreCheckpointResponse(ApiModel):
    agent_id: str
    version: int = 0
    state: dict[str, object] = Field(default_factory=dict)
    status: str = ""
    timestamp: datetime | None = None


class ListCheckpointsResponse(ApiModel):
    checkpoints: list[Checkpoint] = Field(default_factory=list)
    total_count: int = 0
    limit: int = 0
    offset: int = 0
