"""Agent-to-agent messaging and workload distribution payloads."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from .base import ApiModel


class MessagePriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class DistributionStrategy(StrEnum):
    ROUND_ROBIN = "round_robin"
    LOAD_BALANCED = "load_balanced"
    CAPABILITY_BASED = "capability_based"


class SendMessageRequest(ApiModel):
    from_agent: str
    to_agent: str
    message: str
    message_type: str | None = None
    priority: MessagePriority | None = None
    metadata: dict[str, object] | None = None


class SendMessageResponse(ApiModel):
    message_id: str
    status: str = ""
    timestamp: datetime | None = None


class DistributeTasksRequest(ApiModel):
    tasks: list[str]
    agents: list[str] | None = None
    strategy: DistributionStrategy = DistributionStrategy.LOAD_BALANCED
    constraints: dict[str, object] | None = None


class TaskAssignment(ApiModel):
    task_id: str
    agent_id: str = ""
    status: str = ""


class DistributeTasksResponse(ApiModel):
    assignments: list[TaskAssignment] = Field(default_factory=list)
    strategy: str = ""
    timestamp: datetime | None = None


class AgentWorkload(ApiModel):
    agent_id: str
    active_tasks: int = 0
    queued_tasks: int = 0
    completed_tasks: int = 0
    failed_tasks: int = 0
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    availability: float = 0.0


class WorkloadStatsResponse(ApiModel):
    workloads: list[AgentWorkload] = Field(default_factory=list)
    total_tasks: int = 0
    average_load: float = 0.0
    timestamp: datetime | None = None
