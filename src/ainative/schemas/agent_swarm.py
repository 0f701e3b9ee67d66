"""Agent swarm payloads.

Durations (`average_task_time`, `task_timeout`, ...) are sent by the platform
as integer nanoseconds and are kept as such.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from .base import ApiModel


class SwarmStatus(StrEnum):
    INITIALIZING = "initializing"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    FAILED = "failed"
    STOPPED = "stopped"


class AgentType(StrEnum):
    ANALYZER = "analyzer"
    GENERATOR = "generator"
    OPTIMIZER = "optimizer"
    VALIDATOR = "validator"
    COORDINATOR = "coordinator"
    SECURITY_SCANNER = "security_scanner"
    CODE_REVIEWER = "code_reviewer"
    DOCUMENT_WRITER = "document_writer"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SwarmAction(StrEnum):
    STOP = "stop"
    PAUSE = "pause"
    RESUME = "resume"


class ResourceUsage(ApiModel):
    cpu_usage: float = 0.0
    memory_usage_bytes: int = 0
    network_io_bytes: int = 0
    api_calls_count: int = 0


class ResourceLimits(ApiModel):
    max_cpu: float = 0.0
    max_memory_bytes: int = 0
    max_api_calls: int = 0


class SwarmMetrics(ApiModel):
    tasks_completed: int = 0
    tasks_failed: int = 0
    tasks_in_progress: int = 0
    average_task_time: int = 0
    total_execution_time: int = 0
    efficiency: float = 0.0
    resource_usage: ResourceUsage | None = None


class AgentMetrics(ApiModel):
    tasks_completed: int = 0
    tasks_failed: int = 0
    average_task_time: int = 0
    last_active_at: datetime | None = None


class Agent(ApiModel):
    id: str
    type: str = ""
    status: str = ""
    capabilities: list[str] = Field(default_factory=list)
    config: dict[str, object] | None = None
    metrics: AgentMetrics | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SwarmConfig(ApiModel):
    max_concurrent_tasks: int = 0
    task_timeout: int = 0
    retry_count: int = 0
    resource_limits: ResourceLimits | None = None
    custom_settings: dict[str, object] | None = None


class AgentConfig(ApiModel):
    type: AgentType
    count: int = 1
    capabilities: list[str] | None = None
    config: dict[str, object] | None = None


class AgentSwarm(ApiModel):
    id: str
    project_id: str = ""
    name: str = ""
    objective: str = ""
    status: str = ""
    agents: list[Agent] = Field(default_factory=list)
    metrics: SwarmMetrics | None = None
    config: SwarmConfig | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None


class StartSwarmRequest(ApiModel):
    project_id: str
    name: str | None = None
    objective: str
    agents: list[AgentConfig]
    config: SwarmConfig | None = None


class ListSwarmsResponse(ApiModel):
    swarms: list[AgentSwarm] = Field(default_factory=list)
    total_count: int = 0
    limit: int = 0
    offset: int = 0


class OrchestrationRequest(ApiModel):
    swarm_id: str
    task: str
    context: dict[str, object] | None = None
    priority: TaskPriority = TaskPriority.MEDIUM
    agent_ids: list[str] | None = None


class OrchestrationResponse(ApiModel):
    task_id: str
    status: str = ""
    assigned_to: list[str] = Field(default_factory=list)
    estimated_duration: int = 0


class OrchestrationTask(ApiModel):
    id: str
    swarm_id: str = ""
    type: str = ""
    description: str = ""
    input: dict[str, object] = Field(default_factory=dict)
    context: dict[str, object] | None = None
    priority: str = TaskPriority.MEDIUM
    status: str = ""
    assigned_to: list[str] | None = None
    result: dict[str, object] | None = None
    created_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None


class AgentTypesResponse(ApiModel):
    agent_types: list[str] = Field(default_factory=list)
