"""Agent task orchestration payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from .base import ApiModel


class Task(ApiModel):
    id: str
    agent_id: str = ""
    task_type: str = ""
    description: str = ""
    status: str = ""
    priority: str | None = None
    context: dict[str, object] | None = None
    result: Any = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None


class CreateTaskRequest(ApiModel):
    agent_id: str
    task_type: str
    description: str
    priority: str | None = None
    context: dict[str, object] | None = None


class CreateTaskResponse(ApiModel):
    id: str
    status: str = ""
    task: Task | None = None


class ListTasksResponse(ApiModel):
    tasks: list[Task] = Field(default_factory=list)
    total: int = 0


class TaskStatusResponse(ApiModel):
    id: str
    status: str = ""
    progress: int | None = None
    message: str = ""
    result: Any = None


class ExecuteTaskRequest(ApiModel):
    params: dict[str, object] | None = None


class ExecuteTaskResponse(ApiModel):
    id: str
    status: str = ""
    result: Any = None


class TaskSequence(ApiModel):
    id: str
    name: str = ""
    tasks: list[str] = Field(default_factory=list)
    status: str = ""
    created_at: datetime | None = None


class CreateTaskSequenceRequest(ApiModel):
    name: str
    tasks: list[str]
    description: str | None = None


class CreateTaskSequenceResponse(ApiModel):
    id: str
    sequence: TaskSequence | None = None
