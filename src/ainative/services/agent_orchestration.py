"""Agent task orchestration: single tasks, their execution and task sequences."""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from urllib.parse import urlencode

from ..protocols import Dispatcher
from ..schemas.agent_orchestration import (
    CreateTaskRequest,
    CreateTaskResponse,
    CreateTaskSequenceRequest,
    CreateTaskSequenceResponse,
    ExecuteTaskRequest,
    ExecuteTaskResponse,
    ListTasksResponse,
    TaskStatusResponse,
)
from ._base import fetch, page_query, path_segment, require_items, require_text

_ORCHESTRATION_PATH = "/api/v1/agent-orchestration"
_DEFAULT_PAGE_SIZE = 10


def _task_path(task_id: str, action: str) -> str:
    require_text(task_id, "task_id", "task ID is required")
    return f"{_ORCHESTRATION_PATH}/tasks/{path_segment(task_id)}/{action}"


class AgentOrchestrationService:
    """Create and run tasks on individual agents."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def create_task(
        self,
        agent_id: str,
        task_type: str,
        description: str,
        priority: str = "",
        context: Mapping[str, object] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> CreateTaskResponse:
        require_text(agent_id, "agent_id", "agent ID is required")
        require_text(task_type, "task_type", "task type is required")
        require_text(description, "description", "description is required")
        request = CreateTaskRequest(
            agent_id=agent_id,
            task_type=task_type,
            description=description,
            priority=priority or None,
            context=dict(context) if context else None,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_ORCHESTRATION_PATH}/tasks",
            request,
            CreateTaskResponse,
            cancel=cancel,
        )

    def list_tasks(
        self,
        agent_id: str | None = None,
        status: str | None = None,
        limit: int = _DEFAULT_PAGE_SIZE,
        offset: int = 0,
        *,
        cancel: threading.Event | None = None,
    ) -> ListTasksResponse:
        query = page_query(limit, offset, default_limit=_DEFAULT_PAGE_SIZE)
        if agent_id:
            query["agent_id"] = agent_id
        if status:
            query["status"] = status
        path = f"{_ORCHESTRATION_PATH}/tasks?{urlencode(query)}"
        return fetch(self._dispatcher, "GET", path, None, ListTasksResponse, cancel=cancel)

    def get_task_status(
        self, task_id: str, *, cancel: threading.Event | None = None
    ) -> TaskStatusResponse:
        path = _task_path(task_id, "status")
        return fetch(self._dispatcher, "GET", path, None, TaskStatusResponse, cancel=cancel)

    def execute_task(
        self,
        task_id: str,
        params: Mapping[str, object] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> ExecuteTaskResponse:
        path = _task_path(task_id, "execute")
        request = ExecuteTaskRequest(params=dict(params) if params else None)
        return fetch(
            self._dispatcher, "POST", path, request, ExecuteTaskResponse, cancel=cancel
        )

    def create_task_sequence(
        self,
        name: str,
        tasks: Sequence[str],
        description: str = "",
        *,
        cancel: threading.Event | None = None,
    ) -> CreateTaskSequenceResponse:
        """Group existing task IDs into a sequence that runs in order."""
        require_text(name, "name", "name is required")
        require_items(tasks, "tasks", "at least one task is required")
        request = CreateTaskSequenceRequest(
            name=name, tasks=list(tasks), description=description or None
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_ORCHESTRATION_PATH}/sequences",
            request,
            CreateTaskSequenceResponse,
            cancel=cancel,
        )
