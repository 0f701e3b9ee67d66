"""Agent swarm lifecycle and task orchestration."""

from __future__ import annotations

import builtins
import threading
from collections.abc import Mapping, Sequence
from urllib.parse import urlencode

from ..protocols import Dispatcher
from ..schemas.agent_swarm import (
    AgentConfig,
    AgentSwarm,
    AgentTypesResponse,
    ListSwarmsResponse,
    OrchestrationRequest,
    OrchestrationResponse,
    OrchestrationTask,
    StartSwarmRequest,
    SwarmAction,
    SwarmConfig,
    SwarmMetrics,
    SwarmStatus,
    TaskPriority,
)
from ._base import (
    fetch,
    page_query,
    path_segment,
    require_choice,
    require_items,
    require_text,
)

_SWARM_PATH = "/api/v1/agent-swarm"
_DEFAULT_PAGE_SIZE = 10


def _swarm_path(swarm_id: str, *suffix: str) -> str:
    require_text(swarm_id, "swarm_id", "swarm ID is required")
    return "/".join([f"{_SWARM_PATH}/swarms", path_segment(swarm_id), *suffix])


class AgentSwarmService:
    """Start, inspect and control multi-agent swarms."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def start(
        self,
        project_id: str,
        objective: str,
        agents: Sequence[AgentConfig],
        name: str = "",
        config: SwarmConfig | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> AgentSwarm:
        require_text(project_id, "project_id", "project ID is required")
        require_text(objective, "objective", "objective is required")
        require_items(agents, "agents", "at least one agent configuration is required")
        request = StartSwarmRequest(
            project_id=project_id,
            name=name or None,
            objective=objective,
            agents=list(agents),
            config=config,
        )
        return fetch(
            self._dispatcher, "POST", f"{_SWARM_PATH}/swarms", request, AgentSwarm, cancel=cancel
        )

    def get(self, swarm_id: str, *, cancel: threading.Event | None = None) -> AgentSwarm:
        return fetch(
            self._dispatcher, "GET", _swarm_path(swarm_id), None, AgentSwarm, cancel=cancel
        )

    def list(
        self,
        project_id: str | None = None,
        status: SwarmStatus | str | None = None,
        limit: int = _DEFAULT_PAGE_SIZE,
        offset: int = 0,
        *,
        cancel: threading.Event | None = None,
    ) -> ListSwarmsResponse:
        query = page_query(limit, offset, default_limit=_DEFAULT_PAGE_SIZE)
        if project_id:
            query["project_id"] = project_id
        if status:
            query["status"] = str(status)
        path = f"{_SWARM_PATH}/swarms?{urlencode(query)}"
        return fetch(self._dispatcher, "GET", path, None, ListSwarmsResponse, cancel=cancel)

    def stop(self, swarm_id: str, *, cancel: threading.Event | None = None) -> None:
        self._control(swarm_id, SwarmAction.STOP, cancel)

    def pause(self, swarm_id: str, *, cancel: threading.Event | None = None) -> None:
        self._control(swarm_id, SwarmAction.PAUSE, cancel)

    def resume(self, swarm_id: str, *, cancel: threading.Event | None = None) -> None:
        self._control(swarm_id, SwarmAction.RESUME, cancel)

    def orchestrate(
        self,
        swarm_id: str,
        task: str,
        context: Mapping[str, object] | None = None,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        agent_ids: Sequence[str] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> OrchestrationResponse:
        """Hand a task to a running swarm; the platform picks the agents."""
        require_text(swarm_id, "swarm_id", "swarm ID is required")
        require_text(task, "task", "task is required")
        task_priority = require_choice(priority or TaskPriority.MEDIUM, TaskPriority, "priority")
        request = OrchestrationRequest(
            swarm_id=swarm_id,
            task=task,
            context=dict(context) if context else None,
            priority=task_priority,
            agent_ids=list(agent_ids) if agent_ids else None,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_SWARM_PATH}/orchestrate",
            request,
            OrchestrationResponse,
            cancel=cancel,
        )

    def get_task(
        self, task_id: str, *, cancel: threading.Event | None = None
    ) -> OrchestrationTask:
        require_text(task_id, "task_id", "task ID is required")
        path = f"{_SWARM_PATH}/tasks/{path_segment(task_id)}"
        return fetch(self._dispatcher, "GET", path, None, OrchestrationTask, cancel=cancel)

    def list_agent_types(
        self, *, cancel: threading.Event | None = None
    ) -> builtins.list[str]:
        result = fetch(
            self._dispatcher,
            "GET",
            f"{_SWARM_PATH}/agent-types",
            None,
            AgentTypesResponse,
            cancel=cancel,
        )
        return result.agent_types

    def metrics(self, swarm_id: str, *, cancel: threading.Event | None = None) -> SwarmMetrics:
        path = _swarm_path(swarm_id, "metrics")
        return fetch(self._dispatcher, "GET", path, None, SwarmMetrics, cancel=cancel)

    def _control(
        self, swarm_id: str, action: SwarmAction, cancel: threading.Event | None
    ) -> None:
        path = _swarm_path(swarm_id, action.value)
        self._dispatcher.execute("POST", path, cancel=cancel)
