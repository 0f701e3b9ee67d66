"""Agent coordination: messaging between agents and spreading work across them."""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from urllib.parse import urlencode

from ..protocols import Dispatcher
from ..schemas.agent_coordination import (
    DistributeTasksRequest,
    DistributeTasksResponse,
    DistributionStrategy,
    MessagePriority,
    SendMessageRequest,
    SendMessageResponse,
    WorkloadStatsResponse,
)
from ._base import fetch, require_choice, require_items, require_text

_COORDINATION_PATH = "/api/v1/agent-coordination"


class AgentCoordinationService:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def send_message(
        self,
        from_agent: str,
        to_agent: str,
        message: str,
        message_type: str = "",
        priority: MessagePriority | str | None = None,
        metadata: Mapping[str, object] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> SendMessageResponse:
        require_text(from_agent, "from_agent", "from agent is required")
        require_text(to_agent, "to_agent", "to agent is required")
        require_text(message, "message", "message is required")
        request = SendMessageRequest(
            from_agent=from_agent,
            to_agent=to_agent,
            message=message,
            message_type=message_type or None,
            priority=require_choice(priority, MessagePriority, "priority") if priority else None,
            metadata=dict(metadata) if metadata else None,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_COORDINATION_PATH}/messages",
            request,
            SendMessageResponse,
            cancel=cancel,
        )

    def distribute_tasks(
        self,
        tasks: Sequence[str],
        agents: Sequence[str] | None = None,
        strategy: DistributionStrategy | str = DistributionStrategy.LOAD_BALANCED,
        constraints: Mapping[str, object] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> DistributeTasksResponse:
        """Assign `tasks` to agents; without `agents` the platform picks from all of them."""
        require_items(tasks, "tasks", "at least one task is required")
        request = DistributeTasksRequest(
            tasks=list(tasks),
            agents=list(agents) if agents else None,
            strategy=require_choice(
                strategy or DistributionStrategy.LOAD_BALANCED, DistributionStrategy, "strategy"
            ),
            constraints=dict(constraints) if constraints else None,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_COORDINATION_PATH}/distribute",
            request,
            DistributeTasksResponse,
            cancel=cancel,
        )

    def get_workload_stats(
        self,
        agent_ids: Sequence[str] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> WorkloadStatsResponse:
        """Return per-agent load; `agent_ids` are sent as one comma-separated value."""
        path = f"{_COORDINATION_PATH}/workload"
        if agent_ids:
            path += "?" + urlencode({"agent_ids": ",".join(agent_ids)})
        return fetch(self._dispatcher, "GET", path, None, WorkloadStatsResponse, cancel=cancel)
