"""Agent state: versioned state snapshots and named checkpoints."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from urllib.parse import urlencode

from ..exceptions import ValidationError
from ..protocols import Dispatcher
from ..schemas.agent_state import (
    AgentStateResponse,
    CreateCheckpointRequest,
    CreateCheckpointResponse,
    ListCheckpointsResponse,
    RestoreCheckpointRequest,
    RestoreCheckpointResponse,
)
from ._base import fetch, page_query, require_text

_STATE_PATH = "/api/v1/agent-state"
_DEFAULT_PAGE_SIZE = 10


class AgentStateService:
    """Read agent state and manage checkpoints of it."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def get_state(
        self, agent_id: str, version: int = 0, *, cancel: threading.Event | None = None
    ) -> AgentStateResponse:
        """Return the agent's current state, or a specific `version` when positive."""
        require_text(agent_id, "agent_id", "agent ID is required")
        query: dict[str, object] = {"agent_id": agent_id}
        if version > 0:
            query["version"] = version
        path = f"{_STATE_PATH}/state?{urlencode(query)}"
        return fetch(self._dispatcher, "GET", path, None, AgentStateResponse, cancel=cancel)

    def create_checkpoint(
        self,
        agent_id: str,
        name: str,
        data: Mapping[str, object] | None,
        description: str = "",
        *,
        cancel: threading.Event | None = None,
    ) -> CreateCheckpointResponse:
        require_text(agent_id, "agent_id", "agent ID is required")
        require_text(name, "name", "checkpoint name is required")
        # An empty mapping is a valid (empty) state; only a missing one is rejected.
        if data is None:
            raise ValidationError("data", "checkpoint data is required", data)
        request = CreateCheckpointRequest(
            agent_id=agent_id, name=name, description=description or None, data=dict(data)
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_STATE_PATH}/checkpoints",
            request,
            CreateCheckpointResponse,
            cancel=cancel,
        )

    def restore_checkpoint(
        self, checkpoint_id: str, agent_id: str, *, cancel: threading.Event | None = None
    ) -> RestoreCheckpointResponse:
        require_text(checkpoint_id, "checkpoint_id", "checkpoint ID is required")
        require_text(agent_id, "agent_id", "agent ID is required")
        request = RestoreCheckpointRequest(checkpoint_id=checkpoint_id, agent_id=agent_id)
        return fetch(
            self._dispatcher,
            "POST",
            f"{_STATE_PATH}/restore",
            request,
            RestoreCheckpointResponse,
            cancel=cancel,
        )

    def list_checkpoints(
        self,
        agent_id: str | None = None,
        limit: int = _DEFAULT_PAGE_SIZE,
        offset: int = 0,
        *,
        cancel: threading.Event | None = None,
    ) -> ListCheckpointsResponse:
        query = page_query(limit, offset, default_limit=_DEFAULT_PAGE_SIZE)
        if agent_id:
            query["agent_id"] = agent_id
        path = f"{_STATE_PATH}/checkpoints?{urlencode(query)}"
        return fetch(
            self._dispatcher, "GET", path, None, ListCheckpointsResponse, cancel=cancel
        )
