"""The AINative client: one dispatcher, many domain services.

Usage example:
    from ainative import Client, ClientConfig

    client = Client(ClientConfig.from_env())
    print(client.health().status)

    tenant = client.scoped(project_id="proj_123")
    tenant.zerodb.vectors.search("proj_123", [0.1, 0.2, 0.3], top_k=3)
"""

from __future__ import annotations

import threading
from typing import override

import requests

from .config import ClientConfig
from .infrastructure.http import build_dispatcher
from .protocols import Dispatcher, RequestScope, Tracer
from .schemas.health import HealthResponse
from .services import (
    AgentCoordinationService,
    AgentLearningService,
    AgentOrchestrationService,
    AgentStateService,
    AgentSwarmService,
    AuthService,
    ZeroDBService,
)
from .services._base import fetch


class Client(Dispatcher):
    """Entry point to the AINative platform.

    Safe to share between threads. All calls made through one client, and
    through every client derived from it with `scoped()`, share one HTTP
    session, one rate limiter and one retry policy.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: requests.Session | None = None,
        tracer: Tracer | None = None,
        dispatcher: Dispatcher | None = None,
        scope: RequestScope | None = None,
    ) -> None:
        """Validate `config` and wire the default dispatcher.

        Raises:
            ConfigError: If `config` is invalid (for example, no API key).
        """
        if dispatcher is None:
            dispatcher = build_dispatcher(config, session=session, tracer=tracer)
        else:
            config.validate()
        self._config = config
        self._dispatcher = dispatcher
        self._scope = scope
        self.zerodb = ZeroDBService(self)
        self.agent_swarm = AgentSwarmService(self)
        self.agent_orchestration = AgentOrchestrationService(self)
        self.agent_coordination = AgentCoordinationService(self)
        self.agent_learning = AgentLearningService(self)
        self.agent_state = AgentStateService(self)
        self.auth = AuthService(self)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def scope(self) -> RequestScope | None:
        return self._scope

    @override
    def execute[ResultT](
        self,
        method: str,
        path: str,
        body: object = None,
        result_type: type[ResultT] | None = None,
        *,
        cancel: threading.Event | None = None,
        scope: RequestScope | None = None,
    ) -> ResultT | None:
        """Run a raw call; an explicit `scope` wins over the client's own."""
        return self._dispatcher.execute(
            method,
            path,
            body,
            result_type,
            cancel=cancel,
            scope=scope if scope is not None else self._scope,
        )

    def health(self, *, cancel: threading.Event | None = None) -> HealthResponse:
        return fetch(self, "GET", "/health", None, HealthResponse, cancel=cancel)

    def scoped(
        self, *, project_id: str | None = None, organization_id: str | None = None
    ) -> Client:
        """Return a client that sends different tenant headers.

        Arguments left as None inherit this client's scope; an empty string
        suppresses the header.
        """
        current = self._scope or RequestScope()
        scope = RequestScope(
            project_id=current.project_id if project_id is None else project_id,
            organization_id=current.organization_id
            if organization_id is None
            else organization_id,
        )
        return Client(self._config, dispatcher=self._dispatcher, scope=scope)
