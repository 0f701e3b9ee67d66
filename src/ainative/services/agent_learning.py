"""Agent learning: feedback on interactions and performance comparisons."""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from urllib.parse import urlencode

from ..exceptions import ValidationError
from ..protocols import Dispatcher
from ..schemas.agent_learning import (
    CompareAgentsRequest,
    CompareAgentsResponse,
    ComparisonMetric,
    PerformanceMetricsResponse,
    SubmitFeedbackRequest,
    SubmitFeedbackResponse,
)
from ._base import fetch, require_choice, require_range, require_text

_LEARNING_PATH = "/api/v1/agent-learning"
_MIN_RATING = 0.0
_MAX_RATING = 5.0


class AgentLearningService:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def submit_feedback(
        self,
        agent_id: str,
        rating: float,
        interaction_id: str = "",
        comments: str = "",
        tags: Sequence[str] | None = None,
        metadata: Mapping[str, object] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> SubmitFeedbackResponse:
        require_text(agent_id, "agent_id", "agent ID is required")
        require_range(
            rating,
            "rating",
            low=_MIN_RATING,
            high=_MAX_RATING,
            message="rating must be between 0.0 and 5.0",
        )
        request = SubmitFeedbackRequest(
            agent_id=agent_id,
            interaction_id=interaction_id or None,
            rating=rating,
            comments=comments or None,
            tags=list(tags) if tags else None,
            metadata=dict(metadata) if metadata else None,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_LEARNING_PATH}/feedback",
            request,
            SubmitFeedbackResponse,
            cancel=cancel,
        )

    def get_performance_metrics(
        self, agent_id: str, period: str = "", *, cancel: threading.Event | None = None
    ) -> PerformanceMetricsResponse:
        """Fetch metrics for one agent over `period` (for example `24h`, `7d`, `30d`)."""
        require_text(agent_id, "agent_id", "agent ID is required")
        query = {"agent_id": agent_id}
        if period:
            query["period"] = period
        path = f"{_LEARNING_PATH}/metrics?{urlencode(query)}"
        return fetch(
            self._dispatcher, "GET", path, None, PerformanceMetricsResponse, cancel=cancel
        )

    def compare_agents(
        self,
        agents: Sequence[str],
        metric: ComparisonMetric | str = ComparisonMetric.SUCCESS_RATE,
        period: str = "",
        *,
        cancel: threading.Event | None = None,
    ) -> CompareAgentsResponse:
        if len(agents) < 2:
            raise ValidationError(
                "agents", "at least two agents are required for comparison", list(agents)
            )
        request = CompareAgentsRequest(
            agents=list(agents),
            metric=require_choice(
                metric or ComparisonMetric.SUCCESS_RATE, ComparisonMetric, "metric"
            ),
            period=period or None,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_LEARNING_PATH}/compare",
            request,
            CompareAgentsResponse,
            cancel=cancel,
        )
