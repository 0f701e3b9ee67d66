"""Agent feedback and performance payloads.

Field names follow the wire format, including the platform's `avg_` and
`_ms` abbreviations.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from .base import ApiModel


class ComparisonMetric(StrEnum):
    SUCCESS_RATE = "success_rate"
    AVG_RATING = "avg_rating"
    RESPONSE_TIME = "response_time"


class SubmitFeedbackRequest(ApiModel):
    agent_id: str
    interaction_id: str | None = None
    rating: float
    comments: str | None = None
    tags: list[str] | None = None
    metadata: dict[str, object] | None = None


class SubmitFeedbackResponse(ApiModel):
    feedback_id: str
    status: str = ""
    message: str = ""
    timestamp: datetime | None = None


class PerformanceMetrics(ApiModel):
    agent_id: str = ""
    avg_rating: float = 0.0
    total_interactions: int = 0
    successful_tasks: int = 0
    failed_tasks: int = 0
    success_rate: float = 0.0
    avg_response_time_ms: float = 0.0
    avg_completion_time_ms: float = 0.0
    last_updated: datetime | None = None


class PerformanceMetricsResponse(ApiModel):
    metrics: PerformanceMetrics = Field(default_factory=PerformanceMetrics)
    trends: dict[str, object] | None = None
    timestamp: datetime | None = None


class CompareAgentsRequest(ApiModel):
    agents: list[str]
    metric: ComparisonMetric = ComparisonMetric.SUCCESS_RATE
    period: str | None = None


class AgentComparison(ApiModel):
    agent_id: str
    metrics: PerformanceMetrics | None = None
    ranking: int = 0
    score: float = 0.0


class CompareAgentsResponse(ApiModel):
    comparisons: list[AgentComparison] = Field(default_factory=list)
    metric: str = ""
    summary: dict[str, object] | None = None
    timestamp: datetime | None = None
