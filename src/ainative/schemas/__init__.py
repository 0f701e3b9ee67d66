"""Typed request and response payloads for the AINative API."""

from .agent_coordination import (
    DistributeTasksResponse,
    DistributionStrategy,
    MessagePriority,
    SendMessageResponse,
    WorkloadStatsResponse,
)
from .agent_learning import (
    CompareAgentsResponse,
    ComparisonMetric,
    PerformanceMetricsResponse,
    SubmitFeedbackResponse,
)
from .agent_orchestration import (
    CreateTaskResponse,
    CreateTaskSequenceResponse,
    ExecuteTaskResponse,
    ListTasksResponse,
    Task,
    TaskStatusResponse,
)
from .agent_state import (
    AgentStateResponse,
    Checkpoint,
    CreateCheckpointResponse,
    ListCheckpointsResponse,
    RestoreCheckpointResponse,
)
from .agent_swarm import (
    Agent,
    AgentConfig,
    AgentSwarm,
    AgentType,
    ListSwarmsResponse,
    OrchestrationResponse,
    OrchestrationTask,
    SwarmConfig,
    SwarmMetrics,
    SwarmStatus,
    TaskPriority,
)
from .auth import APIKeyInfo, CreateAPIKeyResponse, TokenResponse, UserInfo
from .base import ApiModel
from .embeddings import (
    DEFAULT_EMBEDDING_MODEL,
    EmbedAndStoreResponse,
    EmbeddingHealthResponse,
    EmbeddingModel,
    EmbeddingUsageResponse,
    GenerateResponse,
    SemanticSearchResponse,
    SemanticSearchResult,
)
from .health import HealthResponse
from .zerodb import (
    ListProjectsResponse,
    MemoryItem,
    MemoryPriority,
    Project,
    ProjectStatus,
    SearchMemoryResponse,
    UpsertVectorsResponse,
    VectorItem,
    VectorSearchMatch,
    VectorSearchResponse,
)

__all__ = [
    "DEFAULT_EMBEDDING_MODEL",
    "APIKeyInfo",
    "Agent",
    "AgentConfig",
    "AgentStateResponse",
    "AgentSwarm",
    "AgentType",
    "ApiModel",
    "Checkpoint",
    "CompareAgentsResponse",
    "ComparisonMetric",
    "CreateCheckpointResponse",
    "CreateAPIKeyResponse",
    "CreateTaskResponse",
    "CreateTaskSequenceResponse",
    "DistributeTasksResponse",
    "DistributionStrategy",
    "EmbedAndStoreResponse",
    "EmbeddingHealthResponse",
    "EmbeddingModel",
    "EmbeddingUsageResponse",
    "ExecuteTaskResponse",
    "GenerateResponse",
    "HealthResponse",
    "ListProjectsResponse",
    "ListCheckpointsResponse",
    "ListSwarmsResponse",
    "ListTasksResponse",
    "MemoryItem",
    "MemoryPriority",
    "MessagePriority",
    "OrchestrationResponse",
    "OrchestrationTask",
    "PerformanceMetricsResponse",
    "Project",
    "ProjectStatus",
    "RestoreCheckpointResponse",
    "SearchMemoryResponse",
    "SemanticSearchResponse",
    "SemanticSearchResult",
    "SendMessageResponse",
    "SubmitFeedbackResponse",
    "SwarmConfig",
    "SwarmMetrics",
    "SwarmStatus",
    "Task",
    "TaskPriority",
    "TaskStatusResponse",
    "TokenResponse",
    "UpsertVectorsResponse",
    "UserInfo",
    "VectorItem",
    "VectorSearchMatch",
    "VectorSearchResponse",
    "WorkloadStatsResponse",
]
