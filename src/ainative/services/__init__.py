"""Domain services: thin, validated wrappers over the request dispatcher."""

from .agent_coordination import AgentCoordinationService
from .agent_learning import AgentLearningService
from .agent_orchestration import AgentOrchestrationService
from .agent_state import AgentStateService
from .agent_swarm import AgentSwarmService
from .auth import AuthService
from .embeddings import EmbeddingsService
from .zerodb import MemoryService, ProjectsService, VectorsService, ZeroDBService

__all__ = [
    "AgentCoordinationService",
    "AgentLearningService",
    "AgentOrchestrationService",
    "AgentStateService",
    "AgentSwarmService",
    "AuthService",
    "EmbeddingsService",
    "MemoryService",
    "ProjectsService",
    "VectorsService",
    "ZeroDBService",
]
