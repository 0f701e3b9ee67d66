"""ZeroDB payloads: projects, vectors and memory."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from .base import ApiModel


class ProjectStatus(StrEnum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"


class MemoryPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ProjectOwner(ApiModel):
    user_id: str = ""
    email: str = ""
    organization: str | None = None


class ProjectStats(ApiModel):
    vector_count: int = 0
    memory_count: int = 0
    storage_size_bytes: int = 0
    last_access: datetime | None = None


class Project(ApiModel):
    id: str
    name: str = ""
    description: str | None = None
    status: str = ProjectStatus.ACTIVE
    metadata: dict[str, object] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    owner: ProjectOwner | None = None
    stats: ProjectStats | None = None


class CreateProjectRequest(ApiModel):
    name: str
    description: str | None = None
    metadata: dict[str, object] | None = None


class UpdateProjectRequest(ApiModel):
    name: str | None = None
    description: str | None = None
    metadata: dict[str, object] | None = None


class ListProjectsResponse(ApiModel):
    projects: list[Project] = Field(default_factory=list)
    total_count: int = 0
    limit: int = 0
    offset: int = 0


class VectorItem(ApiModel):
    id: str
    vector: list[float]
    metadata: dict[str, object] | None = None


class VectorSearchRequest(ApiModel):
    vector: list[float]
    top_k: int
    namespace: str | None = None
    filter: dict[str, object] | None = None
    include_metadata: bool = False
    include_values: bool = False


class VectorSearchMatch(ApiModel):
    id: str
    score: float = 0.0
    vector: list[float] | None = None
    metadata: dict[str, object] | None = None


class VectorSearchResponse(ApiModel):
    matches: list[VectorSearchMatch] = Field(default_factory=list)
    namespace: str = ""


class UpsertVectorsRequest(ApiModel):
    vectors: list[VectorItem]
    namespace: str | None = None


class UpsertVectorsResponse(ApiModel):
    upserted_count: int = 0
    namespace: str = ""


class MemoryItem(ApiModel):
    id: str
    content: str = ""
    title: str | None = None
    tags: list[str] | None = None
    priority: str = MemoryPriority.MEDIUM
    metadata: dict[str, object] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CreateMemoryRequest(ApiModel):
    content: str
    title: str | None = None
    tags: list[str] | None = None
    priority: MemoryPriority = MemoryPriority.MEDIUM
    metadata: dict[str, object] | None = None


class SearchMemoryRequest(ApiModel):
    query: str
    limit: int = 10
    tags: list[str] | None = None
    priority: MemoryPriority | None = None
    semantic: bool = False


class SearchMemoryResponse(ApiModel):
    results: list[MemoryItem] = Field(default_factory=list)
    total: int = 0
