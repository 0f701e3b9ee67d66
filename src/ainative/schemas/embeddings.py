"""Embedding service payloads."""

from __future__ import annotations

from pydantic import Field

from .base import ApiModel

DEFAULT_EMBEDDING_MODEL = "BAAI/bge-small-en-v1.5"


class EmbeddingModel(ApiModel):
    id: str
    dimensions: int = 0
    description: str = ""
    speed: str = ""
    loaded: bool = False
    cost_per_1k: float = 0.0


class GenerateRequest(ApiModel):
    texts: list[str]
    model: str = DEFAULT_EMBEDDING_MODEL
    normalize: bool = True


class GenerateResponse(ApiModel):
    embeddings: list[list[float]] = Field(default_factory=list)
    model: str = ""
    dimensions: int = 0
    count: int = 0
    processing_time_ms: float = 0.0
    cost_usd: float = 0.0


class EmbedAndStoreRequest(ApiModel):
    project_id: str
    texts: list[str]
    metadata_list: list[dict[str, object]] | None = None
    namespace: str = "default"
    model: str = DEFAULT_EMBEDDING_MODEL


class EmbedAndStoreResponse(ApiModel):
    success: bool = False
    vectors_stored: int = 0
    embeddings_generated: int = 0
    model: str = ""
    dimensions: int = 0
    namespace: str = ""
    processing_time_ms: float = 0.0


class SemanticSearchRequest(ApiModel):
    project_id: str
    query: str
    limit: int = 10
    threshold: float = 0.7
    namespace: str = "default"
    filter_metadata: dict[str, object] | None = None
    model: str = DEFAULT_EMBEDDING_MODEL


class SemanticSearchResult(ApiModel):
    vector_id: str
    similarity: float = 0.0
    document: str = ""
    metadata: dict[str, object] | None = None
    namespace: str = ""


class SemanticSearchResponse(ApiModel):
    results: list[SemanticSearchResult] = Field(default_factory=list)
    query: str = ""
    total_results: int = 0
    model: str = ""
    processing_time_ms: float = 0.0


class EmbeddingHealthResponse(ApiModel):
    status: str = ""
    embedding_service: dict[str, object] = Field(default_factory=dict)
    url: str = ""
    cost_per_embedding: float = 0.0


class EmbeddingUsageResponse(ApiModel):
    user_id: str = ""
    embeddings_generated_today: int = 0
    embeddings_generated_month: int = 0
    cost_today_usd: float = 0.0
    cost_month_usd: float = 0.0
    model: str = ""
    service: str = ""
