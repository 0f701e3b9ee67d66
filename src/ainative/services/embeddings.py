"""Embedding generation, storage and semantic search."""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence

from ..exceptions import ValidationError
from ..protocols import Dispatcher
from ..schemas.embeddings import (
    DEFAULT_EMBEDDING_MODEL,
    EmbedAndStoreRequest,
    EmbedAndStoreResponse,
    EmbeddingHealthResponse,
    EmbeddingModel,
    EmbeddingUsageResponse,
    GenerateRequest,
    GenerateResponse,
    SemanticSearchRequest,
    SemanticSearchResponse,
)
from ._base import fetch, require_items, require_range, require_text

_EMBEDDINGS_PATH = "/api/v1/embeddings"
_MAX_TEXTS_PER_REQUEST = 100
_MAX_SEARCH_LIMIT = 100
DEFAULT_NAMESPACE = "default"
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_SIMILARITY_THRESHOLD = 0.7


def _check_texts(texts: Sequence[str]) -> list[str]:
    require_items(texts, "texts", "texts list cannot be empty")
    if len(texts) > _MAX_TEXTS_PER_REQUEST:
        raise ValidationError(
            "texts", f"maximum {_MAX_TEXTS_PER_REQUEST} texts per request", len(texts)
        )
    return list(texts)


class EmbeddingsService:
    """Server-side embeddings; no vectors are computed locally."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def generate(
        self,
        texts: Sequence[str],
        model: str = DEFAULT_EMBEDDING_MODEL,
        normalize: bool = True,
        *,
        cancel: threading.Event | None = None,
    ) -> GenerateResponse:
        request = GenerateRequest(
            texts=_check_texts(texts),
            model=model or DEFAULT_EMBEDDING_MODEL,
            normalize=normalize,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_EMBEDDINGS_PATH}/generate",
            request,
            GenerateResponse,
            cancel=cancel,
        )

    def embed_and_store(
        self,
        project_id: str,
        texts: Sequence[str],
        metadata_list: Sequence[Mapping[str, object]] | None = None,
        namespace: str = DEFAULT_NAMESPACE,
        model: str = DEFAULT_EMBEDDING_MODEL,
        *,
        cancel: threading.Event | None = None,
    ) -> EmbedAndStoreResponse:
        require_text(project_id, "project_id", "project ID is required")
        checked = _check_texts(texts)
        if metadata_list is not None and len(metadata_list) != len(checked):
            raise ValidationError(
                "metadata_list",
                "metadata_list length must match texts length",
                f"texts: {len(checked)}, metadata: {len(metadata_list)}",
            )
        request = EmbedAndStoreRequest(
            project_id=project_id,
            texts=checked,
            metadata_list=[dict(item) for item in metadata_list]
            if metadata_list is not None
            else None,
            namespace=namespace or DEFAULT_NAMESPACE,
            model=model or DEFAULT_EMBEDDING_MODEL,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_EMBEDDINGS_PATH}/embed-and-store",
            request,
            EmbedAndStoreResponse,
            cancel=cancel,
        )

    def semantic_search(
        self,
        project_id: str,
        query: str,
        limit: int = DEFAULT_SEARCH_LIMIT,
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        namespace: str = DEFAULT_NAMESPACE,
        filter_metadata: Mapping[str, object] | None = None,
        model: str = DEFAULT_EMBEDDING_MODEL,
        *,
        cancel: threading.Event | None = None,
    ) -> SemanticSearchResponse:
        require_text(project_id, "project_id", "project ID is required")
        require_text(query, "query", "query cannot be empty")
        require_range(
            limit,
            "limit",
            low=1,
            high=_MAX_SEARCH_LIMIT,
            message=f"limit must be between 1 and {_MAX_SEARCH_LIMIT}",
        )
        require_range(
            threshold,
            "threshold",
            low=0.0,
            high=1.0,
            message="threshold must be between 0.0 and 1.0",
        )
        request = SemanticSearchRequest(
            project_id=project_id,
            query=query,
            limit=limit,
            threshold=threshold,
            namespace=namespace or DEFAULT_NAMESPACE,
            filter_metadata=dict(filter_metadata) if filter_metadata else None,
            model=model or DEFAULT_EMBEDDING_MODEL,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_EMBEDDINGS_PATH}/semantic-search",
            request,
            SemanticSearchResponse,
            cancel=cancel,
        )

    def list_models(self, *, cancel: threading.Event | None = None) -> list[EmbeddingModel]:
        return fetch(
            self._dispatcher,
            "GET",
            f"{_EMBEDDINGS_PATH}/models",
            None,
            list[EmbeddingModel],
            cancel=cancel,
        )

    def health_check(self, *, cancel: threading.Event | None = None) -> EmbeddingHealthResponse:
        return fetch(
            self._dispatcher,
            "GET",
            f"{_EMBEDDINGS_PATH}/health",
            None,
            EmbeddingHealthResponse,
            cancel=cancel,
        )

    def usage(self, *, cancel: threading.Event | None = None) -> EmbeddingUsageResponse:
        return fetch(
            self._dispatcher,
            "GET",
            f"{_EMBEDDINGS_PATH}/usage",
            None,
            EmbeddingUsageResponse,
            cancel=cancel,
        )
