"""ZeroDB services: projects, vectors, memory and embeddings."""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from urllib.parse import urlencode

from ..exceptions import ValidationError
from ..protocols import Dispatcher
from ..schemas.zerodb import (
    CreateMemoryRequest,
    CreateProjectRequest,
    ListProjectsResponse,
    MemoryItem,
    MemoryPriority,
    Project,
    ProjectStatus,
    SearchMemoryRequest,
    SearchMemoryResponse,
    UpdateProjectRequest,
    UpsertVectorsRequest,
    UpsertVectorsResponse,
    VectorItem,
    VectorSearchRequest,
    VectorSearchResponse,
)
from ._base import (
    fetch,
    page_query,
    path_segment,
    require_choice,
    require_items,
    require_text,
)
from .embeddings import EmbeddingsService

_PROJECTS_PATH = "/api/v1/zerodb/projects"
_MEMORY_PATH = "/api/v1/memory"
_DEFAULT_PAGE_SIZE = 10
_DEFAULT_TOP_K = 5


def _project_path(project_id: str, *suffix: str) -> str:
    require_text(project_id, "project_id", "project ID is required")
    return "/".join([_PROJECTS_PATH, path_segment(project_id), *suffix])


class ProjectsService:
    """Project lifecycle operations."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def create(
        self,
        name: str,
        description: str = "",
        metadata: Mapping[str, object] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> Project:
        require_text(name, "name", "project name is required")
        request = CreateProjectRequest(
            name=name,
            description=description or None,
            metadata=dict(metadata) if metadata else None,
        )
        return fetch(
            self._dispatcher, "POST", _PROJECTS_PATH, request, Project, cancel=cancel
        )

    def list(
        self,
        limit: int = _DEFAULT_PAGE_SIZE,
        offset: int = 0,
        status: ProjectStatus | str | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> ListProjectsResponse:
        query = page_query(limit, offset, default_limit=_DEFAULT_PAGE_SIZE)
        if status:
            query["status"] = str(status)
        path = f"{_PROJECTS_PATH}?{urlencode(query)}"
        return fetch(
            self._dispatcher, "GET", path, None, ListProjectsResponse, cancel=cancel
        )

    def get(self, project_id: str, *, cancel: threading.Event | None = None) -> Project:
        path = _project_path(project_id)
        return fetch(self._dispatcher, "GET", path, None, Project, cancel=cancel)

    def update(
        self,
        project_id: str,
        name: str | None = None,
        description: str | None = None,
        metadata: Mapping[str, object] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> Project:
        path = _project_path(project_id)
        if name is None and description is None and metadata is None:
            raise ValidationError("request", "at least one field must be updated", None)
        request = UpdateProjectRequest(
            name=name,
            description=description,
            metadata=dict(metadata) if metadata is not None else None,
        )
        return fetch(self._dispatcher, "PUT", path, request, Project, cancel=cancel)

    def suspend(
        self, project_id: str, reason: str = "", *, cancel: threading.Event | None = None
    ) -> None:
        path = _project_path(project_id, "suspend")
        self._dispatcher.execute("POST", path, {"reason": reason}, cancel=cancel)

    def activate(self, project_id: str, *, cancel: threading.Event | None = None) -> None:
        path = _project_path(project_id, "activate")
        self._dispatcher.execute("POST", path, cancel=cancel)

    def delete(self, project_id: str, *, cancel: threading.Event | None = None) -> None:
        path = _project_path(project_id)
        self._dispatcher.execute("DELETE", path, cancel=cancel)


class VectorsService:
    """Vector upsert and similarity search within a project."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def search(
        self,
        project_id: str,
        vector: Sequence[float],
        top_k: int = _DEFAULT_TOP_K,
        namespace: str = "",
        filter: Mapping[str, object] | None = None,
        include_metadata: bool = False,
        include_values: bool = False,
        *,
        cancel: threading.Event | None = None,
    ) -> VectorSearchResponse:
        path = _project_path(project_id, "vectors", "search")
        require_items(vector, "vector", "vector cannot be empty")
        request = VectorSearchRequest(
            vector=list(vector),
            top_k=top_k if top_k > 0 else _DEFAULT_TOP_K,
            namespace=namespace or None,
            filter=dict(filter) if filter else None,
            include_metadata=include_metadata,
            include_values=include_values,
        )
        return fetch(
            self._dispatcher, "POST", path, request, VectorSearchResponse, cancel=cancel
        )

    def upsert(
        self,
        project_id: str,
        vectors: Sequence[VectorItem],
        namespace: str = "",
        *,
        cancel: threading.Event | None = None,
    ) -> UpsertVectorsResponse:
        path = _project_path(project_id, "vectors")
        require_items(vectors, "vectors", "vectors cannot be empty")
        for index, item in enumerate(vectors):
            if not item.vector:
                raise ValidationError(f"vectors[{index}].vector", "vector cannot be empty", item.id)
        request = UpsertVectorsRequest(vectors=list(vectors), namespace=namespace or None)
        return fetch(
            self._dispatcher, "POST", path, request, UpsertVectorsResponse, cancel=cancel
        )


class MemoryService:
    """Agent memory storage and search."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    def create(
        self,
        content: str,
        title: str = "",
        tags: Sequence[str] | None = None,
        priority: MemoryPriority | str = MemoryPriority.MEDIUM,
        metadata: Mapping[str, object] | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> MemoryItem:
        require_text(content, "content", "content is required")
        request = CreateMemoryRequest(
            content=content,
            title=title or None,
            tags=list(tags) if tags else None,
            priority=require_choice(priority or MemoryPriority.MEDIUM, MemoryPriority, "priority"),
            metadata=dict(metadata) if metadata else None,
        )
        return fetch(
            self._dispatcher, "POST", _MEMORY_PATH, request, MemoryItem, cancel=cancel
        )

    def search(
        self,
        query: str,
        limit: int = _DEFAULT_PAGE_SIZE,
        tags: Sequence[str] | None = None,
        priority: MemoryPriority | str | None = None,
        semantic: bool = False,
        *,
        cancel: threading.Event | None = None,
    ) -> SearchMemoryResponse:
        require_text(query, "query", "query is required")
        request = SearchMemoryRequest(
            query=query,
            limit=limit if limit > 0 else _DEFAULT_PAGE_SIZE,
            tags=list(tags) if tags else None,
            priority=require_choice(priority, MemoryPriority, "priority") if priority else None,
            semantic=semantic,
        )
        return fetch(
            self._dispatcher,
            "POST",
            f"{_MEMORY_PATH}/search",
            request,
            SearchMemoryResponse,
            cancel=cancel,
        )


class ZeroDBService:
    """Groups the ZeroDB sub-services behind one attribute of the client."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.projects = ProjectsService(dispatcher)
        self.vectors = VectorsService(dispatcher)
        self.memory = MemoryService(dispatcher)
        self.embeddings = EmbeddingsService(dispatcher)


