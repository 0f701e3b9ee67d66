"""Tests for the ZeroDB project, vector and memory services."""

import threading

import pytest

from ainative.exceptions import APIError, ValidationError
from ainative.schemas.zerodb import (
    ListProjectsResponse,
    MemoryPriority,
    Project,
    ProjectStatus,
    VectorItem,
)
from ainative.services import MemoryService, ProjectsService, VectorsService, ZeroDBService
from tests.fakes import FakeDispatcher

_PROJECT = {
    "id": "proj-1",
    "name": "demo",
    "status": "active",
    "created_at": "2024-05-01T12:00:00Z",
    "stats": {"vector_count": 3},
}


class TestProjectsService:
    """Tests for ProjectsService."""

    def test_create_posts_request_and_decodes_project(self) -> None:
        dispatcher = FakeDispatcher(results={"POST /api/v1/zerodb/projects": _PROJECT})
        service = ProjectsService(dispatcher)

        project = service.create("demo", description="A demo", metadata={"team": "ml"})

        assert isinstance(project, Project)
        assert project.id == "proj-1"
        assert project.stats is not None
        assert project.stats.vector_count == 3
        assert dispatcher.last_call.body == {
            "name": "demo",
            "description": "A demo",
            "metadata": {"team": "ml"},
        }
        assert dispatcher.last_call.result_type is Project

    def test_create_requires_name(self) -> None:
        dispatcher = FakeDispatcher()

        with pytest.raises(ValidationError) as exc_info:
            ProjectsService(dispatcher).create("  ")

        assert exc_info.value.field == "name"
        assert dispatcher.calls == []

    def test_list_builds_query_string(self) -> None:
        path = "/api/v1/zerodb/projects?limit=25&offset=50&status=suspended"
        dispatcher = FakeDispatcher(
            results={f"GET {path}": {"projects": [_PROJECT], "total_count": 1}}
        )

        result = ProjectsService(dispatcher).list(
            limit=25, offset=50, status=ProjectStatus.SUSPENDED
        )

        assert isinstance(result, ListProjectsResponse)
        assert [p.id for p in result.projects] == ["proj-1"]
        assert dispatcher.last_call.path == path

    def test_list_defaults_non_positive_limit(self) -> None:
        path = "/api/v1/zerodb/projects?limit=10&offset=0"
        dispatcher = FakeDispatcher(results={f"GET {path}": {"projects": []}})

        ProjectsService(dispatcher).list(limit=0)

        assert dispatcher.last_call.path == path

    def test_list_rejects_negative_offset(self) -> None:
        with pytest.raises(ValidationError, match="offset"):
            ProjectsService(FakeDispatcher()).list(offset=-1)

    def test_get_escapes_identifier(self) -> None:
        dispatcher = FakeDispatcher(results={"GET /api/v1/zerodb/projects/a%2Fb": _PROJECT})

        ProjectsService(dispatcher).get("a/b")

        assert dispatcher.last_call.path == "/api/v1/zerodb/projects/a%2Fb"

    def test_update_requires_a_change(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ProjectsService(FakeDispatcher()).update("proj-1")

        assert exc_info.value.field == "request"

    def test_update_sends_only_given_fields(self) -> None:
        dispatcher = FakeDispatcher(results={"PUT /api/v1/zerodb/projects/proj-1": _PROJECT})

        ProjectsService(dispatcher).update("proj-1", name="renamed")

        assert dispatcher.last_call.body == {"name": "renamed"}

    @pytest.mark.parametrize(
        ("action", "path"),
        [
            ("suspend", "/api/v1/zerodb/projects/proj-1/suspend"),
            ("activate", "/api/v1/zerodb/projects/proj-1/activate"),
        ],
    )
    def test_lifecycle_actions(self, action: str, path: str) -> None:
        dispatcher = FakeDispatcher()
        service = ProjectsService(dispatcher)

        getattr(service, action)("proj-1")

        assert (dispatcher.last_call.method, dispatcher.last_call.path) == ("POST", path)

    def test_delete(self) -> None:
        dispatcher = FakeDispatcher()

        ProjectsService(dispatcher).delete("proj-1")

        assert dispatcher.last_call.method == "DELETE"
        assert dispatcher.last_call.result_type is None

    @pytest.mark.parametrize("method", ["get", "delete", "activate", "suspend"])
    def test_project_id_is_required(self, method: str) -> None:
        dispatcher = FakeDispatcher()

        with pytest.raises(ValidationError) as exc_info:
            getattr(ProjectsService(dispatcher), method)("")

        assert exc_info.value.field == "project_id"
        assert dispatcher.calls == []

    def test_cancel_token_is_forwarded(self) -> None:
        dispatcher = FakeDispatcher(results={"GET /api/v1/zerodb/projects/proj-1": _PROJECT})
        cancel = threading.Event()

        ProjectsService(dispatcher).get("proj-1", cancel=cancel)

        assert dispatcher.last_call.cancel is cancel

    def test_dispatcher_errors_propagate_unchanged(self) -> None:
        error = APIError(404, "project not found", code="NOT_FOUND")
        dispatcher = FakeDispatcher(error=error)

        with pytest.raises(APIError) as exc_info:
            ProjectsService(dispatcher).get("missing")

        assert exc_info.value is error


class TestVectorsService:
    """Tests for VectorsService."""

    def test_search_applies_defaults(self) -> None:
        path = "/api/v1/zerodb/projects/proj-1/vectors/search"
        dispatcher = FakeDispatcher(
            results={f"POST {path}": {"matches": [{"id": "v1", "score": 0.9}]}}
        )

        result = VectorsService(dispatcher).search("proj-1", [0.1, 0.2], top_k=0)

        assert result.matches[0].id == "v1"
        assert dispatcher.last_call.body == {
            "vector": [0.1, 0.2],
            "top_k": 5,
            "include_metadata": False,
            "include_values": False,
        }

    def test_search_rejects_empty_vector(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            VectorsService(FakeDispatcher()).search("proj-1", [])

        assert exc_info.value.field == "vector"

    def test_upsert(self) -> None:
        path = "/api/v1/zerodb/projects/proj-1/vectors"
        dispatcher = FakeDispatcher(results={f"POST {path}": {"upserted_count": 2}})
        vectors = [
            VectorItem(id="a", vector=[1.0, 0.0]),
            VectorItem(id="b", vector=[0.0, 1.0], metadata={"k": "v"}),
        ]

        result = VectorsService(dispatcher).upsert("proj-1", vectors, namespace="docs")

        assert result.upserted_count == 2
        assert dispatcher.last_call.body == {
            "vectors": [
                {"id": "a", "vector": [1.0, 0.0]},
                {"id": "b", "vector": [0.0, 1.0], "metadata": {"k": "v"}},
            ],
            "namespace": "docs",
        }

    def test_upsert_rejects_empty_list_and_empty_vectors(self) -> None:
        service = VectorsService(FakeDispatcher())

        with pytest.raises(ValidationError):
            service.upsert("proj-1", [])
        with pytest.raises(ValidationError) as exc_info:
            service.upsert("proj-1", [VectorItem(id="a", vector=[])])

        assert exc_info.value.field == "vectors[0].vector"


class TestMemoryService:
    """Tests for MemoryService."""

    def test_create_defaults_priority(self) -> None:
        dispatcher = FakeDispatcher(results={"POST /api/v1/memory": {"id": "m1", "content": "x"}})

        item = MemoryService(dispatcher).create("remember this", tags=["a"])

        assert item.id == "m1"
        assert dispatcher.last_call.body == {
            "content": "remember this",
            "tags": ["a"],
            "priority": "medium",
        }

    def test_create_rejects_unknown_priority(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            MemoryService(FakeDispatcher()).create("x", priority="urgent")

        assert exc_info.value.field == "priority"

    def test_search(self) -> None:
        dispatcher = FakeDispatcher(
            results={"POST /api/v1/memory/search": {"results": [{"id": "m1"}], "total": 1}}
        )

        result = MemoryService(dispatcher).search(
            "what", priority=MemoryPriority.HIGH, semantic=True
        )

        assert result.total == 1
        assert dispatcher.last_call.body == {
            "query": "what",
            "limit": 10,
            "priority": "high",
            "semantic": True,
        }

    def test_search_requires_query(self) -> None:
        with pytest.raises(ValidationError):
            MemoryService(FakeDispatcher()).search("")


def test_zerodb_groups_sub_services() -> None:
    service = ZeroDBService(FakeDispatcher())

    assert isinstance(service.projects, ProjectsService)
    assert isinstance(service.vectors, VectorsService)
    assert isinstance(service.memory, MemoryService)
