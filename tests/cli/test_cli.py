"""Tests for CLI wiring, output and error reporting."""

import json
import re
from pathlib import Path

import jwt
import pytest
import typer
from typer.testing import CliRunner

from ainative import cli
from ainative.cli import CliDependencies
from ainative.client import Client
from ainative.config import ClientConfig
from ainative.exceptions import APIError
from tests.fakes import FakeDispatcher

runner = CliRunner()
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")
_PROJECT = {"id": "proj-1", "name": "demo", "status": "active"}


def _strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE_RE.sub("", text)


def _build_app(
    dispatcher: FakeDispatcher, captured: dict[str, ClientConfig] | None = None
) -> typer.Typer:
    def build_with_fake_dispatcher(*, config: ClientConfig) -> CliDependencies:
        if captured is not None:
            captured["config"] = config
        return CliDependencies(client=Client(config, dispatcher=dispatcher))

    return cli.create_app(build_with_fake_dispatcher)


def test_cli_version_option_prints_package_version(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "__version__", "9.9.9", raising=False)

    result = runner.invoke(_build_app(FakeDispatcher()), ["--version"])

    assert result.exit_code == 0
    assert "ainative 9.9.9" in _strip_ansi(result.output)


def test_cli_missing_api_key_exits_with_hint() -> None:
    dispatcher = FakeDispatcher()

    result = runner.invoke(_build_app(dispatcher), ["projects", "list"])

    assert result.exit_code == 1
    assert "AINATIVE_API_KEY" in _strip_ansi(result.output)
    assert dispatcher.calls == []


def test_cli_config_show_masks_secrets() -> None:
    result = runner.invoke(
        _build_app(FakeDispatcher()),
        ["--api-key", "ak_live_abcdef123456", "--api-secret", "s3cret", "config", "show"],
    )

    assert result.exit_code == 0
    shown = json.loads(result.stdout)
    assert shown["api_key"] == "ak_l...3456"
    assert shown["api_secret"] == "***"
    assert shown["project_id"] == "Not set"
    assert "s3cret" not in result.stdout


def test_cli_flags_override_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AINATIVE_API_KEY", "env-key")
    monkeypatch.setenv("AINATIVE_PROJECT_ID", "env-project")
    captured: dict[str, ClientConfig] = {}
    dispatcher = FakeDispatcher(results={"GET /health": {"status": "ok"}})

    result = runner.invoke(
        _build_app(dispatcher, captured),
        ["--project-id", "flag-project", "--verbose", "health"],
    )

    assert result.exit_code == 0
    assert captured["config"].api_key == "env-key"
    assert captured["config"].project_id == "flag-project"
    assert captured["config"].debug is True


def test_cli_config_file_overrides_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("AINATIVE_API_KEY", "env-key")
    monkeypatch.setenv("AINATIVE_BASE_URL", "https://env.example.test")
    config_path = tmp_path / "ainative.toml"
    config_path.write_text(
        'schema_version = 1\n[client]\nbase_url = "https://file.example.test"\nrate_limit = 7\n',
        encoding="utf-8",
    )
    captured: dict[str, ClientConfig] = {}
    dispatcher = FakeDispatcher(results={"GET /health": {"status": "ok"}})

    result = runner.invoke(
        _build_app(dispatcher, captured), ["--config", str(config_path), "health"]
    )

    assert result.exit_code == 0
    assert captured["config"].base_url == "https://file.example.test"
    assert captured["config"].rate_limit == 7


def test_cli_invalid_config_file_is_reported(tmp_path: Path) -> None:
    config_path = tmp_path / "ainative.toml"
    config_path.write_text("schema_version = 2\n[client]\n", encoding="utf-8")

    result = runner.invoke(
        _build_app(FakeDispatcher()), ["--config", str(config_path), "config", "show"]
    )

    assert result.exit_code == 1
    assert "config_file" in _strip_ansi(result.output)


def test_cli_projects_list_emits_projects() -> None:
    path = "/api/v1/zerodb/projects?limit=5&offset=0"
    dispatcher = FakeDispatcher(results={f"GET {path}": {"projects": [_PROJECT]}})

    result = runner.invoke(
        _build_app(dispatcher), ["--api-key", "k", "projects", "list", "--limit", "5"]
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout) == [_PROJECT]


def test_cli_projects_list_as_yaml() -> None:
    path = "/api/v1/zerodb/projects?limit=10&offset=0"
    dispatcher = FakeDispatcher(results={f"GET {path}": {"projects": [_PROJECT]}})

    result = runner.invoke(
        _build_app(dispatcher), ["--api-key", "k", "-o", "yaml", "projects", "list"]
    )

    assert result.exit_code == 0
    assert "- id: proj-1" in result.stdout


def test_cli_api_error_exits_with_message() -> None:
    dispatcher = FakeDispatcher(error=APIError(404, "project not found", code="NOT_FOUND"))

    result = runner.invoke(_build_app(dispatcher), ["--api-key", "k", "projects", "get", "x"])

    assert result.exit_code == 1
    assert "project not found" in _strip_ansi(result.output)


def test_cli_projects_delete_with_yes() -> None:
    dispatcher = FakeDispatcher()

    result = runner.invoke(
        _build_app(dispatcher), ["--api-key", "k", "projects", "delete", "proj-1", "--yes"]
    )

    assert result.exit_code == 0
    assert "Deleted project: proj-1" in _strip_ansi(result.output)
    assert dispatcher.last_call.method == "DELETE"


def test_cli_projects_delete_declined() -> None:
    dispatcher = FakeDispatcher()

    result = runner.invoke(
        _build_app(dispatcher), ["--api-key", "k", "projects", "delete", "proj-1"], input="n\n"
    )

    assert result.exit_code == 0
    assert "Cancelled." in result.output
    assert dispatcher.calls == []


def test_cli_vectors_upsert_reads_file(tmp_path: Path) -> None:
    vectors_file = tmp_path / "vectors.json"
    vectors_file.write_text(json.dumps([{"id": "v1", "vector": [0.1, 0.2]}]), encoding="utf-8")
    dispatcher = FakeDispatcher(
        results={"POST /api/v1/zerodb/projects/proj-1/vectors": {"upserted_count": 1}}
    )

    result = runner.invoke(
        _build_app(dispatcher),
        ["--api-key", "k", "vectors", "upsert", "proj-1", str(vectors_file)],
    )

    assert result.exit_code == 0
    assert json.loads(result.stdout)["upserted_count"] == 1
    assert dispatcher.last_call.body == {"vectors": [{"id": "v1", "vector": [0.1, 0.2]}]}


def test_cli_vectors_upsert_rejects_malformed_file(tmp_path: Path) -> None:
    vectors_file = tmp_path / "vectors.json"
    vectors_file.write_text('{"not": "a list"}', encoding="utf-8")
    dispatcher = FakeDispatcher()

    result = runner.invoke(
        _build_app(dispatcher),
        ["--api-key", "k", "vectors", "upsert", "proj-1", str(vectors_file)],
    )

    assert result.exit_code == 1
    assert dispatcher.calls == []


def test_cli_embeddings_search_uses_default_project() -> None:
    dispatcher = FakeDispatcher(
        results={
            "POST /api/v1/embeddings/semantic-search": {
                "results": [{"vector_id": "doc-1", "similarity": 0.91}]
            }
        }
    )

    result = runner.invoke(
        _build_app(dispatcher),
        ["--api-key", "k", "--project-id", "proj-1", "embeddings", "search", "hello"],
    )

    assert result.exit_code == 0
    body = dispatcher.last_call.body
    assert isinstance(body, dict)
    assert body["project_id"] == "proj-1"
    assert json.loads(result.stdout)[0]["vector_id"] == "doc-1"


def test_cli_swarm_start_parses_agents() -> None:
    dispatcher = FakeDispatcher(
        results={"POST /api/v1/agent-swarm/swarms": {"id": "swarm-1", "status": "running"}}
    )

    result = runner.invoke(
        _build_app(dispatcher),
        [
            "--api-key",
            "k",
            "swarm",
            "start",
            "proj-1",
            "review",
            "--agent",
            "analyzer:2",
            "-a",
            "validator",
        ],
    )

    assert result.exit_code == 0
    body = dispatcher.last_call.body
    assert isinstance(body, dict)
    assert body["agents"] == [{"type": "analyzer", "count": 2}, {"type": "validator", "count": 1}]


def test_cli_swarm_start_rejects_unknown_agent_type() -> None:
    dispatcher = FakeDispatcher()

    result = runner.invoke(
        _build_app(dispatcher),
        ["--api-key", "k", "swarm", "start", "proj-1", "review", "--agent", "wizard"],
    )

    assert result.exit_code != 0
    assert dispatcher.calls == []


def test_cli_token_inspect_works_without_api_key() -> None:
    token = jwt.encode(
        {"user_id": "u1", "email": "ada@example.test", "exp": 1},
        "not-the-server-secret-used-for-tests",
        algorithm="HS256",
    )

    result = runner.invoke(_build_app(FakeDispatcher()), ["token", "inspect", token])

    assert result.exit_code == 0
    shown = json.loads(result.stdout)
    assert shown["claims"]["user_id"] == "u1"
    assert shown["expired"] is True


def test_cli_token_inspect_reports_malformed_token() -> None:
    result = runner.invoke(_build_app(FakeDispatcher()), ["token", "inspect", "garbage"])

    assert result.exit_code == 1
    assert "failed to parse token" in _strip_ansi(result.output)
