"""CLI for the AINative platform.

Commands:
- config show: Print the effective configuration with secrets masked
- health: Check platform health
- projects: List, create, inspect and delete ZeroDB projects
- vectors: Search and upsert vectors in a project
- embeddings: Generate embeddings, semantic search, models and usage
- swarm: List, inspect, start and stop agent swarms
- token inspect: Decode a bearer token locally (no signature check)
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn, Protocol

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape

from . import __version__
from .client import Client
from .config import ClientConfig
from .config_file import load_client_config_file
from .exceptions import AINativeError, TokenDecodeError
from .infrastructure.validation import IncomingDataError, validate_json_as
from .output import OutputFormat, mask_secret, render
from .schemas.agent_swarm import AgentConfig, AgentType
from .schemas.zerodb import VectorItem
from .tokens import is_expired, parse_claims

_MISSING_API_KEY_MESSAGE = (
    "API key is required. Set AINATIVE_API_KEY environment variable or use --api-key flag"
)

err_console = Console(stderr=True)


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: ClientConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    client: Client


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: ClientConfig
    output: OutputFormat
    deps_builder: DependenciesBuilder

    def build_client(self) -> Client:
        """Return a client for commands that talk to the platform.

        Raises:
            typer.Exit: With code 1 when no API key is configured or the
                configuration is invalid.
        """
        if not self.config.api_key:
            _fail(_MISSING_API_KEY_MESSAGE)
        with _reporting_errors():
            return self.deps_builder(config=self.config).client

    def emit(self, value: object) -> None:
        render(value, self.output)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the ainative entry point.")


def _get_context(ctx: typer.Context) -> CliContext:
    obj = ctx.find_object(CliContext)
    if obj is None:
        raise CliContextNotInitialisedError()
    return obj


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code=1)


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn SDK errors into a one-line message on stderr and exit code 1."""
    try:
        yield
    except (AINativeError, TokenDecodeError, IncomingDataError) as exc:
        _fail(str(exc))


def _parse_agent(value: str) -> AgentConfig:
    """Parse `type` or `type:count` into an agent configuration."""
    agent_type, _, count_text = value.partition(":")
    try:
        count = int(count_text) if count_text else 1
        return AgentConfig(type=AgentType(agent_type.strip()), count=count)
    except ValueError as exc:
        allowed = ", ".join(t.value for t in AgentType)
        raise typer.BadParameter(
            f"invalid agent {value!r}; expected TYPE[:COUNT] with TYPE one of: {allowed}"
        ) from exc


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"ainative {__version__}")
        raise typer.Exit()


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        no_args_is_help=True,
        help="AINative CLI: ZeroDB projects, vectors, embeddings and agent swarms",
    )
    config_app = typer.Typer(help="Configuration management", no_args_is_help=True)
    projects_app = typer.Typer(help="ZeroDB project management", no_args_is_help=True)
    vectors_app = typer.Typer(help="Vector operations", no_args_is_help=True)
    embeddings_app = typer.Typer(help="Embedding operations", no_args_is_help=True)
    swarm_app = typer.Typer(help="Agent swarm operations", no_args_is_help=True)
    token_app = typer.Typer(help="Offline token inspection", no_args_is_help=True)
    app.add_typer(config_app, name="config")
    app.add_typer(projects_app, name="projects")
    app.add_typer(vectors_app, name="vectors")
    app.add_typer(embeddings_app, name="embeddings")
    app.add_typer(swarm_app, name="swarm")
    app.add_typer(token_app, name="token")

    @app.callback()
    def main(
        ctx: typer.Context,
        api_key: Annotated[
            str | None,
            typer.Option("--api-key", help="AINative API key (or set AINATIVE_API_KEY)"),
        ] = None,
        api_secret: Annotated[
            str | None,
            typer.Option("--api-secret", help="API secret (or set AINATIVE_API_SECRET)"),
        ] = None,
        base_url: Annotated[
            str | None,
            typer.Option("--base-url", help="API base URL (or set AINATIVE_BASE_URL)"),
        ] = None,
        org_id: Annotated[
            str | None,
            typer.Option("--org-id", help="Organization ID (or set AINATIVE_ORG_ID)"),
        ] = None,
        project_id: Annotated[
            str | None,
            typer.Option("--project-id", help="Default project ID (or set AINATIVE_PROJECT_ID)"),
        ] = None,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", help="Path to an ainative.toml config file"),
        ] = None,
        output: Annotated[
            OutputFormat,
            typer.Option("--output", "-o", help="Output format", case_sensitive=False),
        ] = OutputFormat.JSON,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", "-v", help="Log each request attempt"),
        ] = False,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                help="Show the version and exit",
                callback=_version_callback,
                is_eager=True,
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context: env, then config file, then flags."""
        with _reporting_errors():
            config = ClientConfig.from_env()
            if config_path is not None:
                config = config.with_file_overrides(load_client_config_file(config_path))
            config = config.with_overrides(
                api_key=api_key,
                api_secret=api_secret,
                base_url=base_url,
                organization_id=org_id,
                project_id=project_id,
                debug=True if verbose else None,
            )
        ctx.obj = CliContext(config=config, output=output, deps_builder=deps_builder)

    @config_app.command("show")
    def config_show(ctx: typer.Context) -> None:
        """Show the effective configuration (secrets masked)."""
        state = _get_context(ctx)
        config = state.config
        state.emit(
            {
                "api_key": mask_secret(config.api_key) or "Not set",
                "api_secret": "***" if config.api_secret else "Not set",
                "base_url": config.base_url,
                "organization_id": config.organization_id or "Not set",
                "project_id": config.project_id or "Not set",
                "timeout_seconds": config.timeout_seconds,
                "rate_limit": config.rate_limit,
                "max_retries": config.retry.max_retries,
                "output": state.output.value,
                "debug": config.debug,
            }
        )

    @app.command()
    def health(ctx: typer.Context) -> None:
        """Check platform health."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            state.emit(client.health())

    @projects_app.command("list")
    def projects_list(
        ctx: typer.Context,
        limit: Annotated[int, typer.Option("--limit", "-l", help="Page size")] = 10,
        offset: Annotated[int, typer.Option("--offset", help="Page offset")] = 0,
        status: Annotated[
            str | None, typer.Option("--status", help="Filter by status (active|suspended)")
        ] = None,
    ) -> None:
        """List projects."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            result = client.zerodb.projects.list(limit=limit, offset=offset, status=status)
            state.emit(result.projects)

    @projects_app.command("create")
    def projects_create(
        ctx: typer.Context,
        name: Annotated[str, typer.Argument(help="Project name")],
        description: Annotated[
            str, typer.Option("--description", "-d", help="Project description")
        ] = "",
    ) -> None:
        """Create a new project."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            state.emit(client.zerodb.projects.create(name, description=description))

    @projects_app.command("get")
    def projects_get(
        ctx: typer.Context,
        project_id: Annotated[str, typer.Argument(help="Project ID")],
    ) -> None:
        """Show project details."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            state.emit(client.zerodb.projects.get(project_id))

    @projects_app.command("delete")
    def projects_delete(
        ctx: typer.Context,
        project_id: Annotated[str, typer.Argument(help="Project ID")],
        yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    ) -> None:
        """Delete a project."""
        state = _get_context(ctx)
        if not yes and not typer.confirm(f"Delete project {project_id}?", default=False):
            rprint("Cancelled.")
            return
        client = state.build_client()
        with _reporting_errors():
            client.zerodb.projects.delete(project_id)
        rprint(f"[green]✓ Deleted project:[/green] {escape(project_id)}")

    @vectors_app.command("search")
    def vectors_search(
        ctx: typer.Context,
        project_id: Annotated[str, typer.Argument(help="Project ID")],
        values: Annotated[list[float], typer.Argument(help="Query vector components")],
        top_k: Annotated[int, typer.Option("--top-k", "-k", help="Results to return")] = 5,
        namespace: Annotated[
            str, typer.Option("--namespace", "-n", help="Vector namespace")
        ] = "",
    ) -> None:
        """Search for vectors similar to VALUES."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            result = client.zerodb.vectors.search(
                project_id, values, top_k=top_k, namespace=namespace, include_metadata=True
            )
            state.emit(result.matches)

    @vectors_app.command("upsert")
    def vectors_upsert(
        ctx: typer.Context,
        project_id: Annotated[str, typer.Argument(help="Project ID")],
        vectors_file: Annotated[
            Path,
            typer.Argument(
                help="JSON file holding a list of {id, vector, metadata} objects",
                exists=True,
                dir_okay=False,
            ),
        ],
        namespace: Annotated[
            str, typer.Option("--namespace", "-n", help="Vector namespace")
        ] = "",
    ) -> None:
        """Insert or update vectors read from a JSON file."""
        state = _get_context(ctx)
        with _reporting_errors():
            vectors = validate_json_as(
                list[VectorItem], vectors_file.read_text(encoding="utf-8")
            )
        client = state.build_client()
        with _reporting_errors():
            state.emit(client.zerodb.vectors.upsert(project_id, vectors, namespace=namespace))

    @embeddings_app.command("generate")
    def embeddings_generate(
        ctx: typer.Context,
        texts: Annotated[list[str], typer.Argument(help="Texts to embed")],
        model: Annotated[str | None, typer.Option("--model", help="Embedding model")] = None,
        normalize: Annotated[
            bool, typer.Option("--normalize/--no-normalize", help="Normalize vectors")
        ] = True,
    ) -> None:
        """Generate embeddings for TEXTS."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            embeddings = client.zerodb.embeddings
            if model:
                result = embeddings.generate(texts, model=model, normalize=normalize)
            else:
                result = embeddings.generate(texts, normalize=normalize)
            state.emit(result)

    @embeddings_app.command("search")
    def embeddings_search(
        ctx: typer.Context,
        query: Annotated[str, typer.Argument(help="Natural language query")],
        project_id: Annotated[
            str | None,
            typer.Option("--project-id", "-p", help="Project ID (defaults to --project-id)"),
        ] = None,
        limit: Annotated[int, typer.Option("--limit", "-l", help="Maximum results")] = 10,
        threshold: Annotated[
            float, typer.Option("--threshold", "-t", help="Similarity threshold (0.0-1.0)")
        ] = 0.7,
        namespace: Annotated[
            str, typer.Option("--namespace", "-n", help="Vector namespace")
        ] = "default",
    ) -> None:
        """Semantic search with server-side query embedding."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            result = client.zerodb.embeddings.semantic_search(
                project_id or state.config.project_id,
                query,
                limit=limit,
                threshold=threshold,
                namespace=namespace,
            )
            state.emit(result.results)

    @embeddings_app.command("models")
    def embeddings_models(ctx: typer.Context) -> None:
        """List available embedding models."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            state.emit(client.zerodb.embeddings.list_models())

    @embeddings_app.command("usage")
    def embeddings_usage(ctx: typer.Context) -> None:
        """Show embedding usage for the current user."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            state.emit(client.zerodb.embeddings.usage())

    @embeddings_app.command("health")
    def embeddings_health(ctx: typer.Context) -> None:
        """Check embedding service health."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            state.emit(client.zerodb.embeddings.health_check())

    @swarm_app.command("list")
    def swarm_list(
        ctx: typer.Context,
        project_id: Annotated[
            str | None, typer.Option("--project-id", "-p", help="Filter by project")
        ] = None,
        status: Annotated[str | None, typer.Option("--status", help="Filter by status")] = None,
        limit: Annotated[int, typer.Option("--limit", "-l", help="Page size")] = 10,
        offset: Annotated[int, typer.Option("--offset", help="Page offset")] = 0,
    ) -> None:
        """List agent swarms."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            result = client.agent_swarm.list(
                project_id=project_id, status=status, limit=limit, offset=offset
            )
            state.emit(result.swarms)

    @swarm_app.command("get")
    def swarm_get(
        ctx: typer.Context,
        swarm_id: Annotated[str, typer.Argument(help="Swarm ID")],
    ) -> None:
        """Show swarm details."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            state.emit(client.agent_swarm.get(swarm_id))

    @swarm_app.command("start")
    def swarm_start(
        ctx: typer.Context,
        project_id: Annotated[str, typer.Argument(help="Project ID")],
        objective: Annotated[str, typer.Argument(help="What the swarm should achieve")],
        agent: Annotated[
            list[str],
            typer.Option(
                "--agent",
                "-a",
                help="Agent as TYPE or TYPE:COUNT (repeatable, e.g. --agent analyzer:2)",
            ),
        ],
        name: Annotated[str, typer.Option("--name", help="Swarm name")] = "",
    ) -> None:
        """Start a new agent swarm."""
        state = _get_context(ctx)
        agents = [_parse_agent(value) for value in agent]
        client = state.build_client()
        with _reporting_errors():
            state.emit(client.agent_swarm.start(project_id, objective, agents, name=name))

    @swarm_app.command("stop")
    def swarm_stop(
        ctx: typer.Context,
        swarm_id: Annotated[str, typer.Argument(help="Swarm ID")],
    ) -> None:
        """Stop a running swarm."""
        state = _get_context(ctx)
        client = state.build_client()
        with _reporting_errors():
            client.agent_swarm.stop(swarm_id)
        rprint(f"[green]✓ Stopped swarm:[/green] {escape(swarm_id)}")

    @token_app.command("inspect")
    def token_inspect(
        ctx: typer.Context,
        token: Annotated[str, typer.Argument(help="Bearer token (JWT)")],
    ) -> None:
        """Decode TOKEN without verifying its signature."""
        state = _get_context(ctx)
        with _reporting_errors():
            claims = parse_claims(token)
            state.emit(
                {
                    "claims": claims,
                    "expires_at": claims.expires_at,
                    "expired": is_expired(token),
                }
            )

    return app
