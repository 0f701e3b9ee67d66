"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from .cli import CliDependencies, create_app
from .client import Client
from .config import ClientConfig


def build_cli_dependencies(*, config: ClientConfig) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Effective client configuration (env, config file and flags merged).

    Raises:
        ConfigError: If the configuration is invalid.
    """
    return CliDependencies(client=Client(config))


app = create_app(build_cli_dependencies)
