"""Tests for loading ainative.toml config files."""

from pathlib import Path

import pytest

from ainative.config import ClientConfig
from ainative.config_file import ClientConfigFile, load_client_config_file
from ainative.exceptions import ConfigError


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "ainative.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_loads_client_section(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
schema_version = 1

[client]
base_url = " https://eu.api.example.test "
organization_id = "org-7"
project_id = "proj-7"
timeout_seconds = 5.5
rate_limit = 10
max_retries = 1
debug = true
""",
    )

    loaded = load_client_config_file(path)

    assert loaded == ClientConfigFile(
        base_url="https://eu.api.example.test",
        organization_id="org-7",
        project_id="proj-7",
        timeout_seconds=5.5,
        rate_limit=10,
        max_retries=1,
        debug=True,
    )


def test_empty_client_section_overrides_nothing(tmp_path: Path) -> None:
    path = _write(tmp_path, "schema_version = 1\n\n[client]\n")
    base = ClientConfig(api_key="k", project_id="proj-env")

    merged = base.with_file_overrides(load_client_config_file(path))

    assert merged == base


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="config file not found"):
        load_client_config_file(tmp_path / "nope.toml")


def test_invalid_toml(tmp_path: Path) -> None:
    path = _write(tmp_path, "schema_version = \n")

    with pytest.raises(ConfigError, match="invalid TOML"):
        load_client_config_file(path)


@pytest.mark.parametrize(
    ("content", "location"),
    [
        ("schema_version = 2\n[client]\n", "schema_version"),
        ("schema_version = 1\n[client]\napi_key = \"secret\"\n", "client.api_key"),
        ("schema_version = 1\n[client]\nbase_url = \"not a url\"\n", "client.base_url"),
        ("schema_version = 1\n[client]\ntimeout_seconds = 0\n", "client.timeout_seconds"),
        ("schema_version = 1\n[client]\nrate_limit = 0\n", "client.rate_limit"),
        ("schema_version = 1\n[client]\nmax_retries = -1\n", "client.max_retries"),
        ("schema_version = 1\n", "client"),
    ],
)
def test_schema_violations_name_the_key(tmp_path: Path, content: str, location: str) -> None:
    path = _write(tmp_path, content)

    with pytest.raises(ConfigError) as exc_info:
        load_client_config_file(path)

    assert exc_info.value.field == "config_file"
    assert f": {location}:" in str(exc_info.value)
