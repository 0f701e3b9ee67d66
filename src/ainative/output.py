"""Render command results as JSON, YAML or a rich table."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any

import typer
import yaml
from pydantic import TypeAdapter
from rich import print_json
from rich.console import Console
from rich.table import Table
from rich.text import Text

_PLAIN_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


class OutputFormat(StrEnum):
    JSON = "json"
    YAML = "yaml"
    TABLE = "table"


def to_plain(value: object) -> Any:
    """Convert models, datetimes and containers into JSON-compatible data."""
    return _PLAIN_ADAPTER.dump_python(value, mode="json", exclude_none=True)


def mask_secret(value: str) -> str:
    """Mask a credential for display: `abcd...wxyz`, or `***` when short."""
    if not value:
        return ""
    if len(value) <= 8:
        return "***"
    return f"{value[:4]}...{value[-4:]}"


def render(value: object, output_format: OutputFormat, *, console: Console | None = None) -> None:
    data = to_plain(value)
    match output_format:
        case OutputFormat.JSON:
            print_json(data=data)
        case OutputFormat.YAML:
            typer.echo(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), nl=False)
        case OutputFormat.TABLE:
            (console or Console()).print(build_table(data))


def build_table(data: object) -> Table:
    """Lay out a list of records as rows, or a single record as key/value pairs."""
    if isinstance(data, Sequence) and not isinstance(data, str):
        rows = [row for row in data if isinstance(row, Mapping)]
        columns: list[str] = []
        for row in rows:
            columns.extend(str(key) for key in row if str(key) not in columns)
        table = Table(*columns) if columns else Table("value")
        if not columns:
            for item in data:
                table.add_row(_cell(item))
            return table
        for row in rows:
            table.add_row(*(_cell(row.get(column)) for column in columns))
        return table

    table = Table("field", "value")
    if isinstance(data, Mapping):
        for key, item in data.items():
            table.add_row(Text(str(key)), _cell(item))
    else:
        table.add_row(Text("value"), _cell(data))
    return table


def _cell(value: object) -> Text:
    if value is None:
        return Text("")
    if isinstance(value, Mapping | list):
        return Text(json.dumps(value, separators=(",", ":")))
    return Text(str(value))
