"""Tests for CLI output rendering."""

from datetime import UTC, datetime

import pytest
import yaml
from rich.console import Console

from ainative.output import OutputFormat, build_table, mask_secret, render, to_plain
from ainative.schemas.zerodb import Project


@pytest.mark.parametrize(
    ("value", "expected"),
    [("", ""), ("short", "***"), ("12345678", "***"), ("ak_live_abcdef123456", "ak_l...3456")],
)
def test_mask_secret(value: str, expected: str) -> None:
    assert mask_secret(value) == expected


def test_to_plain_drops_none_and_serialises_datetimes() -> None:
    project = Project(id="p1", name="demo", created_at=datetime(2024, 5, 1, tzinfo=UTC))

    data = to_plain(project)

    assert data["created_at"] == "2024-05-01T00:00:00Z"
    assert "description" not in data


class TestRender:
    """Tests for render."""

    def test_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        render({"status": "ok"}, OutputFormat.JSON)

        assert '"status": "ok"' in capsys.readouterr().out

    def test_yaml_keeps_key_order(self, capsys: pytest.CaptureFixture[str]) -> None:
        render({"b": 1, "a": [1, 2]}, OutputFormat.YAML)

        out = capsys.readouterr().out
        assert yaml.safe_load(out) == {"b": 1, "a": [1, 2]}
        assert out.index("b:") < out.index("a:")

    def test_table(self) -> None:
        console = Console(record=True, width=120)

        render([{"id": "p1", "name": "demo"}], OutputFormat.TABLE, console=console)

        text = console.export_text()
        assert "id" in text
        assert "demo" in text


class TestBuildTable:
    """Tests for build_table layouts."""

    def test_records_become_columns(self) -> None:
        table = build_table([{"id": "a"}, {"id": "b", "extra": {"k": 1}}])

        assert [column.header for column in table.columns] == ["id", "extra"]
        assert table.row_count == 2

    def test_single_record_becomes_field_value_rows(self) -> None:
        table = build_table({"id": "a", "name": "demo"})

        assert [column.header for column in table.columns] == ["field", "value"]
        assert table.row_count == 2

    def test_scalar_list(self) -> None:
        table = build_table(["analyzer", "generator"])

        assert [column.header for column in table.columns] == ["value"]
        assert table.row_count == 2
