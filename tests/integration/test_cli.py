"""Integration tests for the craftcut CLI.

These tests run each command end-to-end against design files written to a
temporary directory and check output and exit codes.
"""

import csv
import io
import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from craftcut.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


def _write(tmp_path: Path, data: Any, name: str = "design.json") -> Path:
    path = tmp_path / name
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_design(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["validate", str(design_file)])
        assert result.exit_code == 0
        assert "Validation passed. Design is valid." in result.output

    def test_file_not_found(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_json(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(_write(tmp_path, "{not json"))])
        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output

    def test_schema_error(self, runner: CliRunner, tmp_path: Path) -> None:
        path = _write(tmp_path, {"panels": [{"id": "a", "width": -5, "height": 18}]})
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "panels[0].width" in result.output

    def test_warnings_exit_two(self, runner: CliRunner, tmp_path: Path) -> None:
        path = _write(tmp_path, {"panels": [{"id": "a", "width": 600, "height": 18}]})
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 2
        assert "Warnings:" in result.output
        assert "Validation passed with 1 warning(s)" in result.output

    def test_duplicate_ids(self, runner: CliRunner, tmp_path: Path) -> None:
        panels = [
            {"id": "a", "label": "A", "width": 600, "height": 18},
            {"id": "a", "label": "B", "width": 300, "height": 18},
        ]
        result = runner.invoke(app, ["validate", str(_write(tmp_path, {"panels": panels}))])
        assert result.exit_code == 1
        assert "Duplicate panel id 'a'" in result.output


class TestCutlistCommand:
    """Tests for the cutlist command."""

    def test_grouped(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["cutlist", str(design_file)])
        assert result.exit_code == 0
        assert "CUT LIST" in result.output

    def test_raw(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["cutlist", "--raw", str(design_file)])
        assert result.exit_code == 0
        assert "PANEL LIST" in result.output
        assert "Left Side" in result.output

    def test_json(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["cutlist", "--json", str(design_file)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [p["letter"] for p in data["pieces"]] == ["A", "B"]
        assert data["total_pieces"] == 3

    def test_raw_json(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["cutlist", "--raw", "--json", str(design_file)])
        data = json.loads(result.output)
        assert [p["label"] for p in data["pieces"]] == ["Left Side", "Right Side", "Shelf"]

    def test_csv(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["cutlist", "--csv", str(design_file)])
        assert result.exit_code == 0
        rows = list(csv.reader(io.StringIO(result.output)))
        assert rows[0][0] == "Part"
        assert [row[0] for row in rows[1:]] == ["A", "B"]

    def test_raw_csv(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["cutlist", "--raw", "--csv", str(design_file)])
        assert result.exit_code == 0
        rows = list(csv.reader(io.StringIO(result.output)))
        assert rows[0] == ["Label", "Width (mm)", "Height (mm)", "Quantity"]
        assert rows[3] == ["Shelf", "600", "18", "1"]

    def test_csv_and_json_conflict(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["cutlist", "--csv", "--json", str(design_file)])
        assert result.exit_code == 1

    def test_verbose_flag(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["--verbose", "cutlist", str(design_file)])
        assert result.exit_code == 0

    def test_blocking_errors_stop_the_command(self, runner: CliRunner, tmp_path: Path) -> None:
        panels = [
            {"id": "a", "label": "A", "width": 600, "height": 18},
            {"id": "a", "label": "B", "width": 300, "height": 18},
        ]
        result = runner.invoke(app, ["cutlist", str(_write(tmp_path, {"panels": panels}))])
        assert result.exit_code == 1
        assert "Duplicate panel id" in result.output


class TestOptimizeCommand:
    """Tests for the optimize command."""

    def test_text(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["optimize", str(design_file)])
        assert result.exit_code == 0
        assert "CUTTING PLAN" in result.output
        assert "Sheets: 1" in result.output

    def test_json(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["optimize", "--json", str(design_file)])
        data = json.loads(result.output)
        letters = sorted(p["letter"] for p in data["sheets"][0]["placements"])
        assert letters == ["A", "B", "B"]

    def test_sheet_override(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(
            app, ["optimize", "--sheet-width", "300", "--json", str(design_file)]
        )
        data = json.loads(result.output)
        assert data["total_sheets"] == 0
        assert len(data["unplaced_pieces"]) == 3


class TestAssembleCommand:
    """Tests for the assemble command."""

    def test_text(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["assemble", str(design_file)])
        assert result.exit_code == 0
        assert "ASSEMBLY" in result.output
        assert "Insert the Shelf between the Left Side and Right Side." in result.output

    def test_json(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["assemble", "--json", str(design_file)])
        data = json.loads(result.output)
        assert data["total_steps"] == 3
        assert data["estimated_time"] == "9 minutes"


class TestPlanCommand:
    """Tests for the plan command."""

    def test_text(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["plan", str(design_file)])
        assert result.exit_code == 0
        for heading in ("Hall shelf", "CUT LIST", "CUTTING PLAN", "ASSEMBLY", "COST ESTIMATE"):
            assert heading in result.output
        assert "Total: $51.20" in result.output

    def test_json(self, runner: CliRunner, design_file: Path) -> None:
        result = runner.invoke(app, ["plan", "--json", str(design_file)])
        data = json.loads(result.output)
        assert set(data) == {"cut_list", "optimization", "assembly", "cost", "project_name"}

    def test_output_file(self, runner: CliRunner, design_file: Path, tmp_path: Path) -> None:
        target = tmp_path / "plan.json"
        result = runner.invoke(app, ["plan", "--output", str(target), str(design_file)])
        assert result.exit_code == 0
        assert "Plan exported to" in result.output
        assert json.loads(target.read_text(encoding="utf-8"))["cost"]["total_sheets"] == 1
