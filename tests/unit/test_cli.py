"""Tests for the command-line interface."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from vispath import __version__
from vispath.cli.app import app, parse_point
from vispath.domain import Vec2
from vispath.exceptions import QueryError

runner = CliRunner()


@pytest.fixture
def scene_file(tmp_path: Path) -> Path:
    """Square obstacle with a blocked and an enclosed query."""
    path = tmp_path / "scene.json"
    path.write_text(
        json.dumps(
            {
                "obstacles": [[[2, 2], [8, 2], [8, 8], [2, 8]]],
                "queries": [
                    {"start": [0, 5], "end": [10, 5]},
                    {"start": [5, 5], "end": [20, 20]},
                ],
            }
        )
    )
    return path


class TestParsePoint:
    """Tests for command-line coordinate parsing."""

    def test_valid(self) -> None:
        """Test X,Y parsing."""
        assert parse_point("1.5,-2") == Vec2(1.5, -2.0)

    @pytest.mark.parametrize("value", ["1", "1,2,3", "a,b", "nan,1", "inf,0"])
    def test_invalid(self, value: str) -> None:
        """Test malformed coordinates raise QueryError."""
        with pytest.raises(QueryError):
            parse_point(value)


class TestCli:
    """Tests for CLI commands."""

    def test_version(self) -> None:
        """Test --version prints the version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_path(self, scene_file: Path) -> None:
        """Test answering the scene's queries."""
        result = runner.invoke(app, ["path", str(scene_file)])
        assert result.exit_code == 0
        assert "Complete" in result.output
        assert "unreachable" in result.output

    def test_path_quiet(self, scene_file: Path) -> None:
        """Test quiet output lists waypoints only."""
        result = runner.invoke(
            app, ["path", str(scene_file), "--start", "0,0", "--end", "10,0", "-q"]
        )
        assert result.exit_code == 0
        assert "0: 0,0 10,0" in result.output
        assert "Complete" not in result.output

    def test_path_writes_output(self, scene_file: Path, tmp_path: Path) -> None:
        """Test results are written with --output."""
        output = tmp_path / "out.json"
        result = runner.invoke(app, ["path", str(scene_file), "-o", str(output), "-q"])
        assert result.exit_code == 0

        data = json.loads(output.read_text())
        assert len(data["paths"]) == 2
        assert data["paths"][0]["path"][0] == [0.0, 5.0]
        assert data["paths"][1]["path"] is None

    def test_path_reads_scene_once(self, scene_file: Path) -> None:
        """Test the planner reuses the scene loaded for the summary."""
        with patch("vispath.core.planner.SceneReader") as mock_reader:
            result = runner.invoke(app, ["path", str(scene_file), "-q"])
        assert result.exit_code == 0
        mock_reader.assert_not_called()
        assert "0: 0,5" in result.output

    def test_path_visited_rule(self, scene_file: Path) -> None:
        """Test the visited rule option is accepted."""
        result = runner.invoke(app, ["path", str(scene_file), "--visited-rule", "on_pop", "-q"])
        assert result.exit_code == 0

    def test_path_start_without_end(self, scene_file: Path) -> None:
        """Test --start alone is rejected."""
        result = runner.invoke(app, ["path", str(scene_file), "--start", "0,0"])
        assert result.exit_code == 1
        assert "--end" in result.output

    def test_path_verbose_and_quiet(self, scene_file: Path) -> None:
        """Test --verbose and --quiet together are rejected."""
        result = runner.invoke(app, ["path", str(scene_file), "-v", "-q"])
        assert result.exit_code == 1

    def test_path_missing_file(self, tmp_path: Path) -> None:
        """Test a missing scene file exits with an error."""
        result = runner.invoke(app, ["path", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_path_invalid_scene(self, tmp_path: Path) -> None:
        """Test a malformed scene file exits with an error."""
        path = tmp_path / "bad.json"
        path.write_text("[]")
        result = runner.invoke(app, ["path", str(path)])
        assert result.exit_code == 1
        assert "Invalid scene file" in result.output

    def test_path_invalid_clearance(self, scene_file: Path) -> None:
        """Test a non-positive clearance is rejected."""
        result = runner.invoke(app, ["path", str(scene_file), "--clearance", "0"])
        assert result.exit_code == 1

    def test_graph(self, scene_file: Path) -> None:
        """Test graph statistics."""
        result = runner.invoke(app, ["graph", str(scene_file)])
        assert result.exit_code == 0
        assert "4 nodes" in result.output
        assert "4 edges" in result.output

    def test_graph_with_clearance(self, scene_file: Path) -> None:
        """Test graph statistics after expansion."""
        result = runner.invoke(app, ["graph", str(scene_file), "--clearance", "1", "-v"])
        assert result.exit_code == 0
        assert "20 nodes" in result.output

    def test_expand(self, scene_file: Path) -> None:
        """Test writing an expanded scene next to the input."""
        result = runner.invoke(app, ["expand", str(scene_file), "--clearance", "1"])
        assert result.exit_code == 0

        expanded = scene_file.parent / "scene-expanded.json"
        data = json.loads(expanded.read_text())
        assert len(data["obstacles"][0]) == 20
        assert len(data["queries"]) == 2

    def test_expand_requires_clearance(self, scene_file: Path) -> None:
        """Test expand without --clearance is a usage error."""
        result = runner.invoke(app, ["expand", str(scene_file)])
        assert result.exit_code != 0
