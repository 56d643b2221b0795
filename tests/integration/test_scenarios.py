"""End-to-end path planning scenarios.

These tests run the full pipeline (scene file, obstacle model, visibility
graph, A*) and check the resulting paths geometrically.
"""

import json
import math
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from vispath.config import ExpansionConfig, VispathSettings
from vispath.core import Navigation, ScenePlanner, VisitedRule
from vispath.domain import NavigationObstacle, Segment, Vec2

L_SHAPE = [(0, 0), (6, 0), (6, 2), (2, 2), (2, 6), (0, 6)]


def _length(path: list[Vec2]) -> float:
    return sum(a.dist(b) for a, b in zip(path, path[1:]))


def _assert_avoids(path: list[Vec2], obstacles: list[NavigationObstacle]) -> None:
    """Check no leg of a path passes through an obstacle interior."""
    for a, b in zip(path, path[1:]):
        for t in (0.25, 0.5, 0.75):
            sample = a + (b - a) * t
            for obstacle in obstacles:
                assert not obstacle.shape.contains_point(sample), (a, b, sample)


class TestLShapeScenario:
    """Shortest paths around an L-shaped obstacle."""

    @pytest.fixture
    def navigation(self) -> Navigation:
        """Navigation over the L."""
        return Navigation.from_outlines([L_SHAPE])

    def test_path_bends_at_reflex_vertex(self, navigation: Navigation) -> None:
        """Test the path from the pocket wraps over the upper arm."""
        start, end = Vec2(4, 4), Vec2(-1, 1)
        path = navigation.find_path(start, end)

        assert path == [start, Vec2(2, 6), Vec2(0, 6), end]
        assert _length(path) == pytest.approx(math.sqrt(8) + 2 + math.sqrt(26))

        obstacle = navigation.obstacles[0]
        for waypoint in path[1:-1]:
            assert obstacle.is_reflex(obstacle.vertices.index(waypoint))

    def test_path_avoids_obstacle(self, navigation: Navigation) -> None:
        """Test no leg crosses the L."""
        path = navigation.find_path(Vec2(4, 4), Vec2(-1, 1))
        assert path is not None
        _assert_avoids(path, navigation.obstacles)

    @pytest.mark.parametrize("rule", list(VisitedRule))
    def test_reverse_query_same_length(self, navigation: Navigation, rule: VisitedRule) -> None:
        """Test swapping start and end gives the same length."""
        forward = navigation.find_path(Vec2(4, 4), Vec2(-1, 1), rule)
        backward = navigation.find_path(Vec2(-1, 1), Vec2(4, 4), rule)
        assert forward is not None
        assert backward is not None
        assert _length(forward) == pytest.approx(_length(backward))

    def test_pocket_is_direct(self, navigation: Navigation) -> None:
        """Test two points inside the pocket see each other."""
        assert navigation.find_path(Vec2(3, 5), Vec2(5, 3)) == [Vec2(3, 5), Vec2(5, 3)]


class TestMultipleObstacles:
    """Paths through a field of obstacles."""

    @pytest.fixture
    def navigation(self) -> Navigation:
        """Three boxes forming a corridor with a wall."""
        return Navigation.from_outlines(
            [
                [(0, 0), (4, 0), (4, 4), (0, 4)],
                [(6, 0), (10, 0), (10, 4), (6, 4)],
                [(3, 6), (7, 6)],
            ]
        )

    def test_graph_symmetric(self, navigation: Navigation) -> None:
        """Test the static graph is symmetric."""
        assert navigation.graph.is_symmetric()

    def test_path_through_gap(self, navigation: Navigation) -> None:
        """Test a path from below to above passes between the boxes."""
        start, end = Vec2(5, -2), Vec2(5, 8)
        path = navigation.find_path(start, end)

        assert path is not None
        assert path[0] == start
        assert path[-1] == end
        _assert_avoids(path, navigation.obstacles)
        # Straight up the gap, around one end of the wall
        assert _length(path) < 14.0

    def test_legs_are_visible(self, navigation: Navigation) -> None:
        """Test consecutive waypoints are joined by graph or query edges."""
        path = navigation.find_path(Vec2(5, -2), Vec2(5, 8))
        assert path is not None
        edges = set(navigation.edges())
        for a, b in zip(path[1:-1], path[2:-1]):
            assert Segment(a, b) in edges


class TestUnreachable:
    """Queries with no answer."""

    def test_end_inside_obstacle(self) -> None:
        """Test an end point enclosed by an obstacle."""
        navigation = Navigation.from_outlines([[(0, 0), (10, 0), (10, 10), (0, 10)]])
        assert navigation.find_path(Vec2(-5, 5), Vec2(5, 5)) is None

    def test_start_inside_obstacle(self) -> None:
        """Test a start point enclosed by an obstacle."""
        navigation = Navigation.from_outlines([[(0, 0), (10, 0), (10, 10), (0, 10)]])
        assert navigation.find_path(Vec2(5, 5), Vec2(-5, 5)) is None


class TestPlannerPipeline:
    """Scene file to result file."""

    def test_scene_file_with_clearance(self, tmp_path: Path) -> None:
        """Test planning a scene with obstacle expansion."""
        scene_path = tmp_path / "scene.json"
        scene_path.write_text(
            json.dumps(
                {
                    "obstacles": [L_SHAPE],
                    "queries": [
                        {"start": [4, 4], "end": [-1, 1]},
                        {"start": [-5, -5], "end": [-5, 10]},
                    ],
                }
            )
        )
        output = tmp_path / "paths.json"
        settings = VispathSettings(expansion=ExpansionConfig(clearance=0.5))

        with patch("vispath.core.planner.configure_logging") as mock_logging:
            mock_logging.return_value = Mock()
            planner = ScenePlanner(settings)
        stats = planner.process(scene_path=scene_path, output_path=output)

        assert stats.query_count == 2
        assert stats.found_count == 2
        assert stats.direct_count == 1

        data = json.loads(output.read_text())
        detour = data["paths"][0]
        assert detour["length"] > math.sqrt(8) + 2 + math.sqrt(26)
        assert data["paths"][1]["path"] == [[-5.0, -5.0], [-5.0, 10.0]]
