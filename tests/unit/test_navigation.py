"""Unit tests for per-query navigation over the visibility graph."""

import copy
import math

import pytest

from vispath.core.astar import VisitedRule
from vispath.core.navigation import (
    Navigation,
    NavigationQuery,
    build_graph,
    expand,
    find_path,
)
from vispath.core.visibility import EndLink
from vispath.domain import NavigationObstacle, Segment, Shape, Vec2

SQUARE = [(2, 2), (8, 2), (8, 8), (2, 8)]

# Shortest way around the square from (0, 5) to (10, 5)
AROUND_SQUARE = 6.0 + 2 * math.sqrt(13.0)


@pytest.fixture
def navigation() -> Navigation:
    """Navigation over a single square obstacle."""
    return Navigation.from_outlines([SQUARE])


class TestNavigation:
    """Tests for Navigation."""

    def test_from_outlines(self, navigation: Navigation) -> None:
        """Test outlines become obstacles with a built graph."""
        assert len(navigation.obstacles) == 1
        assert len(navigation.graph) == 4
        assert navigation.outlines()[0] == Shape.from_tuples(SQUARE)

    def test_edges_view(self, navigation: Navigation) -> None:
        """Test graph edges as segments."""
        edges = navigation.edges()
        assert len(edges) == 4
        assert Segment.flat(2, 2, 8, 2) in edges

    def test_direct_path(self, navigation: Navigation) -> None:
        """Test an unobstructed query returns just its end points."""
        start, end = Vec2(0, 0), Vec2(10, 0)
        assert navigation.is_direct(start, end)
        assert navigation.find_path(start, end) == [start, end]

    def test_path_around_obstacle(self, navigation: Navigation) -> None:
        """Test a blocked query bends around two corners."""
        start, end = Vec2(0, 5), Vec2(10, 5)
        path = navigation.find_path(start, end)

        assert path is not None
        assert len(path) == 4
        assert path[0] == start
        assert path[-1] == end
        assert {path[1], path[2]} in ({Vec2(2, 2), Vec2(8, 2)}, {Vec2(2, 8), Vec2(8, 8)})
        length = sum(a.dist(b) for a, b in zip(path, path[1:]))
        assert length == pytest.approx(AROUND_SQUARE)

    @pytest.mark.parametrize("rule", list(VisitedRule))
    def test_visited_rules_agree(self, navigation: Navigation, rule: VisitedRule) -> None:
        """Test both visited rules find the same path length."""
        path = navigation.find_path(Vec2(0, 5), Vec2(10, 5), rule)
        assert path is not None
        length = sum(a.dist(b) for a, b in zip(path, path[1:]))
        assert length == pytest.approx(AROUND_SQUARE)

    def test_start_inside_obstacle(self, navigation: Navigation) -> None:
        """Test a start point enclosed by an obstacle has no path."""
        assert navigation.find_path(Vec2(5, 5), Vec2(20, 20)) is None

    def test_graph_unchanged_by_queries(self, navigation: Navigation) -> None:
        """Test queries never modify the shared graph."""
        before = copy.deepcopy([node.neighbors for node in navigation.graph])
        navigation.find_path(Vec2(0, 5), Vec2(10, 5))
        navigation.find_path(Vec2(5, 0), Vec2(5, 10))
        assert [node.neighbors for node in navigation.graph] == before
        assert len(navigation.graph) == 4

    def test_path_around_wall(self) -> None:
        """Test a path bends around the end of a two-vertex wall."""
        navigation = Navigation.from_outlines([[(0, 0), (10, 0)]])
        path = navigation.find_path(Vec2(5, -5), Vec2(5, 5))

        assert path is not None
        assert len(path) == 3
        assert path[1] in (Vec2(0, 0), Vec2(10, 0))


class TestNavigationQuery:
    """Tests for the per-query overlay."""

    def test_virtual_node_ids(self, navigation: Navigation) -> None:
        """Test start and end ids follow the graph nodes."""
        query = navigation.query(Vec2(0, 5), Vec2(10, 5))
        assert len(query) == 6
        assert query.start() == 4
        assert query.end() == 5
        assert query.position(4) == Vec2(0, 5)
        assert query.position(5) == Vec2(10, 5)
        assert query.position(1) == Vec2(8, 2)

    def test_start_connections(self, navigation: Navigation) -> None:
        """Test the start links to the corners facing it."""
        query = navigation.query(Vec2(0, 5), Vec2(10, 5))
        assert query.neighbors(query.start()) == [0, 3]
        assert not query.direct

    def test_end_links(self, navigation: Navigation) -> None:
        """Test end links resolve per node."""
        query = navigation.query(Vec2(0, 5), Vec2(10, 5))

        assert query.end_link(0) is EndLink.NEVER
        assert query.end_link(1) is EndLink.ALWAYS
        assert query.end_link(2) is EndLink.ALWAYS
        assert query.end_link(query.start()) is EndLink.NEVER
        assert query.end_link(query.end()) is EndLink.NEVER

    def test_neighbors_append_end(self, navigation: Navigation) -> None:
        """Test nodes that see the end list it last."""
        query = navigation.query(Vec2(0, 5), Vec2(10, 5))
        assert query.neighbors(1)[-1] == query.end()
        assert query.end() not in query.neighbors(0)
        assert query.neighbors(query.end()) == []

    def test_direct_query_links_start_to_end(self, navigation: Navigation) -> None:
        """Test an unobstructed query links start straight to end."""
        query = NavigationQuery.create(navigation, Vec2(0, 0), Vec2(10, 0))
        assert query.direct
        assert query.end_link(query.start()) is EndLink.ALWAYS
        assert query.end() in query.neighbors(query.start())

    def test_distance_and_heuristic(self, navigation: Navigation) -> None:
        """Test Euclidean costs."""
        query = navigation.query(Vec2(0, 5), Vec2(10, 5))
        assert query.distance(0, 1) == pytest.approx(6.0)
        assert query.heuristic(query.start()) == pytest.approx(10.0)
        assert query.heuristic(query.end()) == 0.0


class TestFunctionalEntryPoints:
    """Tests for build_graph, find_path and expand."""

    def test_build_and_find(self) -> None:
        """Test the functional wrappers."""
        navigation = build_graph([SQUARE])
        path = find_path(navigation, Vec2(0, 5), Vec2(10, 5))
        assert path is not None
        assert len(path) == 4

    def test_expand(self) -> None:
        """Test expand delegates to the obstacle."""
        obstacle = NavigationObstacle.from_vertices([Vec2(x, y) for x, y in SQUARE])
        expanded = expand(obstacle, 1.0, math.pi / 8)
        assert len(expanded) == 20
