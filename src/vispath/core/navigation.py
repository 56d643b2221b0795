"""Path queries over a static visibility graph.

A Navigation owns the obstacles and the visibility graph built from them.
Each path query wraps the graph in a NavigationQuery: a read-only overlay
that adds two virtual nodes (start and end) and the edges touching them,
without modifying the shared graph. Concurrent queries against the same
Navigation therefore never interfere.

Key components:
- Navigation: Obstacles plus their visibility graph
- NavigationQuery: Per-query A* input over the graph
- build_graph / find_path / expand: Functional entry points
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from vispath.core.astar import VisitedRule, a_star
from vispath.core.geometry import incident_edges, segment_is_clear
from vispath.core.visibility import EndLink, GraphNode, VisibilityGraph
from vispath.domain import NavigationObstacle, Segment, Shape, Vec2

logger = logging.getLogger(__name__)


class Navigation:
    """Obstacle set with its precomputed visibility graph.

    Rebuild a Navigation whenever the obstacle set changes; it is never
    updated in place.

    Example:
        navigation = Navigation.from_outlines([[(2, 2), (8, 2), (8, 8), (2, 8)]])
        path = navigation.find_path(Vec2(0, 5), Vec2(10, 5))
    """

    def __init__(self, obstacles: Sequence[NavigationObstacle]) -> None:
        self._obstacles = list(obstacles)
        self._graph = VisibilityGraph.build(self._obstacles)

    @classmethod
    def from_outlines(
        cls, outlines: Sequence[Sequence[Vec2] | Sequence[tuple[float, float]]]
    ) -> "Navigation":
        """Build a navigation from raw vertex lists.

        Args:
            outlines: One vertex list per obstacle, as Vec2 or (x, y) pairs

        Returns:
            Navigation over the given obstacles
        """
        obstacles = [
            NavigationObstacle.from_vertices(
                [v if isinstance(v, Vec2) else Vec2.from_tuple(v) for v in outline]
            )
            for outline in outlines
        ]
        return cls(obstacles)

    @property
    def obstacles(self) -> list[NavigationObstacle]:
        return self._obstacles

    @property
    def graph(self) -> VisibilityGraph:
        return self._graph

    def is_direct(self, start: Vec2, end: Vec2) -> bool:
        """Check whether the straight segment start -> end is unobstructed."""
        return segment_is_clear(Segment(start, end), self._obstacles)

    def query(self, start: Vec2, end: Vec2) -> "NavigationQuery":
        """Prepare the per-query overlay for a start/end pair."""
        return NavigationQuery.create(self, start, end)

    def find_path(
        self,
        start: Vec2,
        end: Vec2,
        visited_rule: VisitedRule = VisitedRule.ON_RELAX,
    ) -> list[Vec2] | None:
        """Find the shortest obstacle-free path between two points.

        Args:
            start: Start point
            end: End point
            visited_rule: Closed-set rule passed to A*

        Returns:
            Waypoints from start to end inclusive, or None if the points are
            disconnected by the obstacles
        """
        if self.is_direct(start, end):
            return [start, end]

        query = self.query(start, end)
        node_path = a_star(query, visited_rule)
        if node_path is None:
            logger.debug("No path from %s to %s", start, end)
            return None
        return [query.position(node_id) for node_id in node_path]

    def edges(self) -> list[Segment]:
        """Visibility graph edges as segments, for visualization."""
        return list(self._graph.edges())

    def outlines(self) -> list[Shape]:
        """Obstacle outlines, for visualization."""
        return [obstacle.shape for obstacle in self._obstacles]


@dataclass
class NavigationQuery:
    """A* input for one path query.

    Node ids below len(graph) are graph nodes. The start point gets id
    len(graph) and the end point len(graph) + 1.

    Attributes:
        graph: Shared static graph, read only
        start_point: Query start
        end_point: Query end
        start_connections: Graph nodes visible from the start point
        end_visible: Per graph node, whether the end point is visible
        direct: Whether the end point is visible from the start point
    """

    graph: VisibilityGraph
    start_point: Vec2
    end_point: Vec2
    start_connections: list[int] = field(default_factory=list)
    end_visible: list[bool] = field(default_factory=list)
    direct: bool = False

    @classmethod
    def create(cls, navigation: Navigation, start: Vec2, end: Vec2) -> "NavigationQuery":
        """Compute the start and end connections for a query.

        Args:
            navigation: Navigation to query
            start: Start point
            end: End point

        Returns:
            Query ready to be searched
        """
        graph = navigation.graph
        obstacles = navigation.obstacles
        start_connections = [
            node_id
            for node_id, node in enumerate(graph)
            if _sees(node, start, obstacles)
        ]
        end_visible = [_sees(node, end, obstacles) for node in graph]
        logger.debug(
            "Prepared query: %d start connections, %d end candidates",
            len(start_connections),
            sum(end_visible),
        )
        return cls(
            graph=graph,
            start_point=start,
            end_point=end,
            start_connections=start_connections,
            end_visible=end_visible,
            direct=navigation.is_direct(start, end),
        )

    def __len__(self) -> int:
        return len(self.graph) + 2

    def start(self) -> int:
        return len(self.graph)

    def end(self) -> int:
        return len(self.graph) + 1

    def end_link(self, node_id: int) -> EndLink:
        """Resolve whether a node connects to this query's end point."""
        if node_id == self.end():
            return EndLink.NEVER
        if node_id == self.start():
            return EndLink.ALWAYS if self.direct else EndLink.NEVER

        link = self.graph[node_id].end_link
        if link is EndLink.IF_END_VISIBLE:
            return EndLink.ALWAYS if self.end_visible[node_id] else EndLink.NEVER
        return link

    def neighbors(self, node_id: int) -> list[int]:
        if node_id == self.end():
            return []
        if node_id == self.start():
            base = self.start_connections
        else:
            base = self.graph.neighbors(node_id)

        if self.end_link(node_id) is EndLink.ALWAYS:
            return [*base, self.end()]
        return base

    def position(self, node_id: int) -> Vec2:
        if node_id == self.start():
            return self.start_point
        if node_id == self.end():
            return self.end_point
        return self.graph.position(node_id)

    def distance(self, from_node: int, to_node: int) -> float:
        return self.position(from_node).dist(self.position(to_node))

    def heuristic(self, node_id: int) -> float:
        return self.position(node_id).dist(self.end_point)


def _sees(node: GraphNode, point: Vec2, obstacles: Sequence[NavigationObstacle]) -> bool:
    """Check whether a free point is reachable in a straight line from a node."""
    if node.position == point:
        return True
    if not node.accepts((point - node.position).direction()):
        return False
    ignored = incident_edges(
        node.obstacle_index, node.vertex_index, len(obstacles[node.obstacle_index])
    )
    return segment_is_clear(Segment(node.position, point), obstacles, ignored)


def build_graph(obstacles: Sequence[Sequence[Vec2] | Sequence[tuple[float, float]]]) -> Navigation:
    """Build the static navigation structure for a batch of obstacle outlines."""
    return Navigation.from_outlines(obstacles)


def find_path(
    navigation: Navigation,
    start: Vec2,
    end: Vec2,
    visited_rule: VisitedRule = VisitedRule.ON_RELAX,
) -> list[Vec2] | None:
    """Find the shortest obstacle-free path; see Navigation.find_path."""
    return navigation.find_path(start, end, visited_rule)


def expand(obstacle: NavigationObstacle, delta: float, resolution: float) -> NavigationObstacle:
    """Clearance-buffer an obstacle; see NavigationObstacle.expand."""
    return obstacle.expand(delta, resolution)
