"""Static visibility graph over the reflex corners of a set of obstacles.

Nodes are the reflex vertices of all obstacles, numbered densely in
obstacle-then-vertex order. Two nodes are joined when the straight segment
between them leaves each corner through its free-space wedge and touches no
obstacle edge other than the ones meeting at its two endpoints.

The graph is built once per obstacle set and is never modified afterwards.
Per-query start and end points are layered on top by the navigation adapter.
"""

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto

from vispath.core.geometry import EdgeKey, in_connectable_range, incident_edges, segment_is_clear
from vispath.domain import Direction, NavigationObstacle, Segment, Vec2, exterior_wedge

logger = logging.getLogger(__name__)


class EndLink(Enum):
    """How a node relates to the goal of a query.

    Static graph nodes declare IF_END_VISIBLE; a query resolves that to
    ALWAYS or NEVER once it knows where its end point is.
    """

    ALWAYS = auto()
    NEVER = auto()
    IF_END_VISIBLE = auto()


@dataclass
class GraphNode:
    """A reflex obstacle corner in the visibility graph.

    Attributes:
        position: Location of the corner
        obstacle_index: Index of the owning obstacle
        vertex_index: Index of the corner within the obstacle outline
        to_prev: Heading toward the previous vertex of the outline
        to_next: Heading toward the next vertex of the outline
        neighbors: Ids of nodes visible from this one
        end_link: Relation to a query's end point
    """

    position: Vec2
    obstacle_index: int
    vertex_index: int
    to_prev: Direction
    to_next: Direction
    neighbors: list[int] = field(default_factory=list)
    end_link: EndLink = EndLink.IF_END_VISIBLE

    def accepts(self, direction: Direction) -> bool:
        """Check whether a connection may leave this corner along `direction`."""
        return in_connectable_range(direction, self.to_prev, self.to_next)


class VisibilityGraph:
    """Immutable adjacency structure over obstacle corners.

    Example:
        obstacles = [NavigationObstacle.from_vertices(outline)]
        graph = VisibilityGraph.build(obstacles)
        for segment in graph.edges():
            print(segment)
    """

    def __init__(self, nodes: list[GraphNode]) -> None:
        self._nodes = nodes

    @classmethod
    def build(cls, obstacles: Sequence[NavigationObstacle]) -> "VisibilityGraph":
        """Build the graph for an obstacle set.

        Each unordered pair of reflex corners is tested once: first the
        cheap connectable-range test at both ends, then the occlusion test
        against every obstacle edge.

        Args:
            obstacles: All obstacles of the scene

        Returns:
            The visibility graph
        """
        nodes: list[GraphNode] = []
        incident: list[set[EdgeKey]] = []

        for obstacle_index, obstacle in enumerate(obstacles):
            for vertex_index in obstacle.reflex_indices():
                to_prev, to_next = exterior_wedge(obstacle.shape, vertex_index)
                node = GraphNode(
                    position=obstacle.vertices[vertex_index],
                    obstacle_index=obstacle_index,
                    vertex_index=vertex_index,
                    to_prev=to_prev,
                    to_next=to_next,
                )
                nodes.append(node)
                incident.append(incident_edges(obstacle_index, vertex_index, len(obstacle)))

                node_id = len(nodes) - 1
                for other_id in range(node_id):
                    other = nodes[other_id]
                    if node.position == other.position:
                        continue
                    if not node.accepts((other.position - node.position).direction()):
                        continue
                    if not other.accepts((node.position - other.position).direction()):
                        continue
                    if not segment_is_clear(
                        Segment(node.position, other.position),
                        obstacles,
                        incident[node_id] | incident[other_id],
                    ):
                        continue
                    node.neighbors.append(other_id)
                    other.neighbors.append(node_id)

        graph = cls(nodes)
        logger.debug(
            "Built visibility graph: %d obstacles, %d nodes, %d edges",
            len(obstacles),
            len(graph),
            graph.edge_count(),
        )
        return graph

    def __len__(self) -> int:
        return len(self._nodes)

    def __getitem__(self, node_id: int) -> GraphNode:
        return self._nodes[node_id]

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes)

    @property
    def nodes(self) -> list[GraphNode]:
        return self._nodes

    def position(self, node_id: int) -> Vec2:
        return self._nodes[node_id].position

    def neighbors(self, node_id: int) -> list[int]:
        return self._nodes[node_id].neighbors

    def edge_count(self) -> int:
        """Number of undirected edges."""
        return sum(len(node.neighbors) for node in self._nodes) // 2

    def edges(self) -> Iterator[Segment]:
        """Yield every undirected edge once, for visualization."""
        for node_id, node in enumerate(self._nodes):
            for other_id in node.neighbors:
                if other_id < node_id:
                    yield Segment(self._nodes[other_id].position, node.position)

    def is_symmetric(self) -> bool:
        """Check that every edge is recorded at both of its endpoints."""
        return all(
            node_id in self._nodes[other_id].neighbors
            for node_id, node in enumerate(self._nodes)
            for other_id in node.neighbors
        )
