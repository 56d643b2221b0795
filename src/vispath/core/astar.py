"""Generic A* search over an abstract weighted graph.

The search knows nothing about geometry. Any object implementing the
AStarInput protocol can be searched: nodes are dense integer ids in
range(len(input)), and the input names the start and goal ids.

Key components:
- AStarInput: Protocol describing a searchable graph
- VisitedRule: When a node joins the closed set
- a_star: The search itself
"""

import heapq
import math
from collections.abc import Sequence
from typing import Protocol

from vispath.config.settings import VisitedRule


class AStarInput(Protocol):
    """A graph that A* can search."""

    def __len__(self) -> int:
        """Number of node ids; every id used is below this."""
        ...

    def start(self) -> int: ...

    def end(self) -> int: ...

    def neighbors(self, node: int) -> Sequence[int]: ...

    def distance(self, from_node: int, to_node: int) -> float:
        """Nonnegative cost of the edge between two adjacent nodes."""
        ...

    def heuristic(self, node: int) -> float:
        """Estimated remaining cost to the goal. Must not overestimate."""
        ...


def a_star(graph: AStarInput, visited_rule: VisitedRule = VisitedRule.ON_RELAX) -> list[int] | None:
    """Find a cheapest path from graph.start() to graph.end().

    The frontier is ordered by f = g + heuristic, ties broken by ascending
    node id so results are deterministic.

    Args:
        graph: Graph to search
        visited_rule: Closed-set rule, see VisitedRule

    Returns:
        Node ids from start to end inclusive, or None if the goal is
        unreachable
    """
    node_count = len(graph)
    start = graph.start()
    end = graph.end()

    g_score = [math.inf] * node_count
    came_from: list[int | None] = [None] * node_count
    closed = [False] * node_count

    g_score[start] = 0.0
    frontier: list[tuple[float, int]] = [(graph.heuristic(start), start)]

    while frontier:
        _, current = heapq.heappop(frontier)

        if current == end:
            return _reconstruct(came_from, current)

        if closed[current]:
            continue
        if visited_rule is VisitedRule.ON_POP:
            closed[current] = True

        for neighbor in graph.neighbors(current):
            tentative = g_score[current] + graph.distance(current, neighbor)
            if tentative < g_score[neighbor]:
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                heapq.heappush(frontier, (tentative + graph.heuristic(neighbor), neighbor))
                if visited_rule is VisitedRule.ON_RELAX:
                    closed[current] = True

    return None


def _reconstruct(came_from: list[int | None], goal: int) -> list[int]:
    path = []
    node: int | None = goal
    while node is not None:
        path.append(node)
        node = came_from[node]
    path.reverse()
    return path
