"""Scenes: an obstacle set together with the path queries asked of it.

This module defines the in-memory form of a scene file:
- PathQuery: A start/end pair
- PathResult: The answer to one query
- Scene: Obstacle outlines plus queries
"""

from dataclasses import dataclass, field

from vispath.domain.shape import Shape
from vispath.domain.vec2 import Vec2


@dataclass(frozen=True, slots=True)
class PathQuery:
    """A request for a path between two points.

    Attributes:
        start: Start point
        end: End point
    """

    start: Vec2
    end: Vec2


@dataclass
class PathResult:
    """Answer to a PathQuery.

    Attributes:
        query: The query answered
        path: Waypoints from start to end, or None if unreachable
        direct: True if the straight line was unobstructed
    """

    query: PathQuery
    path: list[Vec2] | None
    direct: bool = False

    @property
    def found(self) -> bool:
        return self.path is not None

    @property
    def length(self) -> float | None:
        """Total length of the path, or None if no path was found."""
        if self.path is None:
            return None
        return sum(a.dist(b) for a, b in zip(self.path, self.path[1:]))


@dataclass
class Scene:
    """Obstacle outlines and queries, as read from a scene file.

    Attributes:
        obstacles: Obstacle outlines in file order
        queries: Path queries in file order
    """

    obstacles: list[Shape] = field(default_factory=list)
    queries: list[PathQuery] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return sum(len(shape) for shape in self.obstacles)
