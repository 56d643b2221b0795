"""Polygon outlines and winding order.

This module defines the closed polygon type used for obstacles:
- Shape: An implicitly closed sequence of vertices
- WindingDirection: Enum for polygon winding direction
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from vispath.domain.segment import Segment
from vispath.domain.vec2 import Vec2


class WindingDirection(Enum):
    """Polygon winding direction.

    With the y axis pointing up, a positive shoelace sum means the vertices
    are listed counter-clockwise. Obstacles are canonicalized to
    counter-clockwise so that the interior always lies to the left of each
    edge.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass
class Shape:
    """A closed polygon.

    The last vertex connects back to the first. Degenerate shapes are allowed:
    a single vertex has one zero-length boundary segment and an empty shape
    has none.

    Attributes:
        vertices: Polygon vertices in order
    """

    vertices: list[Vec2] = field(default_factory=list)
    _cached_area: float | None = field(default=None, repr=False, init=False, compare=False)

    @classmethod
    def from_tuples(cls, pairs: list[tuple[float, float]] | list[list[float]]) -> "Shape":
        """Build a shape from (x, y) pairs."""
        return cls([Vec2.from_tuple(pair) for pair in pairs])

    def __len__(self) -> int:
        return len(self.vertices)

    def segments(self) -> Iterator[Segment]:
        """Iterate over the boundary segments, wrapping last to first.

        Each call starts a fresh iteration.

        Yields:
            Segment from each vertex to the next
        """
        if not self.vertices:
            return
        first = previous = self.vertices[0]
        for vertex in self.vertices[1:]:
            yield Segment(previous, vertex)
            previous = vertex
        yield Segment(previous, first)

    def prev_vertex(self, index: int) -> Vec2:
        """Vertex before `index`, wrapping around."""
        return self.vertices[(index - 1) % len(self.vertices)]

    def next_vertex(self, index: int) -> Vec2:
        """Vertex after `index`, wrapping around."""
        return self.vertices[(index + 1) % len(self.vertices)]

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        The sign of the area indicates winding direction:
        - Positive area: counter-clockwise winding
        - Negative area: clockwise winding

        Result is cached for efficiency.

        Returns:
            Signed area of the shape
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.vertices)
        if n < 3:
            self._cached_area = 0.0
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.vertices[i].x * self.vertices[j].y
            area -= self.vertices[j].x * self.vertices[i].y

        self._cached_area = area / 2.0
        return self._cached_area

    def winding_direction(self) -> WindingDirection:
        """Winding order of the vertices. Degenerate shapes count as CCW."""
        if self.signed_area() < 0:
            return WindingDirection.CLOCKWISE
        return WindingDirection.COUNTER_CLOCKWISE

    def reversed(self) -> "Shape":
        """Copy of this shape with the vertex order reversed."""
        return Shape(list(reversed(self.vertices)))

    def with_winding(self, direction: WindingDirection) -> "Shape":
        """Copy of this shape wound in the given direction."""
        if self.winding_direction() == direction:
            return Shape(list(self.vertices))
        return self.reversed()

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the shape.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.vertices:
            return (0.0, 0.0, 0.0, 0.0)

        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        return (min(xs), min(ys), max(xs), max(ys))

    def contains_point(self, point: Vec2) -> bool:
        """Check if point is inside the shape using ray casting algorithm.

        Casts a ray from the point to the right and counts intersections
        with the boundary. Odd count means inside, even means outside.

        Args:
            point: Point to test

        Returns:
            True if point is strictly inside, False otherwise
        """
        n = len(self.vertices)
        if n < 3:
            return False

        inside = False
        j = n - 1
        for i in range(n):
            xi, yi = self.vertices[i].x, self.vertices[i].y
            xj, yj = self.vertices[j].x, self.vertices[j].y

            if ((yi > point.y) != (yj > point.y)) and (
                point.x < (xj - xi) * (point.y - yi) / (yj - yi) + xi
            ):
                inside = not inside
            j = i

        return inside

    def intersect_segment(self, segment: Segment) -> Vec2 | None:
        """Find where a segment first meets the boundary.

        Args:
            segment: Segment to test, travelling from p0 to p1

        Returns:
            The boundary intersection closest to segment.p0, or None
        """
        closest: Vec2 | None = None
        closest_dist_squared = float("inf")
        for edge in self.segments():
            intersection = segment.intersect(edge)
            if intersection is None:
                continue
            dist_squared = segment.p0.dist_squared(intersection)
            if dist_squared < closest_dist_squared:
                closest = intersection
                closest_dist_squared = dist_squared
        return closest

    def to_tuples(self) -> list[tuple[float, float]]:
        return [v.to_tuple() for v in self.vertices]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the shape
        """
        return {"vertices": [v.to_dict() for v in self.vertices]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shape":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a shape

        Returns:
            Shape instance
        """
        return cls([Vec2.from_dict(v) for v in data["vertices"]])
