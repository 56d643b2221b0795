"""Navigation obstacles with precomputed vertex classification.

A NavigationObstacle wraps a Shape wound counter-clockwise together with one
flag per vertex telling whether the corner is reflex as seen from free space.
With counter-clockwise winding the free-space wedge at a vertex is the sweep
from the direction of the previous vertex to the direction of the next one.
When that sweep exceeds pi (the obstacle's own corner is sharper than a
straight line) the vertex is reflex: a shortest path can bend around it, so
it becomes a visibility graph node.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from vispath.domain.angle import TAU, Angle, Direction
from vispath.domain.shape import Shape, WindingDirection
from vispath.domain.vec2 import EPSILON, Vec2


def exterior_wedge(shape: Shape, index: int) -> tuple[Direction, Direction]:
    """Bounding headings of the free-space wedge at a vertex.

    Args:
        shape: Counter-clockwise shape
        index: Vertex index

    Returns:
        Tuple (to_prev, to_next); the wedge sweeps counter-clockwise from
        to_prev to to_next
    """
    vertex = shape.vertices[index]
    to_prev = (shape.prev_vertex(index) - vertex).direction()
    to_next = (shape.next_vertex(index) - vertex).direction()
    return to_prev, to_next


def classify_reflex(shape: Shape) -> tuple[bool, ...]:
    """Flag the vertices of a counter-clockwise shape that are reflex.

    Args:
        shape: Counter-clockwise shape

    Returns:
        One flag per vertex, True where the free-space angle exceeds pi
    """
    flags = []
    for index in range(len(shape)):
        to_prev, to_next = exterior_wedge(shape, index)
        # A full turn (wall ends, lone points) counts as reflex
        flags.append((to_next - to_prev).radians > math.pi)
    return tuple(flags)


@dataclass(frozen=True)
class NavigationObstacle:
    """A polygon the agent cannot cross, with reflex flags per vertex.

    Build instances with `from_vertices`, which canonicalizes winding and
    computes the flags. The direct constructor trusts its arguments and is
    used where flags are known, such as clearance expansion.

    Attributes:
        shape: Counter-clockwise outline
        reflex: One flag per vertex of `shape`
    """

    shape: Shape
    reflex: tuple[bool, ...]

    @classmethod
    def from_vertices(cls, vertices: Sequence[Vec2]) -> "NavigationObstacle":
        """Create an obstacle from an outline in either winding order."""
        shape = Shape(list(vertices)).with_winding(WindingDirection.COUNTER_CLOCKWISE)
        return cls(shape=shape, reflex=classify_reflex(shape))

    @classmethod
    def from_shape(cls, shape: Shape) -> "NavigationObstacle":
        return cls.from_vertices(shape.vertices)

    @property
    def vertices(self) -> list[Vec2]:
        return self.shape.vertices

    def __len__(self) -> int:
        return len(self.shape)

    def is_reflex(self, index: int) -> bool:
        return self.reflex[index]

    def reflex_indices(self) -> list[int]:
        return [i for i, flag in enumerate(self.reflex) if flag]

    def expand(self, delta: float, resolution: float) -> "NavigationObstacle":
        """Offset the outline outward to leave clearance for the agent.

        Non-reflex vertices get a miter join: the vertex moves along the
        bisector of its free-space wedge far enough that both adjacent edges
        end up `delta` away. Reflex vertices get a round join: a fan of points
        at distance `delta` sweeping from the outward normal of the incoming
        edge to that of the outgoing edge, with steps of roughly `resolution`
        radians. Fan points are flagged reflex, miter points are not. A
        single-vertex obstacle becomes a circle of radius `delta`.

        Args:
            delta: Clearance distance, must be positive
            resolution: Approximate angular step of round joins in radians,
                must be positive

        Returns:
            New obstacle; this one is not modified

        Raises:
            ValueError: If delta or resolution is not positive
        """
        if delta <= 0:
            raise ValueError(f"Expansion delta must be positive, got {delta}")
        if resolution <= 0:
            raise ValueError(f"Expansion resolution must be positive, got {resolution}")

        if len(self.shape) == 1:
            circle = _circle(self.shape.vertices[0], delta, resolution)
            return NavigationObstacle(shape=Shape(circle), reflex=tuple([True] * len(circle)))

        points: list[Vec2] = []
        flags: list[bool] = []

        for index, vertex in enumerate(self.shape.vertices):
            to_prev, to_next = exterior_wedge(self.shape, index)

            if self.reflex[index]:
                fan = _round_join(vertex, to_prev, to_next, delta, resolution)
                points.extend(fan)
                flags.extend([True] * len(fan))
            else:
                points.append(_miter_join(vertex, to_prev, to_next, delta))
                flags.append(False)

        return NavigationObstacle(shape=Shape(points), reflex=tuple(flags))


def _miter_join(vertex: Vec2, to_prev: Direction, to_next: Direction, delta: float) -> Vec2:
    exterior = to_next - to_prev
    half = exterior / 2
    bisector = to_prev + half
    sine = math.sin(half.radians)
    if sine <= EPSILON:
        return vertex + bisector.unit() * delta
    return vertex + bisector.unit() * (delta / sine)


def _round_join(
    vertex: Vec2,
    to_prev: Direction,
    to_next: Direction,
    delta: float,
    resolution: float,
) -> list[Vec2]:
    """Fan of offset points around a reflex vertex.

    A span of a full turn (start and end headings coincide) is not skipped:
    it yields the single point offset along the incoming edge's normal, so
    every reflex vertex keeps at least one point in the expanded outline.
    """
    quarter = Angle.quarter_turn()
    start = to_prev + quarter
    end = to_next - quarter
    span = start.sweep_to(end)

    if span.is_full_turn():
        return [vertex + start.unit() * delta]

    steps = max(1, round(span.radians / resolution))
    step = span.radians / steps
    return [
        vertex + Direction(start.radians + step * i).unit() * delta
        for i in range(steps + 1)
    ]


def _circle(center: Vec2, delta: float, resolution: float) -> list[Vec2]:
    steps = max(3, round(TAU / resolution))
    return [center + Direction(TAU * i / steps).unit() * delta for i in range(steps)]
