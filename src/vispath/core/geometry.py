"""Geometric predicates shared by graph construction and path queries.

This module provides:
- Connectable-range testing (is a heading inside a vertex's free-space wedge)
- Occlusion testing of a segment against obstacle boundaries
- Outline validation for incrementally drawn obstacles

All functions are pure and stateless.
"""

from collections.abc import Iterable, Sequence
from itertools import islice

from vispath.domain import (
    Direction,
    NavigationObstacle,
    Segment,
    Shape,
    Vec2,
)
from vispath.domain.vec2 import EPSILON

# An obstacle edge, identified by (obstacle index, index of its start vertex)
EdgeKey = tuple[int, int]


def in_connectable_range(direction: Direction, to_prev: Direction, to_next: Direction) -> bool:
    """Check whether a heading leaves a vertex through its free-space wedge.

    The wedge sweeps counter-clockwise from `to_prev` to `to_next` and is
    closed at both ends, so a heading running along an adjacent edge is
    accepted.

    Args:
        direction: Candidate heading away from the vertex
        to_prev: Heading from the vertex toward its previous vertex
        to_next: Heading from the vertex toward its next vertex

    Returns:
        True if the heading lies in the wedge

    Examples:
        >>> import math
        >>> # Bottom-right corner of a CCW square: free space is everything
        >>> # except the up-left quadrant
        >>> in_connectable_range(Direction(-math.pi / 4), Direction(math.pi), Direction(math.pi / 2))
        True
        >>> in_connectable_range(Direction(3 * math.pi / 4), Direction(math.pi), Direction(math.pi / 2))
        False
    """
    offset = to_prev.sweep_to(direction)
    if offset.radians >= offset.full_turn().radians - EPSILON:
        # Heading coincides with to_prev
        return True
    return offset.radians <= to_prev.sweep_to(to_next).radians + EPSILON


def incident_edges(obstacle_index: int, vertex_index: int, vertex_count: int) -> set[EdgeKey]:
    """Keys of the two boundary edges meeting at a vertex."""
    return {
        (obstacle_index, vertex_index),
        (obstacle_index, (vertex_index - 1) % vertex_count),
    }


def segment_is_clear(
    segment: Segment,
    obstacles: Sequence[NavigationObstacle],
    ignored_edges: Iterable[EdgeKey] = (),
) -> bool:
    """Check that a segment touches no obstacle edge.

    Any contact counts as a hit, including grazing a vertex or running along
    an edge. Edges listed in `ignored_edges` are skipped; callers pass the
    edges incident to the segment's own endpoints so that a segment leaving
    an obstacle corner is not rejected by the corner it starts from.

    Args:
        segment: Candidate segment
        obstacles: All obstacles in the scene
        ignored_edges: Edge keys to leave out of the test

    Returns:
        True if no considered edge intersects the segment
    """
    ignored = set(ignored_edges)
    for obstacle_index, obstacle in enumerate(obstacles):
        for edge_index, edge in enumerate(obstacle.shape.segments()):
            if (obstacle_index, edge_index) in ignored:
                continue
            if segment.intersect(edge) is not None:
                return False
    return True


def can_add_vertex(point: Vec2, shape: Shape) -> bool:
    """Check whether appending a vertex keeps a drawn outline simple.

    `shape` is an outline being drawn vertex by vertex. Passing its first
    vertex as `point` asks whether the outline may be closed.

    A vertex is rejected when it repeats the previous vertex, when the new
    edge doubles back over the previous edge (or, when closing, over the
    first edge), or when the new edge crosses any earlier edge.

    Args:
        point: Vertex to append
        shape: Outline drawn so far

    Returns:
        True if the vertex may be appended
    """
    vertices = shape.vertices
    length = len(vertices)
    if length == 0:
        return True
    if length == 1:
        return point != vertices[0]

    new_segment = Segment(vertices[-1], point)
    edges = shape.segments()
    cross_check_count = length - 2

    if vertices[0] == point:
        first_segment = next(edges)
        if first_segment.overlaps_with_p0_to(new_segment.p0):
            return False
        cross_check_count = max(0, cross_check_count - 1)

    for edge in islice(edges, cross_check_count):
        if new_segment.intersect(edge) is not None:
            return False

    last_segment = next(edges)
    if last_segment.p1 == point:
        return False
    return not last_segment.overlaps_with_p1_to(point)


def is_valid_outline(vertices: Sequence[Vec2]) -> bool:
    """Check that an outline could have been drawn and closed vertex by vertex.

    Replays `can_add_vertex` for each vertex, then for closing back to the
    first vertex. Outlines with fewer than three vertices are accepted as
    degenerate point or wall obstacles provided their vertices are distinct.

    Args:
        vertices: Outline in drawing order

    Returns:
        True if the outline is simple
    """
    drawn = Shape()
    for vertex in vertices:
        if not can_add_vertex(vertex, drawn):
            return False
        drawn.vertices.append(vertex)

    if len(drawn) < 3:
        return True
    return can_add_vertex(drawn.vertices[0], drawn)


def path_length(path: Sequence[Vec2]) -> float:
    """Total length of a polyline."""
    return sum(a.dist(b) for a, b in zip(path, path[1:]))
