"""Line segments and their intersection predicates.

Intersection is computed with explicit branches for vertical and parallel
segments instead of a general determinant, so that collinear overlaps resolve
to a well-defined endpoint and no division by a near-zero slope difference
ever happens.
"""

from dataclasses import dataclass
from typing import Any

from vispath.domain.vec2 import EPSILON, Sign, Vec2


def _min_max(v0: float, v1: float) -> tuple[float, float]:
    return (v0, v1) if v0 < v1 else (v1, v0)


def _contains(b0: float, b1: float, value: float) -> bool:
    low, high = _min_max(b0, b1)
    return low <= value <= high


def _overlaps(vec_self: Vec2, vec_target: Vec2) -> bool:
    """Check that `vec_target` runs along `vec_self` in the same half-line.

    A zero-length target counts as overlapping.
    """
    if abs(vec_self.cross(vec_target)) > EPSILON:
        return False

    self_sign_x = vec_self.sign_x()
    target_sign_x = vec_target.sign_x()
    if self_sign_x == target_sign_x:
        if self_sign_x != Sign.ZERO:
            return True
        # Both vertical: compare along y instead
        target_sign_y = vec_target.sign_y()
        return vec_self.sign_y() == target_sign_y or target_sign_y == Sign.ZERO

    return target_sign_x == Sign.ZERO and vec_target.sign_y() == Sign.ZERO


@dataclass(frozen=True, slots=True, eq=False)
class Segment:
    """A line segment between two points.

    Equality is undirected: Segment(a, b) == Segment(b, a).

    Attributes:
        p0: Start point
        p1: End point
    """

    p0: Vec2
    p1: Vec2

    @classmethod
    def flat(cls, p0x: float, p0y: float, p1x: float, p1y: float) -> "Segment":
        """Build a segment from four coordinates."""
        return cls(Vec2(p0x, p0y), Vec2(p1x, p1y))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return (self.p0 == other.p0 and self.p1 == other.p1) or (
            self.p0 == other.p1 and self.p1 == other.p0
        )

    def __hash__(self) -> int:
        return hash(frozenset((self.p0, self.p1)))

    def is_horizontal(self) -> bool:
        return abs(self.p0.y - self.p1.y) <= EPSILON

    def is_vertical(self) -> bool:
        return abs(self.p0.x - self.p1.x) <= EPSILON

    def slope(self) -> float:
        """Slope dy/dx. Only meaningful for non-vertical segments."""
        return (self.p1.y - self.p0.y) / (self.p1.x - self.p0.x)

    def vector(self) -> Vec2:
        """Displacement from p0 to p1."""
        return self.p1 - self.p0

    def vector_reversed(self) -> Vec2:
        """Displacement from p1 to p0."""
        return self.p0 - self.p1

    def length(self) -> float:
        return self.p0.dist(self.p1)

    def reversed(self) -> "Segment":
        return Segment(self.p1, self.p0)

    def intersect(self, other: "Segment") -> Vec2 | None:
        """Find the single intersection point of two segments.

        For collinear overlapping segments the result is the point of the
        overlap closest to this segment's p0: either p0 itself when it lies
        inside `other`, or the endpoint of `other` nearest to it.

        Args:
            other: Segment to intersect with

        Returns:
            Intersection point, or None if the segments do not meet

        Examples:
            >>> Segment.flat(1, 1, 10, 10).intersect(Segment.flat(0, 10, 10, 0))
            Vec2(x=5.0, y=5.0)
            >>> Segment.flat(5, 5, 5, 10).intersect(Segment.flat(5, 15, 5, 20)) is None
            True
        """
        if self.is_vertical():
            if other.is_vertical():
                return self._intersect_vertical_collinear(other)
            return other._intersect_with_vertical(self)

        if other.is_vertical():
            return self._intersect_with_vertical(other)

        self_slope = self.slope()
        other_slope = other.slope()

        if abs(self_slope - other_slope) <= EPSILON:
            other_y_at_self_x = other.p0.y - self_slope * (other.p0.x - self.p0.x)
            if abs(other_y_at_self_x - self.p0.y) >= EPSILON:
                # Parallel
                return None
            return self._collinear_overlap_point(other, lambda p: p.x)

        # Fixed operand order: a.intersect(b) == b.intersect(a) exactly
        if other._sort_key() < self._sort_key():
            return other._intersect_crossing(self)
        return self._intersect_crossing(other)

    def _sort_key(self) -> tuple[float, float, float, float]:
        return (self.p0.x, self.p0.y, self.p1.x, self.p1.y)

    def _intersect_crossing(self, other: "Segment") -> Vec2 | None:
        """Intersect two non-vertical segments with different slopes."""
        self_slope = self.slope()
        other_slope = other.slope()

        self_y_at_other_x = self.p0.y + self_slope * (other.p0.x - self.p0.x)
        slope_diff = self_slope - other_slope
        intersect_x = other.p0.x + (other.p0.y - self_y_at_other_x) / slope_diff

        if _contains(self.p0.x, self.p1.x, intersect_x) and _contains(
            other.p0.x, other.p1.x, intersect_x
        ):
            return Vec2(intersect_x, self.p0.y + self_slope * (intersect_x - self.p0.x))
        return None

    def _intersect_vertical_collinear(self, other: "Segment") -> Vec2 | None:
        if abs(self.p0.x - other.p0.x) >= EPSILON:
            return None
        return self._collinear_overlap_point(other, lambda p: p.y)

    def _collinear_overlap_point(self, other: "Segment", axis: Any) -> Vec2 | None:
        """Resolve the overlap of two collinear segments along one axis."""
        low, high = _min_max(axis(other.p0), axis(other.p1))
        start, end = axis(self.p0), axis(self.p1)

        if start < low and end < low:
            return None
        if start > high and end > high:
            return None

        ascending = axis(other.p0) < axis(other.p1)
        if start < low:
            return other.p0 if ascending else other.p1
        if start > high:
            return other.p1 if ascending else other.p0
        return self.p0

    def _intersect_with_vertical(self, vertical: "Segment") -> Vec2 | None:
        """Intersect this non-vertical segment with a vertical one."""
        x = vertical.p0.x
        if not _contains(self.p0.x, self.p1.x, x):
            return None
        y = self.p0.y + (x - self.p0.x) * self.slope()
        if _contains(vertical.p0.y, vertical.p1.y, y):
            return Vec2(x, y)
        return None

    def overlaps_with_p0_to(self, target: Vec2) -> bool:
        """Check whether the ray p0 -> target runs back along this segment."""
        return _overlaps(self.vector(), target - self.p0)

    def overlaps_with_p1_to(self, target: Vec2) -> bool:
        """Check whether the ray p1 -> target runs back along this segment."""
        return _overlaps(self.vector_reversed(), target - self.p1)

    def to_dict(self) -> dict[str, Any]:
        return {"p0": self.p0.to_dict(), "p1": self.p1.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        return cls(Vec2.from_dict(data["p0"]), Vec2.from_dict(data["p1"]))
