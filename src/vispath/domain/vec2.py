"""Two-dimensional vectors and tolerance-aware sign classification.

This module defines the value types every other geometric type is built from:
- Vec2: An immutable double-precision point/vector
- Sign: Three-way sign of a scalar with an absolute tolerance band
- EPSILON: The absolute tolerance used by all geometric predicates
"""

import math
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from vispath.domain.angle import Direction

# Absolute tolerance for slope, collinearity and sign tests. Inputs are plane
# coordinates of moderate magnitude, so no relative tolerance is applied.
EPSILON = sys.float_info.epsilon


class Sign(Enum):
    """Sign of a scalar, treating values within EPSILON of zero as ZERO."""

    NEGATIVE = auto()
    ZERO = auto()
    POSITIVE = auto()

    @classmethod
    def of(cls, value: float) -> "Sign":
        """Classify a scalar.

        Args:
            value: Value to classify

        Returns:
            NEGATIVE if value <= -EPSILON, POSITIVE if value >= EPSILON,
            ZERO otherwise
        """
        if value <= -EPSILON:
            return cls.NEGATIVE
        if value >= EPSILON:
            return cls.POSITIVE
        return cls.ZERO


@dataclass(frozen=True, slots=True)
class Vec2:
    """A point or displacement in the plane.

    Immutable and hashable so it can be used as a dict key or set member.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    @classmethod
    def zero(cls) -> "Vec2":
        return cls(0.0, 0.0)

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> "Vec2":
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def cross(self, other: "Vec2") -> float:
        """Z component of the 3D cross product of two planar vectors.

        Positive when `other` lies counter-clockwise of `self`.
        """
        return self.x * other.y - self.y * other.x

    def dist_squared(self, other: "Vec2") -> float:
        """Squared Euclidean distance to another point."""
        return (self.x - other.x) ** 2 + (self.y - other.y) ** 2

    def dist(self, other: "Vec2") -> float:
        """Euclidean distance to another point."""
        return math.sqrt(self.dist_squared(other))

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def direction(self) -> "Direction":
        """Heading of this vector measured from the positive x axis.

        A zero vector has direction 0, as `atan2(0, 0)` does.

        Returns:
            Direction in (-pi, pi]
        """
        from vispath.domain.angle import Direction

        return Direction(math.atan2(self.y, self.x))

    def sign_x(self) -> Sign:
        return Sign.of(self.x)

    def sign_y(self) -> Sign:
        return Sign.of(self.y)

    def is_zero(self) -> bool:
        """Check whether both components are within EPSILON of zero."""
        return abs(self.x) <= EPSILON and abs(self.y) <= EPSILON

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    @classmethod
    def from_tuple(cls, pair: tuple[float, float] | list[float]) -> "Vec2":
        """Build a vector from an (x, y) pair."""
        x, y = pair
        return cls(float(x), float(y))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vec2":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Vec2 instance
        """
        return cls(x=data["x"], y=data["y"])
