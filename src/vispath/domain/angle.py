"""Headings and turn amounts as distinct value types.

A Direction is an absolute heading; an Angle is the counter-clockwise sweep
from one heading to another. Keeping them apart means every wraparound is
handled once, on construction:

- Direction is normalized to (-pi, pi]
- Angle is normalized to (0, 2pi]

Arithmetic is closed over the two types:

    Direction - Direction -> Angle
    Direction + Angle     -> Direction
    Direction - Angle     -> Direction
    Angle + Angle         -> Angle
"""

import math
from dataclasses import dataclass

from vispath.domain.vec2 import Vec2

TAU = 2.0 * math.pi


def _bound_direction(radians: float) -> float:
    bounded = math.fmod(radians, TAU)
    if bounded > math.pi:
        bounded -= TAU
    elif bounded <= -math.pi:
        bounded += TAU
    return bounded


def _bound_angle(radians: float) -> float:
    bounded = math.fmod(radians, TAU)
    if bounded <= 0.0:
        bounded += TAU
    return bounded


@dataclass(frozen=True, slots=True, order=True)
class Angle:
    """A counter-clockwise sweep in radians, normalized to (0, 2pi].

    Zero is not representable: a sweep that returns to its starting heading
    is a full turn.

    Attributes:
        radians: Sweep amount in (0, 2pi]
    """

    radians: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "radians", _bound_angle(self.radians))

    @classmethod
    def full_turn(cls) -> "Angle":
        return cls(TAU)

    @classmethod
    def half_turn(cls) -> "Angle":
        return cls(math.pi)

    @classmethod
    def quarter_turn(cls) -> "Angle":
        return cls(math.pi / 2.0)

    def explementary(self) -> "Angle":
        """The angle completing this one to a full turn (2pi - self)."""
        return Angle(TAU - self.radians)

    def is_full_turn(self) -> bool:
        return self.radians >= TAU

    def __add__(self, other: "Angle") -> "Angle":
        if not isinstance(other, Angle):
            return NotImplemented
        return Angle(self.radians + other.radians)

    def __mul__(self, factor: float) -> "Angle":
        return Angle(self.radians * factor)

    def __truediv__(self, divisor: float) -> "Angle":
        return Angle(self.radians / divisor)


@dataclass(frozen=True, slots=True)
class Direction:
    """An absolute heading in radians, normalized to (-pi, pi].

    Attributes:
        radians: Heading measured counter-clockwise from the positive x axis
    """

    radians: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "radians", _bound_direction(self.radians))

    def unit(self) -> Vec2:
        """Unit vector pointing along this heading."""
        return Vec2(math.cos(self.radians), math.sin(self.radians))

    def __add__(self, other: Angle) -> "Direction":
        if not isinstance(other, Angle):
            return NotImplemented
        return Direction(self.radians + other.radians)

    def __sub__(self, other: "Direction | Angle") -> "Direction | Angle":
        if isinstance(other, Direction):
            return Angle(self.radians - other.radians)
        if isinstance(other, Angle):
            return Direction(self.radians - other.radians)
        return NotImplemented

    def sweep_to(self, other: "Direction") -> Angle:
        """Counter-clockwise sweep from this heading to `other`.

        Equal headings give a full turn.
        """
        return Angle(other.radians - self.radians)
