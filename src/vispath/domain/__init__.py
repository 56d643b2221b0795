"""Domain models for vispath.

This module contains the geometric value types and the obstacle model.
All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries
- Free of I/O and logging

Key classes:
- Vec2: A 2D point or displacement
- Direction / Angle: Absolute headings and counter-clockwise sweeps
- Segment: A line segment with exact intersection predicates
- Shape: A closed polygon
- NavigationObstacle: A counter-clockwise polygon with reflex vertex flags
- Scene / PathQuery / PathResult: Obstacle sets with their queries and answers
"""

from vispath.domain.angle import TAU, Angle, Direction
from vispath.domain.obstacle import NavigationObstacle, classify_reflex, exterior_wedge
from vispath.domain.scene import PathQuery, PathResult, Scene
from vispath.domain.segment import Segment
from vispath.domain.shape import Shape, WindingDirection
from vispath.domain.vec2 import EPSILON, Sign, Vec2

__all__: list[str] = [
    # Constants
    "EPSILON",
    "TAU",
    # Enums
    "Sign",
    "WindingDirection",
    # Core types
    "Vec2",
    "Angle",
    "Direction",
    "Segment",
    "Shape",
    "NavigationObstacle",
    "PathQuery",
    "PathResult",
    "Scene",
    # Helpers
    "classify_reflex",
    "exterior_wedge",
]
