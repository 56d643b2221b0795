"""Vispath - Shortest paths around polygonal obstacles.

Vispath builds a visibility graph over the reflex vertices of a set of
polygonal obstacles and answers start/end queries on it with A*. Obstacles
can be grown by a clearance distance first, so the paths suit an agent with
a radius.

Example:
    $ vispath path scene.json

This answers every query in scene.json and prints the waypoints.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
