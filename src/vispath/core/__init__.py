"""Core planning algorithms for vispath.

This module contains the core algorithms for:

- Geometric predicates (connectable range, occlusion, outline validation)
- Visibility graph construction over reflex obstacle vertices
- A* search over an abstract graph
- Per-query navigation and scene orchestration

Graph construction and search are:
- Pure (no I/O; debug logging only)
- Deterministic for a given obstacle order
- Safe to share: the static graph is never modified by a query

Key functions:
- in_connectable_range: Test a heading against a vertex's free-space wedge
- segment_is_clear: Test a segment against obstacle boundaries
- can_add_vertex: Validate an incremental outline edit
- a_star: Shortest path over an AStarInput
- build_graph / find_path / expand: Functional entry points

Key classes:
- VisibilityGraph: Static graph over reflex vertices
- Navigation: Obstacles plus their visibility graph
- NavigationQuery: Per-query A* input
- ScenePlanner: Scene file orchestrator
"""

from vispath.core.astar import AStarInput, VisitedRule, a_star
from vispath.core.geometry import (
    can_add_vertex,
    in_connectable_range,
    is_valid_outline,
    path_length,
    segment_is_clear,
)
from vispath.core.navigation import (
    Navigation,
    NavigationQuery,
    build_graph,
    expand,
    find_path,
)
from vispath.core.planner import ScenePlanner
from vispath.core.visibility import EndLink, GraphNode, VisibilityGraph

__all__ = [
    # Search
    "AStarInput",
    "VisitedRule",
    "a_star",
    # Graph classes
    "EndLink",
    "GraphNode",
    "VisibilityGraph",
    # Navigation
    "Navigation",
    "NavigationQuery",
    "ScenePlanner",
    "build_graph",
    "expand",
    "find_path",
    # Geometry functions
    "can_add_vertex",
    "in_connectable_range",
    "is_valid_outline",
    "path_length",
    "segment_is_clear",
]
