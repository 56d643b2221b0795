"""Unit tests for reflex classification and clearance expansion."""

import math

import pytest

from vispath.domain import (
    NavigationObstacle,
    Shape,
    Vec2,
    WindingDirection,
    classify_reflex,
    exterior_wedge,
)

SQUARE = [Vec2(2, 2), Vec2(8, 2), Vec2(8, 8), Vec2(2, 8)]

# L-shaped obstacle; (2, 2) is the inner corner
L_SHAPE = [Vec2(0, 0), Vec2(6, 0), Vec2(6, 2), Vec2(2, 2), Vec2(2, 6), Vec2(0, 6)]


class TestReflexClassification:
    """Tests for classify_reflex and NavigationObstacle flags."""

    def test_square_corners_are_reflex(self) -> None:
        """Test every corner of a convex obstacle is a graph node candidate."""
        obstacle = NavigationObstacle.from_vertices(SQUARE)
        assert obstacle.reflex == (True, True, True, True)
        assert obstacle.reflex_indices() == [0, 1, 2, 3]

    def test_l_shape_inner_corner(self) -> None:
        """Test the concave corner of an L is not reflex."""
        obstacle = NavigationObstacle.from_vertices(L_SHAPE)
        assert obstacle.reflex == (True, True, True, False, True, True)
        assert not obstacle.is_reflex(3)

    def test_clockwise_l_shape(self) -> None:
        """Test flags follow the rewound vertex order."""
        obstacle = NavigationObstacle.from_vertices(list(reversed(L_SHAPE)))
        assert obstacle.shape.winding_direction() == WindingDirection.COUNTER_CLOCKWISE
        inner = obstacle.vertices.index(Vec2(2, 2))
        assert not obstacle.is_reflex(inner)
        assert len(obstacle.reflex_indices()) == 5

    def test_wall_ends_are_reflex(self) -> None:
        """Test both ends of a two-vertex wall are reflex."""
        obstacle = NavigationObstacle.from_vertices([Vec2(0, 0), Vec2(10, 0)])
        assert obstacle.reflex == (True, True)

    def test_point_is_reflex(self) -> None:
        """Test a single-vertex obstacle is reflex."""
        obstacle = NavigationObstacle.from_vertices([Vec2(3, 3)])
        assert obstacle.reflex == (True,)

    def test_classify_matches_obstacle(self) -> None:
        """Test classify_reflex on a counter-clockwise shape."""
        assert classify_reflex(Shape(list(L_SHAPE))) == NavigationObstacle.from_vertices(L_SHAPE).reflex

    def test_exterior_wedge(self) -> None:
        """Test wedge bounds at the bottom-left square corner."""
        to_prev, to_next = exterior_wedge(Shape(list(SQUARE)), 0)
        assert to_prev.radians == pytest.approx(math.pi / 2)
        assert to_next.radians == pytest.approx(0.0)


class TestExpansion:
    """Tests for NavigationObstacle.expand."""

    def test_square_round_joins(self) -> None:
        """Test each reflex corner becomes a fan of points at distance delta."""
        obstacle = NavigationObstacle.from_vertices(SQUARE)
        expanded = obstacle.expand(1.0, math.pi / 8)

        # Quarter-turn fans in pi/8 steps: 5 points per corner
        assert len(expanded) == 20
        assert all(expanded.reflex)

        for corner_index, corner in enumerate(SQUARE):
            fan = expanded.vertices[corner_index * 5 : corner_index * 5 + 5]
            for point in fan:
                assert point.dist(corner) == pytest.approx(1.0)

    def test_square_fan_endpoints(self) -> None:
        """Test the first fan runs from the left normal to the bottom normal."""
        expanded = NavigationObstacle.from_vertices(SQUARE).expand(1.0, math.pi / 8)
        first, last = expanded.vertices[0], expanded.vertices[4]
        assert first.x == pytest.approx(1.0)
        assert first.y == pytest.approx(2.0)
        assert last.x == pytest.approx(2.0)
        assert last.y == pytest.approx(1.0)

    def test_square_bounding_box(self) -> None:
        """Test the expanded square is grown by delta on every side."""
        expanded = NavigationObstacle.from_vertices(SQUARE).expand(1.0, math.pi / 8)
        assert expanded.shape.bounding_box() == pytest.approx((1.0, 1.0, 9.0, 9.0))
        assert expanded.shape.winding_direction() == WindingDirection.COUNTER_CLOCKWISE

    def test_coarse_resolution(self) -> None:
        """Test a resolution wider than the fan still gives both end points."""
        expanded = NavigationObstacle.from_vertices(SQUARE).expand(1.0, math.pi)
        assert len(expanded) == 8

    def test_l_shape_miter_join(self) -> None:
        """Test the inner corner moves along its bisector."""
        expanded = NavigationObstacle.from_vertices(L_SHAPE).expand(1.0, math.pi / 8)

        assert len(expanded) == 26
        assert expanded.reflex.count(False) == 1

        miter_index = expanded.reflex.index(False)
        miter = expanded.vertices[miter_index]
        assert miter.x == pytest.approx(3.0)
        assert miter.y == pytest.approx(3.0)

    def test_wall_becomes_stadium(self) -> None:
        """Test wall ends get half-circle caps."""
        expanded = NavigationObstacle.from_vertices([Vec2(0, 0), Vec2(10, 0)]).expand(
            2.0, math.pi / 8
        )
        assert len(expanded) == 18
        assert expanded.shape.bounding_box() == pytest.approx((-2.0, -2.0, 12.0, 2.0))

    def test_point_becomes_circle(self) -> None:
        """Test a point obstacle expands to a circle."""
        center = Vec2(3, 3)
        expanded = NavigationObstacle.from_vertices([center]).expand(0.5, math.pi / 8)
        assert len(expanded) == 16
        assert all(expanded.reflex)
        for point in expanded.vertices:
            assert point.dist(center) == pytest.approx(0.5)

    def test_full_turn_fan_is_single_point(self) -> None:
        """Test a reflex vertex whose fan spans a full turn emits one offset point."""
        # (10, 5) sits mid-edge, so its fan starts and ends on the same heading
        vertices = [Vec2(0, 0), Vec2(10, 0), Vec2(10, 5), Vec2(10, 10), Vec2(0, 10)]
        obstacle = NavigationObstacle(shape=Shape(vertices), reflex=(True,) * 5)

        expanded = obstacle.expand(1.0, math.pi / 8)

        assert len(expanded) == 4 * 5 + 1
        assert expanded.vertices.count(Vec2(11.0, 5.0)) == 1
        assert all(expanded.reflex)

    def test_original_unchanged(self) -> None:
        """Test expansion returns a new obstacle."""
        obstacle = NavigationObstacle.from_vertices(SQUARE)
        obstacle.expand(1.0, math.pi / 8)
        assert obstacle.vertices == SQUARE

    @pytest.mark.parametrize("delta,resolution", [(0.0, 0.5), (-1.0, 0.5), (1.0, 0.0)])
    def test_invalid_arguments(self, delta: float, resolution: float) -> None:
        """Test non-positive delta or resolution is rejected."""
        obstacle = NavigationObstacle.from_vertices(SQUARE)
        with pytest.raises(ValueError):
            obstacle.expand(delta, resolution)
