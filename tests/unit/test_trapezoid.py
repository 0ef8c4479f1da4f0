"""Unit tests for trapezoidal decomposition.

Tests cover:
- Trapezoid geometry and splitting
- The point-location query structure
- Segment insertion and inside classification
"""

import pytest

from navmesh.core.trapezoid import (
    Leaf,
    QueryStructure,
    Trapezoid,
    TrapezoidalMap,
    XSplit,
    YSplit,
    clip_to_band,
    x_at,
)
from navmesh.domain import Edge, Point


def _grid(low: float, high: float, step: float) -> list[float]:
    values = []
    value = low
    while value <= high:
        values.append(value)
        value += step
    return values


def _contains(trapezoid: Trapezoid, point: Point, tolerance: float = 1e-6) -> bool:
    if not trapezoid.bottom_y - tolerance <= point.y <= trapezoid.top_y + tolerance:
        return False
    left_x, right_x = trapezoid.x_range_at(point.y)
    return left_x - tolerance <= point.x <= right_x + tolerance


class TestTrapezoid:
    """Tests for trapezoid geometry."""

    @pytest.fixture
    def slanted(self) -> Trapezoid:
        return Trapezoid(
            0,
            Edge(Point(0, 10), Point(0, 0)),
            Edge(Point(10, 10), Point(20, 0)),
        )

    def test_extent(self, slanted):
        assert slanted.top_y == 10
        assert slanted.bottom_y == 0
        assert slanted.height == 10
        assert slanted.x_range_at(5) == (0, 15)

    def test_area(self, slanted):
        assert slanted.area() == 150.0

    def test_vertices_and_center(self, slanted):
        assert slanted.vertices() == (Point(0, 10), Point(10, 10), Point(20, 0), Point(0, 0))
        assert slanted.center() == Point(7.5, 5)

    def test_horizontal_edges(self, slanted):
        top, bottom = slanted.horizontal_edges()
        assert top == Edge(Point(0, 10), Point(10, 10))
        assert bottom == Edge(Point(0, 0), Point(20, 0))
        assert len(slanted.boundary_edges()) == 4

    def test_split_vertically(self, slanted):
        """A horizontal cut clips both side edges to each half."""
        above, below = slanted.split_vertically(4, 1, 2)
        assert above.trapezoid_id == 1
        assert below.trapezoid_id == 2
        assert above.bottom_y == 4
        assert below.top_y == 4
        assert above.right.end == Point(16, 4)
        assert below.right.start == Point(16, 4)
        assert above.area() + below.area() == pytest.approx(slanted.area())

    def test_split_horizontally(self, slanted):
        """A crossing segment becomes the shared side of the two halves."""
        segment = Edge(Point(5, 20), Point(5, -20))
        left, right = slanted.split_horizontally(segment, 1, 2)
        assert left.left == slanted.left
        assert right.right == slanted.right
        assert left.right == Edge(Point(5, 10), Point(5, 0))
        assert right.left == left.right
        assert left.area() + right.area() == pytest.approx(slanted.area())


class TestEdgeClipping:
    """Tests for edge helpers."""

    def test_x_at(self):
        edge = Edge(Point(100, 25), Point(50, 0))
        assert x_at(edge, 12.5) == 75

    def test_clip_to_band(self):
        edge = Edge(Point(100, 25), Point(50, 0))
        assert clip_to_band(edge, 20, 10) == Edge(Point(90, 20), Point(70, 10))


class TestQueryStructure:
    """Tests for the point-location arena."""

    def test_starts_with_single_leaf(self):
        query = QueryStructure(0)
        assert query.root == Leaf(0)
        assert query.locate(Point(123, -456)) == 0
        assert query.leaves() == [0]

    def test_split_y(self):
        """Points at the split height go above."""
        query = QueryStructure(0)
        query.split_y(0, 5.0, 1, 2)
        assert isinstance(query.root, YSplit)
        assert query.locate(Point(0, 6)) == 1
        assert query.locate(Point(0, 5)) == 1
        assert query.locate(Point(0, 4)) == 2
        assert sorted(query.leaves()) == [1, 2]

    def test_split_x(self):
        """Points strictly left of the segment go left; on or right go right."""
        query = QueryStructure(0)
        query.split_x(0, Edge(Point(0, 10), Point(0, -10)), 1, 2)
        assert isinstance(query.root, XSplit)
        assert query.locate(Point(-1, 0)) == 1
        assert query.locate(Point(1, 0)) == 2
        assert query.locate(Point(0, 0)) == 2

    def test_nested_split_replaces_leaf(self):
        query = QueryStructure(0)
        query.split_y(0, 0.0, 1, 2)
        query.split_x(2, Edge(Point(5, 0), Point(5, -10)), 3, 4)
        assert sorted(query.leaves()) == [1, 3, 4]
        assert query.locate(Point(0, -5)) == 3
        assert query.locate(Point(10, -5)) == 4
        assert query.locate(Point(10, 5)) == 1


class TestTrapezoidalMap:
    """Tests for building trapezoidal maps from rings."""

    def test_empty_map_is_one_sentinel(self):
        tmap = TrapezoidalMap(bound=100.0)
        assert len(tmap) == 1
        root = tmap.locate(Point(0, 0))
        assert root.top_y == 100.0
        assert root.bottom_y == -100.0
        assert root.x_range_at(0) == (-100.0, 100.0)

    def test_triangle_has_two_inside_trapezoids(self):
        ring = [Point(50, 0), Point(100, 25), Point(100, -25)]
        tmap = TrapezoidalMap.from_ring(ring)
        inside = tmap.inside_trapezoids(ring)
        assert len(inside) == 2
        assert sum(t.area() for t in inside) == pytest.approx(1250.0)

    def test_leaves_match_trapezoids(self, u_shape_ring):
        """Every trapezoid is reachable through exactly one leaf."""
        tmap = TrapezoidalMap.from_ring(u_shape_ring)
        assert sorted(tmap.query.leaves()) == sorted(tmap.trapezoids)

    def test_ids_are_never_reused(self, l_shape_ring):
        tmap = TrapezoidalMap.from_ring(l_shape_ring)
        ids = sorted(tmap.trapezoids)
        assert len(ids) == len(set(ids))
        assert 0 not in ids

    @pytest.mark.parametrize(
        "ring_name,area",
        [("square_ring", 100.0), ("l_shape_ring", 300.0), ("u_shape_ring", 700.0)],
    )
    def test_inside_trapezoids_tile_ring(self, request, ring_name, area):
        """Inside trapezoids cover exactly the ring's area."""
        ring = request.getfixturevalue(ring_name)
        tmap = TrapezoidalMap.from_ring(ring)
        inside = tmap.inside_trapezoids(ring)
        assert sum(t.area() for t in inside) == pytest.approx(area)

    def test_clockwise_ring_tiles_too(self, l_shape_ring):
        ring = list(reversed(l_shape_ring))
        tmap = TrapezoidalMap.from_ring(ring)
        assert sum(t.area() for t in tmap.inside_trapezoids(ring)) == pytest.approx(300.0)

    @pytest.mark.parametrize("ring_name", ["square_ring", "l_shape_ring", "u_shape_ring"])
    def test_locate_finds_containing_trapezoid(self, request, ring_name):
        """Query leaves partition the plane: each point lands in a cell holding it."""
        ring = request.getfixturevalue(ring_name)
        tmap = TrapezoidalMap.from_ring(ring)
        for x in _grid(-30, 50, 7):
            for y in _grid(-30, 50, 7):
                point = Point(x, y)
                assert _contains(tmap.locate(point), point)

    def test_locate_inside_point(self, l_shape_ring):
        tmap = TrapezoidalMap.from_ring(l_shape_ring)
        trapezoid = tmap.locate(Point(5, 15))
        assert trapezoid in tmap.inside_trapezoids(l_shape_ring)
        assert trapezoid.x_range_at(15) == (0, 10)
