"""Unit tests for geometric primitives.

Tests cover:
- Cross product, signed area and point-in-polygon
- Point-on-segment and point-in-triangle tests
- Line/edge intersection in strict and unbounded form
- Segment crossing and simple-ring detection
- Nearest point and perpendicular helpers
"""

import math

import pytest

from navmesh.core.geometry import (
    cross_2d,
    is_simple_ring,
    nearest_point_on_segment,
    on_segment,
    perpendicular_direction,
    point_in_polygon,
    point_in_triangle,
    segment_intersection,
    segments_intersect,
    signed_area,
)
from navmesh.domain import Point


class TestCrossAndArea:
    """Tests for cross product and signed area."""

    def test_cross_sign_gives_turn_direction(self):
        """Counter-clockwise turns are positive."""
        assert cross_2d(Point(1, 0), Point(0, 1)) == 1
        assert cross_2d(Point(0, 1), Point(1, 0)) == -1
        assert cross_2d(Point(2, 2), Point(1, 1)) == 0

    def test_signed_area_ccw_square(self, square_ring):
        assert signed_area(square_ring) == 100.0

    def test_signed_area_cw_square(self, square_ring):
        assert signed_area(list(reversed(square_ring))) == -100.0

    def test_signed_area_degenerate(self):
        assert signed_area([Point(0, 0), Point(1, 1)]) == 0.0


class TestPointInPolygon:
    """Tests for ray casting containment."""

    def test_inside_and_outside(self, square_ring):
        assert point_in_polygon(Point(5, 5), square_ring)
        assert not point_in_polygon(Point(15, 5), square_ring)
        assert not point_in_polygon(Point(-1, 5), square_ring)

    def test_notch_is_outside(self, u_shape_ring):
        """Points in the U's notch are outside the ring."""
        assert not point_in_polygon(Point(15, 20), u_shape_ring)
        assert point_in_polygon(Point(5, 20), u_shape_ring)
        assert point_in_polygon(Point(15, 5), u_shape_ring)

    def test_ray_through_vertex_counts_once(self):
        """A ray passing exactly through a vertex is not double counted."""
        diamond = [Point(0, -10), Point(10, 0), Point(0, 10), Point(-10, 0)]
        assert point_in_polygon(Point(0, 0), diamond)
        assert not point_in_polygon(Point(-20, 0), diamond)


class TestOnSegment:
    """Tests for point-on-segment."""

    def test_point_on_segment(self):
        assert on_segment(Point(5, 0), Point(0, 0), Point(10, 0))
        assert on_segment(Point(10, 0), Point(0, 0), Point(10, 0))
        assert on_segment(Point(0, 0), Point(0, 0), Point(10, 0))

    def test_point_off_segment(self):
        assert not on_segment(Point(5, 0.001), Point(0, 0), Point(10, 0))
        assert not on_segment(Point(11, 0), Point(0, 0), Point(10, 0))
        assert not on_segment(Point(-1, 0), Point(0, 0), Point(10, 0))

    def test_tolerance(self):
        """Points within epsilon of the segment count as on it."""
        assert on_segment(Point(5, 1e-7), Point(0, 0), Point(10, 0))
        assert on_segment(Point(5, 0.01), Point(0, 0), Point(10, 0), epsilon=0.02)

    def test_zero_length_segment(self):
        assert on_segment(Point(1, 1), Point(1, 1), Point(0, 0))
        assert not on_segment(Point(1, 2), Point(1, 1), Point(0, 0))


class TestPointInTriangle:
    """Tests for point-in-triangle."""

    def test_either_winding(self):
        a, b, c = Point(0, 0), Point(10, 0), Point(0, 10)
        assert point_in_triangle(Point(2, 2), a, b, c)
        assert point_in_triangle(Point(2, 2), a, c, b)

    def test_outside(self):
        assert not point_in_triangle(Point(8, 8), Point(0, 0), Point(10, 0), Point(0, 10))

    def test_boundary_counts(self):
        """Points on an edge or a corner are inside."""
        a, b, c = Point(0, 0), Point(10, 0), Point(0, 10)
        assert point_in_triangle(Point(5, 5), a, b, c)
        assert point_in_triangle(Point(5, 0), a, b, c)
        assert point_in_triangle(Point(0, 0), a, b, c)


class TestSegmentIntersection:
    """Tests for line/edge intersection."""

    def test_crossing(self):
        hit = segment_intersection(Point(0, 0), Point(10, 0), Point(5, -5), Point(0, 10))
        assert hit == Point(5, 0)

    def test_strict_bounds_the_line(self):
        """A short strict segment does not reach the edge; an unbounded line does."""
        args = (Point(0, 0), Point(4, 0), Point(5, -5), Point(0, 10))
        assert segment_intersection(*args, strict=True) is None
        assert segment_intersection(*args, strict=False) == Point(5, 0)

    def test_unbounded_line_extends_backwards(self):
        hit = segment_intersection(Point(0, 0), Point(1, 0), Point(-5, -5), Point(0, 10), strict=False)
        assert hit == Point(-5, 0)

    def test_edge_is_always_bounded(self):
        """The edge parameter must stay in range even for unbounded lines."""
        assert segment_intersection(
            Point(0, 0), Point(10, 0), Point(5, 1), Point(0, 10), strict=False
        ) is None

    def test_parallel_lines_do_not_meet(self):
        assert segment_intersection(Point(0, 0), Point(10, 0), Point(0, 1), Point(10, 0)) is None

    def test_collinear_overlap_returns_nearest_point(self):
        hit = segment_intersection(Point(0, 0), Point(10, 0), Point(3, 0), Point(4, 0))
        assert hit is not None
        assert hit.x == pytest.approx(3.0)
        assert hit.y == 0.0

    def test_collinear_without_overlap(self):
        assert segment_intersection(Point(0, 0), Point(10, 0), Point(12, 0), Point(4, 0)) is None

    def test_touching_endpoint_within_tolerance(self):
        """Intersections just past an end are forgiven."""
        hit = segment_intersection(Point(0, 0), Point(5, 0), Point(5 + 1e-9, -5), Point(0, 10))
        assert hit is not None
        assert math.isclose(hit.x, 5.0, abs_tol=1e-6)

    def test_example_line_hits_island_edge(self):
        """Unbounded line through the origin meets the slanted island edge."""
        hit = segment_intersection(
            Point(0, 0), Point(40, 1), Point(100, 25), Point(-50, -25), strict=False
        )
        assert hit is not None
        assert math.isclose(hit.x, 52.63158, abs_tol=1e-4)
        assert math.isclose(hit.y, 1.3157895, abs_tol=1e-4)


class TestSegmentsIntersect:
    """Tests for segment crossing detection."""

    def test_proper_crossing(self):
        assert segments_intersect(Point(0, 0), Point(10, 10), Point(0, 10), Point(10, 0))

    def test_shared_endpoint_only(self):
        """Segments meeting at a common endpoint do not intersect."""
        assert not segments_intersect(Point(0, 0), Point(10, 0), Point(10, 0), Point(10, 10))

    def test_touching_interior_counts(self):
        """An endpoint resting on the other segment's interior counts."""
        assert segments_intersect(Point(0, 0), Point(10, 0), Point(5, 0), Point(5, 10))

    def test_collinear_overlap(self):
        assert segments_intersect(Point(0, 0), Point(10, 0), Point(5, 0), Point(15, 0))
        assert segments_intersect(Point(0, 0), Point(10, 0), Point(0, 0), Point(5, 0))

    def test_collinear_end_to_end(self):
        assert not segments_intersect(Point(0, 0), Point(10, 0), Point(10, 0), Point(20, 0))

    def test_disjoint(self):
        assert not segments_intersect(Point(0, 0), Point(10, 0), Point(0, 5), Point(10, 5))
        assert not segments_intersect(Point(0, 0), Point(1, 1), Point(5, 0), Point(6, -5))


class TestSimpleRing:
    """Tests for simple-ring detection."""

    def test_simple_rings(self, square_ring, l_shape_ring, u_shape_ring):
        assert is_simple_ring(square_ring)
        assert is_simple_ring(l_shape_ring)
        assert is_simple_ring(u_shape_ring)

    def test_bowtie(self):
        bowtie = [Point(0, 0), Point(10, 10), Point(10, 0), Point(0, 10)]
        assert not is_simple_ring(bowtie)

    def test_repeated_vertex(self):
        pinched = [Point(0, 0), Point(5, 5), Point(10, 0), Point(10, 10), Point(5, 5), Point(0, 10)]
        assert not is_simple_ring(pinched)

    def test_too_few_points(self):
        assert not is_simple_ring([Point(0, 0), Point(1, 1)])


class TestNearestAndPerpendicular:
    """Tests for nearest point and perpendicular helpers."""

    def test_nearest_point_projects(self):
        nearest, dist = nearest_point_on_segment(Point(1, 1), Point(0, 0), Point(2, 0))
        assert nearest == Point(1, 0)
        assert dist == 1.0

    def test_nearest_point_clamps(self):
        nearest, dist = nearest_point_on_segment(Point(0, 0), Point(50, 0), Point(100, 25))
        assert nearest == Point(50, 0)
        assert dist == 50.0

    def test_nearest_point_zero_length(self):
        nearest, dist = nearest_point_on_segment(Point(3, 4), Point(0, 0), Point(0, 0))
        assert nearest == Point(0, 0)
        assert dist == 5.0

    def test_perpendicular_is_ccw_unit(self):
        perp = perpendicular_direction(Point(0, 0), Point(5, 0))
        assert math.isclose(perp.x, 0.0, abs_tol=1e-12)
        assert perp.y == 1.0

    def test_perpendicular_zero_length(self):
        with pytest.raises(ValueError):
            perpendicular_direction(Point(1, 1), Point(1, 1))
