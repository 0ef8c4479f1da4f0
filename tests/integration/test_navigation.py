"""Integration tests for building maps and plotting courses.

These tests run the whole pipeline: island rings are triangulated, the
outline graph is derived, and routes are searched around the islands.
"""

import pytest

from navmesh import build_map
from navmesh.core import Map
from navmesh.domain import Point

TRIANGLE = [(50, 0), (100, 25), (100, -25)]
U_SHAPE = [(0, 0), (30, 0), (30, 30), (20, 30), (20, 10), (10, 10), (10, 30), (0, 30)]
SMALL = [(50, 100), (100, 100), (75, 125)]


def _assert_clear_route(sea: Map, route: list[Point]) -> None:
    for a, b in zip(route, route[1:]):
        assert sea.has_line_of_sight(a, b), f"leg {a} -> {b} crosses land"


class TestPlotCourse:
    """Tests for routes around a single island."""

    @pytest.fixture
    def sea(self) -> Map:
        return build_map([TRIANGLE])

    def test_open_water_is_direct(self, sea):
        route = sea.plot_course((0, 100), (120, 100))
        assert route == [Point(0, 100), Point(120, 100)]

    def test_route_around_island(self, sea):
        """A blocked straight line is replaced by a detour over one corner."""
        route = sea.plot_course((0, 0), (120, 0))
        assert len(route) == 3
        assert route[0] == Point(0, 0)
        assert route[-1] == Point(120, 0)
        assert route[1] in sea.corner_nodes
        _assert_clear_route(sea, route)

    def test_detour_is_longer_than_straight_line(self, sea):
        route = sea.plot_course((0, 0), (120, 0))
        length = sum(a.distance_to(b) for a, b in zip(route, route[1:]))
        assert length > 120.0

    def test_same_point(self, sea):
        assert sea.plot_course((10, 10), (10, 10)) == [Point(10, 10)]

    def test_destination_on_land(self, sea):
        """Nothing can see a point in the middle of the island."""
        assert sea.plot_course((0, 0), (75, 0)) == []


class TestComplexIslands:
    """Tests for concave islands and several islands at once."""

    def test_out_of_notch(self):
        sea = build_map([U_SHAPE])
        route = sea.plot_course((15, 25), (15, -10))
        assert route
        assert route[0] == Point(15, 25)
        assert route[-1] == Point(15, -10)
        assert len(route) >= 4
        _assert_clear_route(sea, route)

    def test_between_islands(self):
        sea = build_map([TRIANGLE, SMALL])
        assert sea.island_count == 2

        route = sea.plot_course((75, -50), (75, 150))
        assert route
        _assert_clear_route(sea, route)

    def test_rebuilt_from_triangles_routes_the_same(self):
        """A map rebuilt from its own vertices gives the same route."""
        sea = build_map([U_SHAPE])
        flat = sea.into_vertices()
        rebuilt = Map.from_triangles([flat])

        assert rebuilt.plot_course((15, 25), (15, -10)) == sea.plot_course((15, 25), (15, -10))

    def test_closest_point_then_route(self):
        """Snapping a point off the land gives a valid route endpoint."""
        sea = build_map([TRIANGLE])
        snapped = sea.closest_point_on_edge((75, 0))
        assert not sea.on_land(snapped)

        route = sea.plot_course((0, 0), snapped)
        assert route
        assert route[-1] == snapped
