"""Shared fixtures for navmesh tests."""

import pytest

from navmesh.core import Map, build_map
from navmesh.domain import Point

TRIANGLE_ISLAND = [(50, 0), (100, 25), (100, -25)]

# Two triangles sharing the edge x=100, forming a diamond from (50,0) to (150,0)
HEXAGON_TRIANGLES = [(50, 0), (100, 25), (100, -25), (100, -25), (100, 25), (150, 0)]

SMALL_TRIANGLES = [(50, 100), (100, 100), (75, 125)]


@pytest.fixture
def triangle_map() -> Map:
    """Map with a single triangular island."""
    return build_map([TRIANGLE_ISLAND])


@pytest.fixture
def hexagon_map() -> Map:
    """Map with one pre-triangulated two-triangle island."""
    return Map.from_triangles([HEXAGON_TRIANGLES])


@pytest.fixture
def archipelago_map() -> Map:
    """Pre-triangulated map with the hexagon island plus a smaller one."""
    return Map.from_triangles([HEXAGON_TRIANGLES, SMALL_TRIANGLES])


@pytest.fixture
def square_ring() -> list[Point]:
    """Counter-clockwise 10x10 square."""
    return [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


@pytest.fixture
def l_shape_ring() -> list[Point]:
    """Counter-clockwise L-shaped ring with one reflex corner at (10, 10)."""
    return [
        Point(0, 0),
        Point(20, 0),
        Point(20, 10),
        Point(10, 10),
        Point(10, 20),
        Point(0, 20),
    ]


@pytest.fixture
def u_shape_ring() -> list[Point]:
    """Counter-clockwise U-shaped ring: a 30x30 square with a 10x20 notch."""
    return [
        Point(0, 0),
        Point(30, 0),
        Point(30, 30),
        Point(20, 30),
        Point(20, 10),
        Point(10, 10),
        Point(10, 30),
        Point(0, 30),
    ]
