"""Island and triangle types.

This module defines the polygon types the map is built from:
- Island: A closed ring of points outlining one piece of land
- Triangle: One triangle of a triangulated island
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from navmesh.domain.point import Edge, Point, PointLike


@dataclass
class Island:
    """A closed ring of points outlining one island.

    The ring is implicitly closed: the last point connects back to the
    first. A repeated closing point and consecutive duplicate points are
    dropped on construction.

    Attributes:
        points: Vertices of the ring, in order
    """

    points: list[Point]

    def __post_init__(self) -> None:
        ring: list[Point] = []
        for point in self.points:
            if not ring or ring[-1] != point:
                ring.append(point)
        if len(ring) > 1 and ring[0] == ring[-1]:
            ring.pop()
        self.points = ring

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> "Island":
        """Build an island from point-like values.

        Args:
            points: Points, (x, y) pairs or {"x", "y"} mappings

        Returns:
            Island instance
        """
        return cls(points=[Point.from_value(p) for p in points])

    def __len__(self) -> int:
        return len(self.points)

    def segments(self) -> list[Edge]:
        """Boundary segments in ring order, each joining a vertex to the next."""
        n = len(self.points)
        if n < 2:
            return []
        return [Edge(self.points[i], self.points[(i + 1) % n]) for i in range(n)]

    def to_dict(self) -> dict[str, Any]:
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Island":
        return cls(points=[Point.from_dict(p) for p in data["points"]])


@dataclass(frozen=True, slots=True)
class Triangle:
    """One triangle of a triangulated island.

    Attributes:
        a: First vertex
        b: Second vertex
        c: Third vertex
    """

    a: Point
    b: Point
    c: Point

    def vertices(self) -> tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    def edges(self) -> tuple[Edge, Edge, Edge]:
        """The three sides, in winding order."""
        return (Edge(self.a, self.b), Edge(self.b, self.c), Edge(self.c, self.a))

    def signed_area(self) -> float:
        """Signed area; positive for counter-clockwise winding."""
        return (self.b - self.a).cross(self.c - self.a) / 2.0

    def is_counter_clockwise(self) -> bool:
        return self.signed_area() > 0.0

    def counter_clockwise(self) -> "Triangle":
        """Return this triangle wound counter-clockwise."""
        if self.signed_area() < 0.0:
            return Triangle(self.c, self.b, self.a)
        return self

    def same_vertices(self, other: "Triangle") -> bool:
        """Check whether two triangles use the same corners in any order."""
        return set(self.vertices()) == set(other.vertices())

    def to_list(self) -> list[list[float]]:
        return [[p.x, p.y] for p in self.vertices()]
