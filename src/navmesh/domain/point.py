"""Core geometric types for island and path representation.

This module defines the fundamental geometric types used throughout navmesh:
- Point: A 2D point, also used as a 2D vector
- Edge: A segment between two points, compared without regard to direction
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts. Points double as
    vectors: subtracting two points gives the vector between them.

    Attributes:
        x: X coordinate in world units
        y: Y coordinate in world units
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Point":
        return Point(self.x / divisor, self.y / divisor)

    def __neg__(self) -> "Point":
        return Point(-self.x, -self.y)

    def dot(self, other: "Point") -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Point") -> float:
        """Z component of the 3D cross product with another vector.

        Positive when ``other`` is counter-clockwise from this vector.
        """
        return self.x * other.y - self.y * other.x

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Point":
        """Unit vector in the same direction.

        Returns:
            Unit vector, or the zero vector for a zero-length vector
        """
        length = self.length()
        if length == 0.0:
            return Point(0.0, 0.0)
        return Point(self.x / length, self.y / length)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))

    @classmethod
    def from_value(cls, value: "PointLike") -> "Point":
        """Coerce a point, an (x, y) pair or an {"x", "y"} mapping.

        Args:
            value: Point-like value

        Returns:
            Point instance

        Raises:
            ValueError: If the value cannot be read as a 2D point
        """
        if isinstance(value, Point):
            return value
        if isinstance(value, dict):
            return cls.from_dict(value)
        if isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 2:
            return cls(float(value[0]), float(value[1]))
        raise ValueError(f"Cannot interpret {value!r} as a 2D point")


Vector = Point

PointLike = Union[Point, Sequence[float], dict[str, Any]]


@dataclass(frozen=True, slots=True)
class Edge:
    """A straight segment between two points.

    Two edges describe the same physical edge regardless of endpoint
    order; use ``same_as`` or ``key`` for that comparison. Plain equality
    still respects direction.

    Attributes:
        start: First endpoint
        end: Second endpoint
    """

    start: Point
    end: Point

    @property
    def direction(self) -> Vector:
        """Vector from start to end."""
        return self.end - self.start

    def length(self) -> float:
        return self.start.distance_to(self.end)

    def reversed(self) -> "Edge":
        return Edge(self.end, self.start)

    def order_by_y(self) -> "Edge":
        """Return the edge with its upper endpoint first."""
        if self.start.y > self.end.y:
            return self
        return self.reversed()

    def midpoint(self) -> Point:
        return Point((self.start.x + self.end.x) / 2.0, (self.start.y + self.end.y) / 2.0)

    def key(self) -> frozenset[Point]:
        """Order-independent identity of the edge."""
        return frozenset((self.start, self.end))

    def same_as(self, other: "Edge") -> bool:
        """Check whether two edges join the same pair of points."""
        return self.key() == other.key()

    def shares_endpoint(self, other: "Edge") -> bool:
        return bool(self.key() & other.key())

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Edge":
        return cls(start=Point.from_dict(data["start"]), end=Point.from_dict(data["end"]))
