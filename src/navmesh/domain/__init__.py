"""Domain models for navmesh.

This module contains the value types the navigation core works with.
All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Hashable, so points and edges can key sets and dicts
- Independent of any particular game or renderer

Key classes:
- Point: A 2D point, also used as a vector
- Edge: A segment compared without regard to direction
- Island: A closed ring outlining one piece of land
- Triangle: One triangle of a triangulated island
"""

from navmesh.domain.island import Island, Triangle
from navmesh.domain.point import Edge, Point, PointLike, Vector

__all__: list[str] = [
    "Edge",
    "Island",
    "Point",
    "PointLike",
    "Triangle",
    "Vector",
]
