"""Boundary graph extraction from triangulated islands.

Functions for recovering island outlines from triangle lists:
- outer_edges: Triangle sides used by exactly one triangle
- corners_and_edges: Deduplicated corner points plus index pairs
- inflate_corners: Corners pushed off the land so paths clear it
"""

from collections.abc import Sequence

from navmesh.domain import Edge, Point, Triangle


def outer_edges(triangles: Sequence[Triangle]) -> list[Edge]:
    """Find the boundary edges of one triangulated island.

    Sides shared by two triangles are internal; a side that belongs to a
    single triangle lies on the island's outline. Edges are compared
    without regard to direction.

    Args:
        triangles: Triangles of a single island

    Returns:
        Boundary edges in the order they first appear, wound as in their
        triangle
    """
    counts: dict[frozenset[Point], int] = {}
    first_seen: dict[frozenset[Point], Edge] = {}

    for triangle in triangles:
        for edge in triangle.edges():
            key = edge.key()
            counts[key] = counts.get(key, 0) + 1
            first_seen.setdefault(key, edge)

    return [first_seen[key] for key, count in counts.items() if count == 1]


def corners_and_edges(edges: Sequence[Edge]) -> tuple[list[Point], list[tuple[int, int]]]:
    """Index the endpoints of boundary edges.

    Args:
        edges: Boundary edges

    Returns:
        Tuple of (corners, edge_indices). Corners are unique, in order of
        first appearance; each edge becomes a pair of corner indices.
    """
    index_of: dict[Point, int] = {}
    corners: list[Point] = []
    edge_indices: list[tuple[int, int]] = []

    for edge in edges:
        pair = []
        for point in (edge.start, edge.end):
            if point not in index_of:
                index_of[point] = len(corners)
                corners.append(point)
            pair.append(index_of[point])
        edge_indices.append((pair[0], pair[1]))

    return corners, edge_indices


def corner_neighbours(corner_count: int, edge_indices: Sequence[tuple[int, int]]) -> list[list[int]]:
    """Adjacent corner indices of every corner."""
    neighbours: list[list[int]] = [[] for _ in range(corner_count)]
    for a, b in edge_indices:
        neighbours[a].append(b)
        neighbours[b].append(a)
    return neighbours


def inflate_corners(
    corners: Sequence[Point],
    edge_indices: Sequence[tuple[int, int]],
    clearance: float = 1.0,
) -> list[Point]:
    """Push every corner away from the land it bounds.

    Each corner moves by the sum of the unit vectors pointing from its
    neighbours to it, scaled by ``clearance``. At a convex corner this
    points out of the island.

    Args:
        corners: Corner points
        edge_indices: Boundary edges as corner index pairs
        clearance: Scale of the push

    Returns:
        Inflated corners, index-aligned with ``corners``
    """
    neighbours = corner_neighbours(len(corners), edge_indices)
    inflated: list[Point] = []

    for index, corner in enumerate(corners):
        push = Point(0.0, 0.0)
        for other in neighbours[index]:
            push = push + (corner - corners[other]).normalized()
        inflated.append(corner + push * clearance)

    return inflated
