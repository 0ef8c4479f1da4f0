"""The navigation map: triangulated islands and their outline graph.

A Map is built once and never changes afterwards. Every query allocates
its own results, so one Map can be shared between any number of callers.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from navmesh.config import NavmeshSettings, get_default_settings
from navmesh.core.boundary import corner_neighbours, corners_and_edges, inflate_corners, outer_edges
from navmesh.core.geometry import (
    nearest_point_on_segment,
    perpendicular_direction,
    point_in_triangle,
    segment_intersection,
)
from navmesh.core.graph import Graph, GraphEdge
from navmesh.domain import Edge, Island, Point, PointLike, Triangle, Vector
from navmesh.exceptions import MalformedIslandError


class Map:
    """Triangulated islands plus the corner graph used for pathfinding.

    Most callers build a Map with ``build_map`` or ``Map.from_triangles``
    rather than calling the constructor directly.

    Attributes:
        settings: Settings the map was built and is queried with
    """

    def __init__(
        self,
        triangles: Sequence[Sequence[Triangle]],
        settings: NavmeshSettings | None = None,
        islands: Sequence[Island] = (),
    ) -> None:
        """Initialize a map from per-island triangle lists.

        Args:
            triangles: Counter-clockwise triangles of each island
            settings: Geometry and navigation settings
            islands: Source rings, when the map was triangulated from them
        """
        self.settings = settings or get_default_settings()
        self._epsilon = self.settings.geometry.epsilon
        self._triangles: tuple[tuple[Triangle, ...], ...] = tuple(tuple(t) for t in triangles)
        self._islands: tuple[Island, ...] = tuple(islands)

        boundary: list[Edge] = []
        for island_triangles in self._triangles:
            boundary.extend(outer_edges(island_triangles))
        self._boundary: tuple[Edge, ...] = tuple(boundary)

        corners, edge_indices = corners_and_edges(boundary)
        self._corners: tuple[Point, ...] = tuple(corners)
        self._corner_index: dict[Point, int] = {p: i for i, p in enumerate(corners)}
        self._corner_edges: tuple[GraphEdge, ...] = tuple(GraphEdge(a, b) for a, b in edge_indices)
        self._neighbours = corner_neighbours(len(corners), edge_indices)
        self._nodes: tuple[Point, ...] = tuple(
            inflate_corners(corners, edge_indices, self.settings.navigation.corner_clearance)
        )

    @classmethod
    def from_triangles(
        cls,
        islands: Iterable[Sequence[PointLike]],
        settings: NavmeshSettings | None = None,
    ) -> "Map":
        """Build a map from pre-triangulated islands.

        Each island is a flat point list where every three consecutive
        points form one triangle. Triangles are rewound counter-clockwise.

        Args:
            islands: Flat triangle point lists, one per island
            settings: Geometry and navigation settings

        Returns:
            Map over the given triangles

        Raises:
            MalformedIslandError: If an island is empty or its point count
                is not a multiple of three
        """
        triangles: list[list[Triangle]] = []
        for index, flat in enumerate(islands):
            if len(flat) == 0:
                raise MalformedIslandError(index, "empty triangle list")
            if len(flat) % 3 != 0:
                raise MalformedIslandError(
                    index, f"{len(flat)} points is not a multiple of three"
                )

            points = [Point.from_value(p) for p in flat]
            triangles.append(
                [
                    Triangle(points[i], points[i + 1], points[i + 2]).counter_clockwise()
                    for i in range(0, len(points), 3)
                ]
            )

        return cls(triangles, settings=settings)

    @property
    def island_count(self) -> int:
        return len(self._triangles)

    @property
    def islands(self) -> tuple[Island, ...]:
        """Source rings; empty for maps built from triangles."""
        return self._islands

    @property
    def boundary_edges(self) -> tuple[Edge, ...]:
        return self._boundary

    @property
    def corners(self) -> tuple[Point, ...]:
        """Unique boundary corners, before inflation."""
        return self._corners

    @property
    def corner_nodes(self) -> tuple[Point, ...]:
        """Corners pushed off the land, index-aligned with ``corners``."""
        return self._nodes

    def triangles(self, island_index: int | None = None) -> list[Triangle]:
        """Triangles of one island, or of every island when no index is given."""
        if island_index is None:
            return [t for island in self._triangles for t in island]
        return list(self._triangles[island_index])

    def into_vertices(self) -> list[Point]:
        """Flat vertex list of every triangle, three points per triangle."""
        return [p for island in self._triangles for t in island for p in t.vertices()]

    def on_land(self, point: PointLike) -> bool:
        """Check whether a point is inside or on the edge of any triangle.

        Args:
            point: Point to classify

        Returns:
            True for land, False for open water
        """
        p = Point.from_value(point)
        return any(
            point_in_triangle(p, t.a, t.b, t.c, self._epsilon)
            for island in self._triangles
            for t in island
        )

    def closest_point_on_edge(self, point: PointLike) -> Point:
        """Find the nearest point on the island outlines, just off the land.

        The point is projected onto every boundary edge and the nearest
        projection is moved ``edge_clearance`` off the outline. A projection
        inside an edge moves along the edge's normal. A projection onto a
        corner moves along the corner's bisector, since at a concave corner
        both edge normals run onto the neighbouring edge. Whichever way
        leaves the land first wins.

        Args:
            point: Query point

        Returns:
            The nudged projection; the point itself on a map without islands
        """
        p = Point.from_value(point)
        best: tuple[Point, Edge] | None = None
        best_distance = float("inf")

        for edge in self._boundary:
            nearest, distance = nearest_point_on_segment(p, edge.start, edge.end)
            if distance < best_distance:
                best_distance = distance
                best = (nearest, edge)

        if best is None:
            return p

        nearest, edge = best
        if edge.length() == 0.0:
            return nearest

        clearance = self.settings.navigation.edge_clearance
        directions: list[Vector] = []

        for endpoint in (edge.start, edge.end):
            if nearest.distance_to(endpoint) <= self._epsilon:
                nearest = endpoint
                directions.extend(self._corner_bisectors(endpoint))
                break

        normal = perpendicular_direction(edge.start, edge.end)
        directions.extend((normal, -normal))

        candidates = [nearest + direction * clearance for direction in directions]
        for candidate in candidates:
            if not self.on_land(candidate):
                return candidate
        return candidates[0]

    def _corner_bisectors(self, corner: Point) -> list[Vector]:
        index = self._corner_index.get(corner)
        if index is None:
            return []

        push = Point(0.0, 0.0)
        for other in self._neighbours[index]:
            push = push + (corner - self._corners[other]).normalized()
        push = push.normalized()
        if push.length() == 0.0:
            return []
        return [push, -push]

    def closest_point_of_line_on_edge(
        self,
        start: PointLike,
        direction: PointLike,
        strict: bool = True,
    ) -> Point | None:
        """Find the first boundary crossing along a line.

        Args:
            start: Start of the line
            direction: Direction of the line; with ``strict`` also its extent
            strict: Whether only the segment ``start -> start + direction``
                counts, instead of the whole infinite line

        Returns:
            Crossing nearest to ``start``, or None if there is none
        """
        origin = Point.from_value(start)
        heading = Point.from_value(direction)
        best: Point | None = None
        best_distance = float("inf")

        for edge in self._boundary:
            hit = segment_intersection(
                origin, heading, edge.start, edge.direction, strict=strict, epsilon=self._epsilon
            )
            if hit is None:
                continue
            distance = origin.distance_to(hit)
            if distance < best_distance:
                best_distance = distance
                best = hit

        return best

    def closest_corner_to_line(
        self,
        start: PointLike,
        direction: PointLike,
        visited: Iterable[PointLike] = (),
    ) -> tuple[Point, Point] | None:
        """Find the corner to steer for when a line is blocked.

        The line is cast without bounds; among the corners joining two
        boundary edges, the one nearest the first crossing wins.

        Args:
            start: Start of the line
            direction: Direction of the line
            visited: Corners already used, which are never returned

        Returns:
            Tuple of (approach_point, corner), where approach_point is the
            corner pushed off the land, or None when the line hits nothing
            or every corner was visited
        """
        hit = self.closest_point_of_line_on_edge(start, direction, strict=False)
        if hit is None:
            return None

        seen = {Point.from_value(p) for p in visited}
        best: int | None = None
        best_distance = float("inf")

        for index, corner in enumerate(self._corners):
            if len(self._neighbours[index]) != 2 or corner in seen:
                continue
            distance = hit.distance_to(corner)
            if distance < best_distance:
                best_distance = distance
                best = index

        if best is None:
            return None
        return self._nodes[best], self._corners[best]

    def has_line_of_sight(self, a: PointLike, b: PointLike) -> bool:
        """Check that the segment between two points crosses no boundary edge."""
        origin = Point.from_value(a)
        heading: Vector = Point.from_value(b) - origin
        return self.closest_point_of_line_on_edge(origin, heading, strict=True) is None

    def nodes_and_edges_connected(self, points: Iterable[PointLike] = ()) -> Graph:
        """Build a query graph from the corner graph plus extra points.

        Injected points are appended after the corners. Each is joined to
        every earlier node, corners and other injected points alike, that it
        can see without crossing a boundary edge.

        Args:
            points: Points to inject, such as a ship and its destination

        Returns:
            A fresh Graph owned by the caller
        """
        nodes = list(self._nodes)
        edges = list(self._corner_edges)

        for point in points:
            node = Point.from_value(point)
            index = len(nodes)
            nodes.append(node)
            for other in range(index):
                if nodes[other] != node and self.has_line_of_sight(nodes[other], node):
                    edges.append(GraphEdge(other, index))

        return Graph(nodes=nodes, edges=edges, corner_count=len(self._nodes))

    def plot_course(self, position: PointLike, destination: PointLike) -> list[Point]:
        """Route from a position to a destination around the islands.

        Args:
            position: Where the route starts
            destination: Where the route ends

        Returns:
            Waypoints from position to destination, both included, or an
            empty list when the destination cannot be reached
        """
        start = Point.from_value(position)
        end = Point.from_value(destination)
        if start == end:
            return [start]

        graph = self.nodes_and_edges_connected([start, end])
        return graph.a_star(graph.node_count - 2, graph.node_count - 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "triangles": [[t.to_list() for t in island] for island in self._triangles],
            "boundary_edges": [e.to_dict() for e in self._boundary],
            "corners": [p.to_dict() for p in self._corners],
        }

    def __repr__(self) -> str:
        return (
            f"Map(islands={self.island_count}, triangles={len(self.triangles())}, "
            f"corners={len(self._corners)})"
        )
