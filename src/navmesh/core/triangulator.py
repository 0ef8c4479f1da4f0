"""Island triangulation via trapezoidal decomposition.

This module turns one island ring into a list of counter-clockwise
triangles:
1. Build the trapezoidal map of the ring and keep the inside trapezoids
2. Read diagonals off trapezoids whose top and bottom vertices lie on
   opposite sides
3. Split the ring along those diagonals into monotone pieces
4. Clip ears off each piece, checking every candidate diagonal against
   the island edges and the diagonals added so far

Rings that are not simple are handled best effort. Diagonals that cannot
be applied are skipped and pieces that cannot be finished are reported as
warnings rather than errors.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from navmesh.config import NavmeshSettings, get_default_settings
from navmesh.core.geometry import (
    cross_2d,
    on_segment,
    point_in_polygon,
    point_in_triangle,
    segments_intersect,
    signed_area,
)
from navmesh.core.trapezoid import Trapezoid, TrapezoidalMap
from navmesh.domain import Edge, Island, Point, Triangle

logger = structlog.get_logger(__name__)


@dataclass
class TriangulationResult:
    """Outcome of triangulating one island.

    Attributes:
        triangles: Counter-clockwise triangles covering the island
        diagonals: Every internal diagonal used, monotone splits included
        diagonals_found: Diagonals read off the trapezoidal map
        diagonals_applied: Found diagonals that split a piece
        untriangulated_pieces: Pieces left with more than two vertices
        warnings: Human readable descriptions of best-effort fallbacks
    """

    triangles: list[Triangle] = field(default_factory=list)
    diagonals: list[Edge] = field(default_factory=list)
    diagonals_found: int = 0
    diagonals_applied: int = 0
    untriangulated_pieces: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def diagonals_skipped(self) -> int:
        return self.diagonals_found - self.diagonals_applied

    @property
    def is_complete(self) -> bool:
        return self.untriangulated_pieces == 0


class IslandTriangulator:
    """Triangulates island rings.

    The triangulator holds only configuration, so one instance can be
    reused for any number of islands.

    Example:
        >>> triangulator = IslandTriangulator()
        >>> island = Island.from_points([(0, 0), (10, 0), (10, 10), (0, 10)])
        >>> len(triangulator.triangulate(island).triangles)
        2
    """

    def __init__(self, settings: NavmeshSettings | None = None) -> None:
        self.settings = settings or get_default_settings()
        self.epsilon = self.settings.geometry.epsilon

    def triangulate(self, island: Island, island_index: int = 0) -> TriangulationResult:
        """Triangulate one island.

        Args:
            island: Island to triangulate, in either winding
            island_index: Position of the island in its map, for log context

        Returns:
            TriangulationResult with the triangles and build counters
        """
        ring = island.points
        result = TriangulationResult()

        if len(ring) < 3:
            return result

        if len(ring) == 3:
            self._emit_direct(ring, result)
            return result

        tmap = TrapezoidalMap.from_ring(
            ring,
            bound=self.settings.decomposition.coordinate_bound,
            epsilon=self.epsilon,
        )
        diagonals = self.find_diagonals(tmap.inside_trapezoids(ring), ring)
        result.diagonals_found = len(diagonals)

        pieces = self.split_monotone(ring, diagonals, result)

        island_edges = island.segments()
        for piece in pieces:
            self._triangulate_piece(piece, ring, island_edges, result)

        logger.debug(
            "Island triangulated",
            island=island_index,
            vertices=len(ring),
            trapezoids=len(tmap),
            pieces=len(pieces),
            triangles=len(result.triangles),
        )
        return result

    def find_diagonals(self, trapezoids: Sequence[Trapezoid], ring: Sequence[Point]) -> list[Edge]:
        """Read the monotone-splitting diagonals off the inside trapezoids.

        A trapezoid yields a diagonal when exactly two ring vertices lie on
        its boundary and no single side of the trapezoid holds both.

        Args:
            trapezoids: Trapezoids inside the ring
            ring: The island ring

        Returns:
            Distinct diagonals, in discovery order
        """
        diagonals: list[Edge] = []
        seen: set[frozenset[Point]] = set()

        for trapezoid in trapezoids:
            sides = trapezoid.boundary_edges()
            touching: dict[Point, set[int]] = {}
            for vertex in ring:
                on_sides = {
                    i
                    for i, side in enumerate(sides)
                    if on_segment(vertex, side.start, side.direction, self.epsilon)
                }
                if on_sides:
                    touching[vertex] = on_sides

            if len(touching) != 2:
                continue

            (a, a_sides), (b, b_sides) = touching.items()
            if a_sides & b_sides:
                continue

            diagonal = Edge(a, b)
            if diagonal.key() not in seen:
                seen.add(diagonal.key())
                diagonals.append(diagonal)

        return diagonals

    def split_monotone(
        self,
        ring: Sequence[Point],
        diagonals: Sequence[Edge],
        result: TriangulationResult | None = None,
    ) -> list[list[Point]]:
        """Split a ring into sub-rings along non-crossing diagonals.

        A diagonal is applied to the piece holding both its endpoints,
        provided they are not neighbours there and the diagonal runs
        through the piece's interior. Each split walks the piece forward
        from one endpoint to the other, and from the other back round.

        Args:
            ring: The island ring
            diagonals: Candidate diagonals
            result: Optional result to record applied diagonals on

        Returns:
            List of sub-rings, each in the ring's winding
        """
        pieces: list[list[Point]] = [list(ring)]

        for diagonal in diagonals:
            for index, piece in enumerate(pieces):
                if not self._can_split(piece, diagonal):
                    continue

                start = piece.index(diagonal.start)
                end = piece.index(diagonal.end)
                if start > end:
                    start, end = end, start

                pieces[index] = piece[start : end + 1]
                pieces.append(piece[end:] + piece[: start + 1])

                if result is not None:
                    result.diagonals_applied += 1
                    result.diagonals.append(diagonal)
                break
            else:
                logger.debug("Diagonal skipped", start=diagonal.start, end=diagonal.end)

        return pieces

    def _can_split(self, piece: list[Point], diagonal: Edge) -> bool:
        if diagonal.start not in piece or diagonal.end not in piece:
            return False

        n = len(piece)
        gap = abs(piece.index(diagonal.start) - piece.index(diagonal.end))
        if gap in (0, 1, n - 1):
            return False

        if not point_in_polygon(diagonal.midpoint(), piece):
            return False

        return not any(
            segments_intersect(diagonal.start, diagonal.end, piece[i], piece[(i + 1) % n], self.epsilon)
            for i in range(n)
        )

    def _emit_direct(self, ring: Sequence[Point], result: TriangulationResult) -> None:
        triangle = Triangle(ring[0], ring[1], ring[2])
        if self._is_degenerate(triangle):
            result.warnings.append(f"degenerate triangle {triangle.to_list()} dropped")
            return
        result.triangles.append(triangle.counter_clockwise())

    def _triangulate_piece(
        self,
        piece: list[Point],
        ring: Sequence[Point],
        island_edges: list[Edge],
        result: TriangulationResult,
    ) -> None:
        working = list(piece)

        while len(working) > 3:
            if self._clip_ear(working, ring, island_edges, result):
                continue
            if self._drop_collinear(working):
                continue

            result.untriangulated_pieces += 1
            result.warnings.append(
                f"piece with {len(working)} vertices left untriangulated "
                f"starting at ({working[0].x}, {working[0].y})"
            )
            return

        if len(working) == 3:
            triangle = Triangle(working[0], working[1], working[2])
            if not self._is_degenerate(triangle) and not self._is_duplicate(triangle, result):
                result.triangles.append(triangle.counter_clockwise())

    def _clip_ear(
        self,
        working: list[Point],
        ring: Sequence[Point],
        island_edges: list[Edge],
        result: TriangulationResult,
    ) -> bool:
        orientation = signed_area(working)
        n = len(working)

        for k in range(n):
            prev, vertex, nxt = working[k - 1], working[k], working[(k + 1) % n]
            triangle = Triangle(prev, vertex, nxt)

            if self._is_degenerate(triangle) or self._is_duplicate(triangle, result):
                continue
            if cross_2d(vertex - prev, nxt - vertex) * orientation <= 0.0:
                # Reflex vertex
                continue
            if any(
                point_in_triangle(other, prev, vertex, nxt, self.epsilon)
                for other in working
                if other not in (prev, vertex, nxt)
            ):
                continue

            candidate = Edge(prev, nxt)
            if self._crosses_any(candidate, result.diagonals):
                continue
            if self._crosses_any(candidate, island_edges):
                continue
            if not self._probes_inside(candidate, ring):
                continue

            result.triangles.append(triangle.counter_clockwise())
            result.diagonals.append(candidate)
            del working[k]
            return True

        return False

    def _drop_collinear(self, working: list[Point]) -> bool:
        n = len(working)
        for k in range(n):
            prev, vertex, nxt = working[k - 1], working[k], working[(k + 1) % n]
            span = (nxt - prev).length()
            if span == 0.0 or abs(cross_2d(vertex - prev, nxt - prev)) / span <= self.epsilon:
                del working[k]
                return True
        return False

    def _crosses_any(self, candidate: Edge, edges: Sequence[Edge]) -> bool:
        return any(
            segments_intersect(candidate.start, candidate.end, edge.start, edge.end, self.epsilon)
            for edge in edges
        )

    def _probes_inside(self, candidate: Edge, ring: Sequence[Point]) -> bool:
        """Check that the diagonal leaves both endpoints into the island."""
        length = candidate.length()
        step = min(self.settings.decomposition.probe_distance, length / 3.0)
        direction = candidate.direction.normalized()

        near_start = candidate.start + direction * step
        near_end = candidate.end - direction * step
        return point_in_polygon(near_start, ring) and point_in_polygon(near_end, ring)

    def _is_degenerate(self, triangle: Triangle) -> bool:
        longest = max(edge.length() for edge in triangle.edges())
        if longest == 0.0:
            return True
        height = 2.0 * abs(triangle.signed_area()) / longest
        return height <= self.epsilon

    def _is_duplicate(self, triangle: Triangle, result: TriangulationResult) -> bool:
        return any(triangle.same_vertices(other) for other in result.triangles)
