"""Map building orchestration.

This module coordinates turning raw island rings into a Map:

Key components:
- MapBuilder: Validates and triangulates islands, recording BuildStats
- build_map: One-call convenience wrapper around MapBuilder
"""

import time
from collections.abc import Iterable, Sequence

import structlog

from navmesh.config import NavmeshSettings, get_default_settings
from navmesh.core.geometry import is_simple_ring
from navmesh.core.navmap import Map
from navmesh.core.triangulator import IslandTriangulator
from navmesh.domain import Island, PointLike, Triangle
from navmesh.exceptions import MalformedIslandError, SelfIntersectingIslandError
from navmesh.utils import BuildLogger, BuildStats


class MapBuilder:
    """Builds navigation maps from island rings.

    Islands are validated and then triangulated one after another. A bad
    ring (empty, fewer than three distinct points, or outside the
    coordinate bound) stops the build; a ring that only triangulates
    partially is logged as a warning and kept.

    Example:
        builder = MapBuilder()
        sea = builder.build([[(50, 0), (100, 25), (100, -25)]])
        print(builder.stats.triangle_count)
    """

    def __init__(
        self,
        settings: NavmeshSettings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            settings: Settings used for the build and stored on the map
            logger: Logger for build events (module logger if None)
        """
        self.settings = settings or get_default_settings()
        self.logger = logger or structlog.get_logger(__name__)
        self.build_logger = BuildLogger(self.logger)
        self.triangulator = IslandTriangulator(self.settings)

    @property
    def stats(self) -> BuildStats:
        return self.build_logger.stats

    def validate(self, island: Island, island_index: int) -> None:
        """Reject rings that cannot be triangulated at all.

        Args:
            island: Island to check
            island_index: Position of the island in the input

        Raises:
            MalformedIslandError: If the ring is empty, has fewer than three
                distinct points, or leaves the coordinate domain
            SelfIntersectingIslandError: If simple-ring validation is on and
                the ring touches or crosses itself
        """
        if len(island) == 0:
            raise MalformedIslandError(island_index, "empty ring")

        if len(set(island.points)) < 3:
            raise MalformedIslandError(island_index, "fewer than three distinct points")

        bound = self.settings.decomposition.coordinate_bound
        for point in island.points:
            if abs(point.x) > bound or abs(point.y) > bound:
                raise MalformedIslandError(
                    island_index,
                    f"point ({point.x}, {point.y}) is outside the coordinate bound {bound}",
                )

        if self.settings.decomposition.validate_simple and not is_simple_ring(
            island.points, self.settings.geometry.epsilon
        ):
            raise SelfIntersectingIslandError(island_index)

    def build(self, islands: Iterable[Island | Sequence[PointLike]]) -> Map:
        """Validate, triangulate and assemble a map.

        Args:
            islands: Islands, or rings of point-like values

        Returns:
            The finished Map

        Raises:
            MalformedIslandError: If a ring is malformed
            SelfIntersectingIslandError: If simple-ring validation rejects a ring
        """
        self.build_logger = BuildLogger(self.logger)
        self.stats.start_time = time.time()

        rings = [
            item if isinstance(item, Island) else Island.from_points(item) for item in islands
        ]
        self.logger.info("Starting map build", islands=len(rings))

        for index, island in enumerate(rings):
            try:
                self.validate(island, index)
            except (MalformedIslandError, SelfIntersectingIslandError) as e:
                self.build_logger.log_island_error(index, e)
                raise

        triangles: list[list[Triangle]] = []
        for index, island in enumerate(rings):
            triangles.append(self._triangulate(island, index))

        sea = Map(triangles, settings=self.settings, islands=rings)
        self.stats.end_time = time.time()

        self.logger.info(
            "Map built",
            islands=self.stats.island_count,
            triangles=self.stats.triangle_count,
            boundary_edges=len(sea.boundary_edges),
            corners=len(sea.corners),
            warnings=len(self.stats.warnings),
            duration_s=round(self.stats.duration_seconds, 3),
        )
        return sea

    def _triangulate(self, island: Island, index: int) -> list[Triangle]:
        started = time.time()
        self.build_logger.log_island_start(index, len(island))

        result = self.triangulator.triangulate(island, index)

        for warning in result.warnings:
            self.build_logger.log_island_warning(index, warning)
        self.build_logger.log_diagonals_skipped(index, result.diagonals_skipped)
        self.build_logger.log_island_complete(
            index,
            triangle_count=len(result.triangles),
            diagonals_found=result.diagonals_found,
            diagonals_applied=result.diagonals_applied,
            untriangulated_pieces=result.untriangulated_pieces,
            duration_ms=(time.time() - started) * 1000,
        )
        return result.triangles


def build_map(
    islands: Iterable[Island | Sequence[PointLike]],
    settings: NavmeshSettings | None = None,
) -> Map:
    """Build a navigation map from island rings.

    Args:
        islands: Islands, or rings of point-like values
        settings: Optional settings (defaults if None)

    Returns:
        The finished Map

    Raises:
        MalformedIslandError: If a ring is malformed
        SelfIntersectingIslandError: If simple-ring validation rejects a ring
    """
    return MapBuilder(settings).build(islands)
