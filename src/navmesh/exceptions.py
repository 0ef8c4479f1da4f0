"""Exception hierarchy for Navmesh."""


class NavmeshError(Exception):
    """Base exception for all Navmesh errors."""

    pass


class IslandError(NavmeshError):
    """Errors related to island input data."""

    pass


class MalformedIslandError(IslandError):
    """Island ring or triangle list cannot be used to build a map."""

    def __init__(self, island_index: int, reason: str) -> None:
        self.island_index = island_index
        self.reason = reason
        super().__init__(f"Island {island_index} is malformed: {reason}")


class SelfIntersectingIslandError(IslandError):
    """Island ring crosses itself."""

    def __init__(self, island_index: int) -> None:
        self.island_index = island_index
        super().__init__(f"Island {island_index} is not a simple polygon")


class GraphError(NavmeshError):
    """Errors related to navigation graphs."""

    pass


class NodeIndexError(GraphError, IndexError):
    """Node index is outside the graph."""

    def __init__(self, index: int, node_count: int) -> None:
        self.index = index
        self.node_count = node_count
        super().__init__(f"Node index {index} out of range for graph with {node_count} nodes")


class IslandLoadError(NavmeshError):
    """Error loading an island file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load islands '{path}': {reason}")


class MapSaveError(NavmeshError):
    """Error saving a triangulated map."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save map '{path}': {reason}")
