"""Navmesh - Navigation meshes and pathfinding around polygonal islands.

Navmesh turns island outlines into a triangulated obstacle map, extracts the
outline graph of the islands and answers shortest-path and point/boundary
queries against it, so that ships can sail around land.

Example:
    >>> from navmesh import build_map
    >>> sea = build_map([[(50, 0), (100, 25), (100, -25)]])
    >>> sea.on_land((65, 5))
    True
    >>> waypoints = sea.plot_course((0, 0), (120, 0))
"""

from navmesh.core import Graph, GraphEdge, Map, MapBuilder, build_map
from navmesh.domain import Point

__version__ = "0.1.0"

__all__ = [
    "Graph",
    "GraphEdge",
    "Map",
    "MapBuilder",
    "Point",
    "__version__",
    "build_map",
]
