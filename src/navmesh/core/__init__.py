"""Core navigation algorithms.

This package implements the map building and query pipeline:
- geometry: Vector and segment primitives
- trapezoid: Trapezoidal decomposition and point location
- triangulator: Monotone splitting and ear clipping of island rings
- boundary: Outline edges and inflated corners
- graph: Navigation graph and A* search
- navmap: The Map and its point and line queries
- builder: Validation and build orchestration
"""

from navmesh.core.builder import MapBuilder, build_map
from navmesh.core.graph import Graph, GraphEdge
from navmesh.core.navmap import Map
from navmesh.core.trapezoid import Trapezoid, TrapezoidalMap
from navmesh.core.triangulator import IslandTriangulator, TriangulationResult

__all__ = [
    "Graph",
    "GraphEdge",
    "IslandTriangulator",
    "Map",
    "MapBuilder",
    "Trapezoid",
    "TrapezoidalMap",
    "TriangulationResult",
    "build_map",
]
