"""Island and map I/O for navmesh.

This module handles reading island layouts and writing triangulated maps
as JSON. It provides a thin layer between files and the domain models.

Key classes:
- IslandReader: Load island rings or pre-triangulated islands
- MapWriter: Save a built map's triangles and outline
"""

from navmesh.io.reader import IslandReader
from navmesh.io.writer import MapWriter

__all__ = [
    "IslandReader",
    "MapWriter",
]
