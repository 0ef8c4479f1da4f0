"""Map writer for saving triangulated maps.

This module provides the MapWriter class for writing a built map's
triangles, boundary edges and corners to JSON.
"""

import json
from pathlib import Path

from navmesh.core.navmap import Map
from navmesh.exceptions import MapSaveError


class MapWriter:
    """Writes triangulated maps to JSON.

    The output holds ``triangles`` (per island, each triangle a list of
    three ``[x, y]`` points), ``boundary_edges`` and ``corners``. Its
    ``triangles`` key can be read back by IslandReader.

    Example:
        writer = MapWriter(sea, Path("islands-triangulated.json"))
        writer.save()
    """

    def __init__(self, sea: Map, output_path: Path) -> None:
        """Initialize the map writer.

        Args:
            sea: The map to write
            output_path: Path where the JSON will be saved
        """
        self._map = sea
        self._output_path = output_path

    def to_document(self) -> dict[str, object]:
        """Build the JSON document without writing it."""
        document = self._map.to_dict()
        document["triangles"] = [
            [point for triangle in island for point in triangle]
            for island in document["triangles"]
        ]
        return document

    def save(self) -> None:
        """Save the map to the output path.

        Raises:
            MapSaveError: If the file cannot be written
        """
        try:
            self._output_path.write_text(
                json.dumps(self.to_document(), indent=2), encoding="utf-8"
            )
        except OSError as e:
            raise MapSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_triangulated_path(input_path: Path) -> Path:
        """Generate output path with the triangulated naming convention.

        Converts: islands.json -> islands-triangulated.json

        Args:
            input_path: Original island file path

        Returns:
            Path with -triangulated suffix before the extension
        """
        return input_path.parent / f"{input_path.stem}-triangulated.json"
