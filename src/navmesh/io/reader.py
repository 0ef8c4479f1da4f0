"""Island reader for loading island layouts from JSON.

This module provides the IslandReader class for loading island files and
converting them into domain models.

Accepted layouts:
- ``{"islands": [[[x, y], ...], ...]}``: rings, one per island
- ``[[[x, y], ...], ...]``: the same rings without the wrapper
- ``{"triangles": [[[x, y], ...], ...]}``: flat triangle lists, three
  points per triangle, one list per island
"""

import json
from pathlib import Path
from types import TracebackType
from typing import Any

from pydantic import TypeAdapter, ValidationError

from navmesh.domain import Island, Point
from navmesh.exceptions import IslandLoadError

_RINGS = TypeAdapter(list[list[tuple[float, float]]])


class IslandReader:
    """Loads island rings or pre-triangulated islands from a JSON file.

    Example:
        with IslandReader(Path("islands.json")) as reader:
            for island in reader.islands:
                print(len(island))
    """

    def __init__(self, path: Path) -> None:
        """Initialize the island reader.

        Args:
            path: Path to the JSON island file
        """
        self._path = path
        self._rings: list[list[Point]] | None = None
        self._triangulated = False

    def __enter__(self) -> "IslandReader":
        self.load()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def load(self) -> None:
        """Load and validate the island file.

        Raises:
            IslandLoadError: If the file is missing, is not JSON, or does not
                match any accepted layout
        """
        if not self._path.exists():
            raise IslandLoadError(str(self._path), "file not found")

        try:
            document: Any = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise IslandLoadError(str(self._path), str(e)) from e

        if isinstance(document, dict) and "triangles" in document:
            raw, self._triangulated = document["triangles"], True
        elif isinstance(document, dict) and "islands" in document:
            raw, self._triangulated = document["islands"], False
        elif isinstance(document, list):
            raw, self._triangulated = document, False
        else:
            raise IslandLoadError(
                str(self._path), "expected a list of rings or an object with 'islands' or 'triangles'"
            )

        try:
            rings = _RINGS.validate_python(raw)
        except ValidationError as e:
            raise IslandLoadError(
                str(self._path), f"invalid point data: {e.error_count()} error(s)"
            ) from e

        self._rings = [[Point(x, y) for x, y in ring] for ring in rings]

    def close(self) -> None:
        """Release the loaded data."""
        self._rings = None

    @property
    def is_triangulated(self) -> bool:
        """Whether the file holds flat triangle lists rather than rings.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        self._require_loaded()
        return self._triangulated

    @property
    def point_lists(self) -> list[list[Point]]:
        """Raw point list of each island, rings or triangles alike.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        return list(self._require_loaded())

    @property
    def islands(self) -> list[Island]:
        """Island rings.

        Raises:
            RuntimeError: If the file has not been loaded yet, or holds
                triangles instead of rings
        """
        rings = self._require_loaded()
        if self._triangulated:
            raise RuntimeError("File holds triangles, not island rings.")
        return [Island(points=list(ring)) for ring in rings]

    def _require_loaded(self) -> list[list[Point]]:
        if self._rings is None:
            raise RuntimeError("Islands not loaded. Call load() first.")
        return self._rings
