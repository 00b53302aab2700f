"""Polygon reader for loading JSON polygon files.

This module provides the PolygonReader class for loading polygon files
and converting them into domain models.

File layout:
    {"polygons": [{"name": "square", "vertices": [[0, 0], [1, 0], ...]}]}

Coordinates may be JSON numbers or strings such as "0.1" or "1/3"; strings
are read exactly. A single polygon object (with "vertices" at the top level)
is accepted as well.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from approxoffset.domain import Point, Polygon, to_fraction
from approxoffset.exceptions import PolygonFormatError, PolygonLoadError


def _parse_vertex(raw: Any) -> Point:
    if isinstance(raw, dict):
        return Point(to_fraction(raw["x"]), to_fraction(raw["y"]))
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return Point(to_fraction(raw[0]), to_fraction(raw[1]))
    raise ValueError(f"vertex must be [x, y] or {{'x': .., 'y': ..}}, got {raw!r}")


def parse_polygon(raw: dict[str, Any], default_name: str) -> Polygon:
    """Convert one decoded JSON polygon object to a Polygon.

    Args:
        raw: Decoded polygon object with a "vertices" list
        default_name: Name used when the object has none

    Returns:
        Polygon domain model

    Raises:
        ValueError: If the object or one of its vertices is malformed
    """
    if not isinstance(raw, dict) or "vertices" not in raw:
        raise ValueError("polygon must be an object with a 'vertices' list")

    vertices = [_parse_vertex(v) for v in raw["vertices"]]
    return Polygon(vertices=vertices, name=str(raw.get("name") or default_name))


class PolygonReader:
    """Loads polygon files and yields domain polygons.

    Example:
        with PolygonReader(Path("shapes.json")) as reader:
            for polygon in reader.iter_polygons():
                print(polygon.name)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the polygon reader.

        Args:
            path: Path to the JSON polygon file
        """
        self._path = path
        self._polygons: list[Polygon] | None = None

    def load(self) -> None:
        """Load and parse the polygon file.

        Raises:
            FileNotFoundError: If the file does not exist
            PolygonLoadError: If the file is not valid JSON
            PolygonFormatError: If the JSON does not describe polygons
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Polygon file not found: {self._path}")

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PolygonLoadError(str(self._path), str(e)) from e

        if isinstance(data, dict) and "polygons" in data:
            raw_polygons = data["polygons"]
        elif isinstance(data, dict) and "vertices" in data:
            raw_polygons = [data]
        else:
            raise PolygonFormatError(
                str(self._path), "expected a 'polygons' list or a 'vertices' list"
            )

        if not isinstance(raw_polygons, list):
            raise PolygonFormatError(str(self._path), "'polygons' must be a list")

        polygons: list[Polygon] = []
        for idx, raw in enumerate(raw_polygons):
            try:
                polygons.append(parse_polygon(raw, default_name=f"polygon{idx}"))
            except (KeyError, TypeError, ValueError, ZeroDivisionError) as e:
                raise PolygonFormatError(str(self._path), f"polygon {idx}: {e}") from e

        self._polygons = polygons

    @property
    def polygon_count(self) -> int:
        """Return number of polygons in the file.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._polygons is None:
            raise RuntimeError("Polygons not loaded. Call load() first.")

        return len(self._polygons)

    def iter_polygons(self) -> Iterator[Polygon]:
        """Iterate over the polygons in file order.

        Raises:
            RuntimeError: If the file has not been loaded yet
        """
        if self._polygons is None:
            raise RuntimeError("Polygons not loaded. Call load() first.")

        yield from self._polygons

    def close(self) -> None:
        """Release loaded polygons."""
        self._polygons = None

    def __enter__(self) -> "PolygonReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
