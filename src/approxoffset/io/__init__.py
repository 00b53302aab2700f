"""Polygon and curve I/O for approxoffset.

This module handles reading polygon files and writing offset curve files.
It provides a thin layer between JSON documents and the domain models.

Key classes:
- PolygonReader: Load polygons from JSON
- CurveWriter: Save labeled offset cycles to JSON
"""

from approxoffset.io.reader import PolygonReader, parse_polygon
from approxoffset.io.writer import CurveWriter

__all__ = [
    "CurveWriter",
    "PolygonReader",
    "parse_polygon",
]
