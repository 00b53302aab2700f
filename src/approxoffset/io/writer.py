"""Curve writer for saving offset cycles.

This module provides the CurveWriter class for writing labeled offset curves
to a JSON file, one entry per convolution cycle:

    {"radius": "1", "epsilon": 0.01,
     "cycles": [{"cycle_id": 0, "name": "square", "curves": [...]}]}

Coordinates are written as exact "p/q" strings.
"""

import json
from fractions import Fraction
from pathlib import Path
from typing import Any

from approxoffset.domain import LabeledCurve, format_fraction
from approxoffset.exceptions import CurveSaveError


class CurveWriter:
    """Collects offset cycles and writes them to a JSON file.

    Example:
        writer = CurveWriter(Path("out.json"), radius=Fraction(1), epsilon=0.01)
        writer.add_cycle(0, "square", curves)
        writer.save()
    """

    def __init__(self, output_path: Path, radius: Fraction, epsilon: float) -> None:
        """Initialize the curve writer.

        Args:
            output_path: Path where the curves will be saved
            radius: Offset radius the cycles were computed with
            epsilon: Approximation error bound the cycles were computed with
        """
        self._output_path = output_path
        self._radius = radius
        self._epsilon = epsilon
        self._cycles: list[dict[str, Any]] = []

    @property
    def cycle_count(self) -> int:
        return len(self._cycles)

    def add_cycle(self, cycle_id: int, name: str, curves: list[LabeledCurve]) -> None:
        """Add a complete convolution cycle.

        Args:
            cycle_id: Cycle identifier shared by all curve labels
            name: Name of the source polygon
            curves: Labeled curves of the cycle, in order
        """
        self._cycles.append(
            {
                "cycle_id": cycle_id,
                "name": name,
                "curves": [curve.to_dict() for curve in curves],
            }
        )

    def to_dict(self) -> dict[str, Any]:
        """Build the document that save() writes."""
        return {
            "radius": format_fraction(self._radius),
            "epsilon": self._epsilon,
            "cycles": sorted(self._cycles, key=lambda c: c["cycle_id"]),
        }

    def save(self) -> None:
        """Write all cycles to the output path.

        Raises:
            CurveSaveError: If the file cannot be written
        """
        try:
            self._output_path.write_text(
                json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8"
            )
        except OSError as e:
            raise CurveSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_offset_path(input_path: Path) -> Path:
        """Generate output path with the offset naming convention.

        Converts: shapes.json -> shapes-offset.json

        Args:
            input_path: Original polygon file path

        Returns:
            Path with -offset suffix before a .json extension
        """
        return input_path.parent / f"{input_path.stem}-offset.json"
