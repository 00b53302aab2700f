"""Domain models for approxoffset.

This module contains the core domain models representing polygons, offset
curves and their cycle labels. All models are designed to be:

- Exact (rational coordinates via fractions.Fraction)
- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)

Key classes:
- Point: A 2D point with exact coordinates
- Polygon: A simple polygon given by its vertices
- Segment, CircularArc, XMonotoneArc: Offset boundary curves
- CurveLabel, LabeledCurve: Curves labeled with their cycle position
"""

from approxoffset.domain.curves import (
    CircularArc,
    Curve,
    Segment,
    XMonotoneArc,
    curve_from_dict,
)
from approxoffset.domain.label import CurveLabel, LabeledCurve
from approxoffset.domain.polygon import (
    ExactLike,
    Orientation,
    Point,
    Polygon,
    format_fraction,
    to_fraction,
)

__all__: list[str] = [
    # Enums
    "Orientation",
    # Core types
    "Point",
    "Polygon",
    "Segment",
    "CircularArc",
    "XMonotoneArc",
    "Curve",
    "CurveLabel",
    "LabeledCurve",
    # Helpers
    "ExactLike",
    "curve_from_dict",
    "format_fraction",
    "to_fraction",
]
