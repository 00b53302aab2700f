"""Core offset algorithms for approxoffset.

This module contains the algorithms for:

- Edge-length approximation (Newton-refined rationals with a certified bound)
- Edge offsetting (exact translations or two-segment tangent approximations)
- Corner stitching (counter-clockwise arcs split into x-monotone pieces)
- Cycle emission (contiguous labels, last-curve marking, streaming output)

All services are designed to be:
- Deterministic (identical inputs give identical curves)
- Exact (every constructed point has rational coordinates)
- Stateless between calls (safe for use in worker processes)

Key classes:
- SqrtApproximator: Approximates sqrt(dx^2 + dy^2) within an error bound
- EdgeOffsetter: Offsets a single polygon edge
- ArcStitcher: Builds the corner arc between consecutive offset edges
- CycleEmitter: Labels curves of a convolution cycle
- PolygonOffsetter: Computes the whole convolution cycle of a polygon
- OffsetProcessor: Offsets every polygon of a file, in parallel
"""

from approxoffset.core.approximator import Approximation, SqrtApproximator
from approxoffset.core.arc import ArcStitcher
from approxoffset.core.cycle import CurveSink, CycleEmitter, PolygonOffsetter
from approxoffset.core.edge import (
    EdgeOffset,
    EdgeOffsetter,
    OffsetSegment,
    unit_vector_from_half_angle,
)
from approxoffset.core.processor import OffsetProcessor, offset_contour

__all__ = [
    # Approximation
    "Approximation",
    "SqrtApproximator",
    # Edge offsetting
    "EdgeOffset",
    "EdgeOffsetter",
    "OffsetSegment",
    "unit_vector_from_half_angle",
    # Corner arcs
    "ArcStitcher",
    # Cycles
    "CurveSink",
    "CycleEmitter",
    "PolygonOffsetter",
    # Processor
    "OffsetProcessor",
    "offset_contour",
]
