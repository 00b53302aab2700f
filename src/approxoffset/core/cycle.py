"""Building labeled convolution cycles.

This module drives the offset computation for one polygon contour:

- CycleEmitter: Labels curves with contiguous indices and the last flag
- PolygonOffsetter: Walks the polygon edges, offsets them and stitches the
  corners, streaming labeled curves as they are produced

A cycle visits every edge exactly once, counter-clockwise from vertex 0,
emitting each edge's offset segment(s) preceded by the arc around its source
vertex. The arc around vertex 0 is emitted last and closes the cycle.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from fractions import Fraction

from approxoffset.core.approximator import (
    DEFAULT_MAX_DENOMINATOR_BITS,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MAX_SCALED_LENGTH,
    SqrtApproximator,
)
from approxoffset.core.arc import ArcStitcher
from approxoffset.core.edge import EdgeOffsetter
from approxoffset.domain import (
    Curve,
    CurveLabel,
    ExactLike,
    LabeledCurve,
    Orientation,
    Point,
    Polygon,
    to_fraction,
)
from approxoffset.exceptions import PreconditionError
from approxoffset.kernel import CircleKernel, NumericKernel

CurveSink = Callable[[LabeledCurve], None]


class CycleEmitter:
    """Assigns cycle labels to a stream of curves.

    Exactly one curve is held back at a time, so the final curve of the cycle
    can be flagged as last even if the closing arc turns out to be empty.

    Example:
        emitter = CycleEmitter(cycle_id=0)
        emitter.push(segment, True)    # -> None (held back)
        emitter.push(arc, False)       # -> segment labeled with index 0
        emitter.close()                # -> arc labeled with index 1, is_last
    """

    def __init__(self, cycle_id: int) -> None:
        self._cycle_id = cycle_id
        self._next_index = 0
        self._pending: tuple[Curve, bool] | None = None

    @property
    def cycle_id(self) -> int:
        return self._cycle_id

    @property
    def count(self) -> int:
        """Number of curves accepted so far, including a held-back one."""
        return self._next_index + (1 if self._pending is not None else 0)

    def push(self, curve: Curve, is_directed_right: bool) -> LabeledCurve | None:
        """Accept a curve and release the previously accepted one.

        Returns:
            The previous curve with its label, or None for the first push
        """
        released = self._release(is_last=False)
        self._pending = (curve, is_directed_right)
        return released

    def close(self) -> LabeledCurve | None:
        """Release the final curve, flagged as the last of the cycle."""
        return self._release(is_last=True)

    def _release(self, is_last: bool) -> LabeledCurve | None:
        if self._pending is None:
            return None

        curve, is_directed_right = self._pending
        self._pending = None
        label = CurveLabel(
            is_directed_right=is_directed_right,
            cycle_id=self._cycle_id,
            curve_index=self._next_index,
            is_last=is_last,
        )
        self._next_index += 1
        return LabeledCurve(curve=curve, label=label)


@dataclass
class _CycleState:
    """Loop-carried offset points of a cycle walk."""

    first_point: Point | None = None
    previous_point: Point | None = None


class PolygonOffsetter:
    """Computes the approximate offset boundary of a simple polygon.

    The error bound is fixed at construction: every segment endpoint lies
    within eps * max(1, r) of distance r from its edge.
    The radius and cycle id are given per call. Instances hold no per-call
    state and can be reused.

    Example:
        offsetter = PolygonOffsetter(epsilon=0.01)
        square = Polygon([Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)])
        curves = offsetter.offset_polygon(square, radius=1)
        # 4 segments and 4 quarter arcs, indices 0..7, curves[7].is_last
    """

    def __init__(
        self,
        epsilon: float,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        max_scaled_length: int = DEFAULT_MAX_SCALED_LENGTH,
        max_denominator_bits: int = DEFAULT_MAX_DENOMINATOR_BITS,
        kernel: NumericKernel | None = None,
    ) -> None:
        """Initialize the polygon offsetter.

        Args:
            epsilon: Error bound, scaled by the radius when r > 1 (must be positive)
            max_iterations: Cap on square-root refinement steps per edge
            max_scaled_length: Largest allowed d * denominator when seeding
            max_denominator_bits: Cap on the denominator size of length approximations
            kernel: Numeric kernel (default: exact rationals)

        Raises:
            PreconditionError: If epsilon is not positive
        """
        self._approximator = SqrtApproximator(
            epsilon=epsilon,
            max_iterations=max_iterations,
            max_scaled_length=max_scaled_length,
            max_denominator_bits=max_denominator_bits,
            kernel=kernel,
        )
        self._edges = EdgeOffsetter(self._approximator, kernel=kernel)
        self._arcs = ArcStitcher(CircleKernel(kernel))

    @property
    def epsilon(self) -> float:
        return self._approximator.epsilon

    def offset_polygon(
        self,
        polygon: Polygon,
        radius: ExactLike,
        cycle_id: int = 0,
        sink: CurveSink | None = None,
    ) -> list[LabeledCurve]:
        """Compute the complete convolution cycle of a polygon.

        Args:
            polygon: Simple polygon, either orientation
            radius: Positive offset radius
            cycle_id: Identifier stamped on every curve label
            sink: Optional consumer called with each curve as it is produced

        Returns:
            The labeled curves of the cycle, in order

        Raises:
            PreconditionError: If the radius or polygon is invalid
            ConsistencyError: On a fatal numeric fault; the curves already
                passed to sink do not form a valid cycle
        """
        curves: list[LabeledCurve] = []
        for labeled in self.iter_offset_curves(polygon, radius, cycle_id):
            curves.append(labeled)
            if sink is not None:
                sink(labeled)
        return curves

    def iter_offset_curves(
        self,
        polygon: Polygon,
        radius: ExactLike,
        cycle_id: int = 0,
    ) -> Iterator[LabeledCurve]:
        """Stream the convolution cycle of a polygon.

        Preconditions are checked immediately; curves are then computed
        lazily, edge by edge.

        Args:
            polygon: Simple polygon, either orientation
            radius: Positive offset radius
            cycle_id: Identifier stamped on every curve label

        Returns:
            Iterator over the labeled curves of the cycle

        Raises:
            PreconditionError: If the radius or polygon is invalid
        """
        try:
            r = to_fraction(radius)
        except (TypeError, ValueError) as e:
            raise PreconditionError(f"Invalid offset radius {radius!r}: {e}") from e
        if r <= 0:
            raise PreconditionError(f"Offset radius must be positive, got {r}")

        vertices = self._counterclockwise_vertices(polygon)
        return self._walk(vertices, r, cycle_id)

    @staticmethod
    def _counterclockwise_vertices(polygon: Polygon) -> list[Point]:
        if len(polygon) < 3:
            raise PreconditionError(
                f"Polygon '{polygon.name}' needs at least 3 vertices, got {len(polygon)}"
            )
        if polygon.orientation() == Orientation.COLLINEAR:
            raise PreconditionError(f"Polygon '{polygon.name}' encloses no area")

        vertices = polygon.counterclockwise_vertices()
        n = len(vertices)
        for i in range(n):
            if vertices[i] == vertices[(i + 1) % n]:
                raise PreconditionError(
                    f"Polygon '{polygon.name}' repeats vertex "
                    f"{vertices[i].to_float_tuple()}"
                )
        return vertices

    def _walk(
        self,
        vertices: list[Point],
        radius: Fraction,
        cycle_id: int,
    ) -> Iterator[LabeledCurve]:
        emitter = CycleEmitter(cycle_id)
        state = _CycleState()
        n = len(vertices)

        for i in range(n):
            curr = vertices[i]
            edge = self._edges.offset(curr, vertices[(i + 1) % n], radius)

            if state.first_point is None:
                state.first_point = edge.first_point
            else:
                for piece in self._arcs.stitch(curr, state.previous_point, edge.first_point, radius):
                    labeled = emitter.push(piece, piece.is_directed_right)
                    if labeled is not None:
                        yield labeled

            for offset_segment in edge.segments:
                labeled = emitter.push(offset_segment.segment, offset_segment.is_directed_right)
                if labeled is not None:
                    yield labeled

            state.previous_point = edge.last_point

        for piece in self._arcs.stitch(vertices[0], state.previous_point, state.first_point, radius):
            labeled = emitter.push(piece, piece.is_directed_right)
            if labeled is not None:
                yield labeled

        labeled = emitter.close()
        if labeled is not None:
            yield labeled
