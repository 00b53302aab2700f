"""Offsetting a single polygon edge.

Edges are visited in counter-clockwise order, so the outward side of an edge
(x1, y1) -> (x2, y2) is its right-hand side and the exact offset is the edge
translated by r * (dy, -dx) / d. Four cases are distinguished, in order:

1. Vertical edge: translate by (+r, 0) going up, (-r, 0) going down.
2. Horizontal edge: translate by (0, -r) going right, (0, +r) going left.
3. General edge whose length d is rational: translate by the exact normal.
4. General edge with irrational d: place one rational point on the radius-r
   circle around each endpoint, using a lower and an upper approximation of
   tan(phi / 2) where phi is the angle of the outward normal, and join them
   by two segments meeting where the circle tangents at those points cross.

Rational t = tan(phi / 2) gives rational sin(phi) = 2t / (1 + t^2) and
cos(phi) = (1 - t^2) / (1 + t^2) with sin^2 + cos^2 = 1 exactly, so every
offset point lies exactly on its circle.
"""

from dataclasses import dataclass
from fractions import Fraction

from approxoffset.core.approximator import SqrtApproximator
from approxoffset.domain import Point, Segment
from approxoffset.exceptions import IntersectionError, PreconditionError
from approxoffset.kernel import DEFAULT_KERNEL, Comparison, NumericKernel, Sign


@dataclass(frozen=True, slots=True)
class OffsetSegment:
    """An offset segment with its traversal direction.

    Attributes:
        segment: The segment geometry
        is_directed_right: Whether the segment runs left to right
    """

    segment: Segment
    is_directed_right: bool


@dataclass(frozen=True, slots=True)
class EdgeOffset:
    """Offset of one polygon edge.

    Attributes:
        first_point: Offset point corresponding to the edge source
        last_point: Offset point corresponding to the edge target
        segments: One or two segments chaining first_point to last_point
    """

    first_point: Point
    last_point: Point
    segments: tuple[OffsetSegment, ...]


def unit_vector_from_half_angle(t: Fraction) -> tuple[Fraction, Fraction]:
    """Return (cos(phi), sin(phi)) for tan(phi / 2) = t, exactly."""
    sqr_t = t * t
    return (1 - sqr_t) / (1 + sqr_t), 2 * t / (1 + sqr_t)


class EdgeOffsetter:
    """Computes the offset segments of polygon edges.

    Example:
        offsetter = EdgeOffsetter(SqrtApproximator(epsilon=0.01))
        result = offsetter.offset(Point(0, 0), Point(1, 0), Fraction(1))
        # result.segments[0].segment runs from (0, -1) to (1, -1)
    """

    def __init__(
        self,
        approximator: SqrtApproximator,
        kernel: NumericKernel | None = None,
    ) -> None:
        """Initialize the edge offsetter.

        Args:
            approximator: Square-root approximator for irrational lengths
            kernel: Numeric kernel for exact predicates and constructions
        """
        self._approximator = approximator
        self._kernel = kernel or DEFAULT_KERNEL

    def offset(self, source: Point, target: Point, radius: Fraction) -> EdgeOffset:
        """Offset the edge source -> target to its right by radius.

        Args:
            source: Edge source vertex
            target: Edge target vertex
            radius: Offset radius

        Returns:
            EdgeOffset with one or two segments

        Raises:
            PreconditionError: If the edge has zero length
            IntersectionError: If the tangent lines of the irrational case do
                not meet in a single point
            ConvergenceError: If the length approximation does not converge
        """
        delta_x = target.x - source.x
        delta_y = target.y - source.y
        sign_delta_x = self._kernel.sign(delta_x)
        sign_delta_y = self._kernel.sign(delta_y)

        if sign_delta_x == Sign.ZERO:
            if sign_delta_y == Sign.ZERO:
                raise PreconditionError(
                    f"Zero-length edge at {source.to_float_tuple()}"
                )

            # Vertical: the offset lies to the right going up, to the left going down.
            shift = radius if sign_delta_y == Sign.POSITIVE else -radius
            return self._translated(source, target, shift, Fraction(0),
                                    sign_delta_y == Sign.POSITIVE)

        if sign_delta_y == Sign.ZERO:
            # Horizontal: the offset lies below going right, above going left.
            shift = -radius if sign_delta_x == Sign.POSITIVE else radius
            return self._translated(source, target, Fraction(0), shift,
                                    sign_delta_x == Sign.POSITIVE)

        approximation = self._approximator.approximate(delta_x, delta_y)
        app_d = approximation.value
        sign_app_err = self._kernel.sign(approximation.error)

        if sign_app_err == Sign.ZERO:
            # The length is rational: translate by the exact normal.
            return self._translated(
                source,
                target,
                radius * delta_y / app_d,
                radius * -delta_x / app_d,
                sign_delta_x == Sign.POSITIVE,
            )

        sqr_d = delta_x * delta_x + delta_y * delta_y
        if sign_delta_x == Sign.NEGATIVE:
            # x1 > x2: use a lower approximation of d.
            if sign_app_err == Sign.NEGATIVE:
                app_d = sqr_d / app_d
        elif sign_app_err == Sign.POSITIVE:
            # x1 < x2: use an upper approximation of d.
            app_d = sqr_d / app_d

        return self._two_segment_offset(source, target, radius, delta_x, delta_y, app_d)

    def _translated(
        self,
        source: Point,
        target: Point,
        trans_x: Fraction,
        trans_y: Fraction,
        dir_right: bool,
    ) -> EdgeOffset:
        op1 = Point(source.x + trans_x, source.y + trans_y)
        op2 = Point(target.x + trans_x, target.y + trans_y)
        return EdgeOffset(
            first_point=op1,
            last_point=op2,
            segments=(OffsetSegment(Segment(op1, op2), dir_right),),
        )

    def _two_segment_offset(
        self,
        source: Point,
        target: Point,
        radius: Fraction,
        delta_x: Fraction,
        delta_y: Fraction,
        app_d: Fraction,
    ) -> EdgeOffset:
        # phi = theta - pi/2 is the angle of the outward normal.
        lower_tan_half_phi = (app_d - delta_y) / -delta_x
        upper_tan_half_phi = -delta_x / (app_d + delta_y)

        cos_phi, sin_phi = unit_vector_from_half_angle(lower_tan_half_phi)
        op1 = Point(source.x + radius * cos_phi, source.y + radius * sin_phi)

        cos_phi, sin_phi = unit_vector_from_half_angle(upper_tan_half_phi)
        op2 = Point(target.x + radius * cos_phi, target.y + radius * sin_phi)

        kernel = self._kernel
        l1 = kernel.perpendicular_line(kernel.construct_line(source, op1), op1)
        l2 = kernel.perpendicular_line(kernel.construct_line(target, op2), op2)

        mid_p = kernel.intersect(l1, l2)
        if mid_p is None:
            raise IntersectionError(
                f"Tangent lines of edge {source.to_float_tuple()} -> "
                f"{target.to_float_tuple()} do not intersect in a single point"
            )

        seg1 = OffsetSegment(
            Segment(op1, mid_p),
            kernel.compare_xy(op1, mid_p) == Comparison.SMALLER,
        )
        seg2 = OffsetSegment(
            Segment(mid_p, op2),
            kernel.compare_xy(mid_p, op2) == Comparison.SMALLER,
        )
        return EdgeOffset(first_point=op1, last_point=op2, segments=(seg1, seg2))
