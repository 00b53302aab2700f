"""Exact circular-arc construction and x-monotone decomposition.

A circle is split into two x-monotone halves by its leftmost and rightmost
points, both of which are rational whenever the center and radius are. An
arc is therefore cut at most twice and yields at most three pieces.

Positions on a circle are compared without angles:
- the upper half holds angles [0, pi): y above the center, or the rightmost point
- the lower half holds angles [pi, 2*pi): y below the center, or the leftmost point
Inside the upper half the angle grows as x decreases, inside the lower half
it grows as x increases.
"""

from dataclasses import replace
from fractions import Fraction

from approxoffset.domain import CircularArc, Orientation, Point, XMonotoneArc
from approxoffset.exceptions import ArcConstructionError
from approxoffset.kernel.numeric import DEFAULT_KERNEL, NumericKernel

_UPPER = 0
_LOWER = 1
_MAX_PIECES = 3


def _half(center: Point, p: Point) -> int:
    if p.y > center.y or (p.y == center.y and p.x > center.x):
        return _UPPER
    return _LOWER


def _angle_key(center: Point, p: Point) -> tuple[int, Fraction]:
    half = _half(center, p)
    return (half, -p.x if half == _UPPER else p.x)


class CircleKernel:
    """Builds circular arcs and splits them into x-monotone pieces.

    Example:
        kernel = CircleKernel()
        arc = kernel.make_arc(Point(0, 0), Fraction(1), Point(1, 0), Point(-1, 0))
        pieces = kernel.make_x_monotone(arc)  # one upper half-circle piece
    """

    def __init__(self, kernel: NumericKernel | None = None) -> None:
        """Initialize the curve kernel.

        Args:
            kernel: Numeric kernel for exact predicates (default: rational)
        """
        self._kernel = kernel or DEFAULT_KERNEL

    def make_arc(
        self,
        center: Point,
        radius: Fraction,
        source: Point,
        target: Point,
        orientation: Orientation = Orientation.COUNTER_CLOCKWISE,
    ) -> CircularArc:
        """Construct an arc from its supporting circle and endpoints.

        Args:
            center: Circle center
            radius: Circle radius
            source: Start point, exactly on the circle
            target: End point, exactly on the circle
            orientation: Clockwise or counter-clockwise traversal

        Returns:
            The directed circular arc

        Raises:
            ArcConstructionError: If the radius is not positive, an endpoint
                is off the circle, or the orientation is collinear
        """
        if radius <= 0:
            raise ArcConstructionError(f"Arc radius must be positive, got {radius}")
        if orientation == Orientation.COLLINEAR:
            raise ArcConstructionError("Arc orientation must be clockwise or counter-clockwise")

        sqr_radius = radius * radius
        for name, p in (("source", source), ("target", target)):
            if self._kernel.squared_distance(center, p) != sqr_radius:
                raise ArcConstructionError(
                    f"Arc {name} {p.to_float_tuple()} is not on the circle "
                    f"centered at {center.to_float_tuple()} with radius {float(radius)}"
                )

        return CircularArc(
            center=center,
            radius=radius,
            source=source,
            target=target,
            orientation=orientation,
        )

    def make_x_monotone(self, arc: CircularArc) -> list[XMonotoneArc]:
        """Split an arc into x-monotone pieces, in traversal order.

        A degenerate arc (source equal to target) yields no pieces.

        Args:
            arc: Arc to decompose

        Returns:
            List of x-monotone pieces chaining from arc.source to arc.target

        Raises:
            ArcConstructionError: If the decomposition does not terminate
                within the expected number of pieces
        """
        if arc.is_degenerate:
            return []

        if arc.orientation == Orientation.CLOCKWISE:
            reverse = replace(
                arc,
                source=arc.target,
                target=arc.source,
                orientation=Orientation.COUNTER_CLOCKWISE,
            )
            return [
                XMonotoneArc(
                    center=piece.center,
                    radius=piece.radius,
                    source=piece.target,
                    target=piece.source,
                    orientation=Orientation.CLOCKWISE,
                )
                for piece in reversed(self._split_counterclockwise(reverse))
            ]

        return self._split_counterclockwise(arc)

    def _split_counterclockwise(self, arc: CircularArc) -> list[XMonotoneArc]:
        center = arc.center
        leftmost = Point(center.x - arc.radius, center.y)
        rightmost = Point(center.x + arc.radius, center.y)
        target_key = _angle_key(center, arc.target)

        pieces: list[XMonotoneArc] = []
        current = arc.source

        for _ in range(_MAX_PIECES):
            current_key = _angle_key(center, current)
            if target_key[0] == current_key[0] and target_key > current_key:
                pieces.append(self._piece(arc, current, arc.target))
                return pieces

            boundary = leftmost if current_key[0] == _UPPER else rightmost
            pieces.append(self._piece(arc, current, boundary))
            if boundary == arc.target:
                return pieces
            current = boundary

        raise ArcConstructionError(
            f"Arc around {center.to_float_tuple()} did not decompose into "
            f"at most {_MAX_PIECES} x-monotone pieces"
        )

    @staticmethod
    def _piece(arc: CircularArc, source: Point, target: Point) -> XMonotoneArc:
        return XMonotoneArc(
            center=arc.center,
            radius=arc.radius,
            source=source,
            target=target,
            orientation=arc.orientation,
        )
