"""Rounding polygon corners with circular arcs.

Consecutive offset edges are computed independently and generally do not
meet. The offset boundary rounds each vertex with a counter-clockwise arc of
radius r centered at the vertex, running from the last offset point of the
incoming edge to the first offset point of the outgoing edge.
"""

from fractions import Fraction

from approxoffset.domain import Orientation, Point, XMonotoneArc
from approxoffset.kernel import CircleKernel


class ArcStitcher:
    """Builds the x-monotone corner arcs of an offset cycle.

    Example:
        stitcher = ArcStitcher()
        pieces = stitcher.stitch(Point(1, 0), Point(1, -1), Point(2, 0), Fraction(1))
        # a single quarter-circle piece from (1, -1) to (2, 0)
    """

    def __init__(self, circle_kernel: CircleKernel | None = None) -> None:
        """Initialize the arc stitcher.

        Args:
            circle_kernel: Curve kernel for arc construction and splitting
        """
        self._circles = circle_kernel or CircleKernel()

    def stitch(
        self,
        vertex: Point,
        previous_point: Point,
        next_point: Point,
        radius: Fraction,
    ) -> list[XMonotoneArc]:
        """Connect two offset points around a vertex.

        Args:
            vertex: Shared polygon vertex (arc center)
            previous_point: Last offset point of the incoming edge
            next_point: First offset point of the outgoing edge
            radius: Offset radius

        Returns:
            X-monotone pieces in traversal order; empty when the two offset
            points coincide

        Raises:
            ArcConstructionError: If either point is off the radius circle or
                the arc cannot be decomposed
        """
        arc = self._circles.make_arc(
            center=vertex,
            radius=radius,
            source=previous_point,
            target=next_point,
            orientation=Orientation.COUNTER_CLOCKWISE,
        )
        return self._circles.make_x_monotone(arc)
