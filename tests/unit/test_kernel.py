"""Tests for the exact numeric and circle kernels."""

from fractions import Fraction

import pytest

from approxoffset.domain import CircularArc, Orientation, Point
from approxoffset.exceptions import ArcConstructionError
from approxoffset.kernel import CircleKernel, Comparison, Line, RationalKernel, Sign


@pytest.fixture
def kernel() -> RationalKernel:
    return RationalKernel()


@pytest.fixture
def circles() -> CircleKernel:
    return CircleKernel()


class TestRationalKernel:
    """Tests for RationalKernel predicates and constructions."""

    def test_sign(self, kernel: RationalKernel) -> None:
        """Test sign of exact values."""
        assert kernel.sign(Fraction(-1, 3)) == Sign.NEGATIVE
        assert kernel.sign(Fraction(0)) == Sign.ZERO
        assert kernel.sign(Fraction(5)) == Sign.POSITIVE

    def test_compare(self, kernel: RationalKernel) -> None:
        """Test comparison of exact values."""
        assert kernel.compare(Fraction(1, 3), Fraction(1, 2)) == Comparison.SMALLER
        assert kernel.compare(Fraction(2, 4), Fraction(1, 2)) == Comparison.EQUAL
        assert kernel.compare(Fraction(1), Fraction(1, 2)) == Comparison.LARGER

    def test_compare_xy_is_lexicographic(self, kernel: RationalKernel) -> None:
        """Test x is compared before y."""
        assert kernel.compare_xy(Point(0, 5), Point(1, 0)) == Comparison.SMALLER
        assert kernel.compare_xy(Point(1, 0), Point(1, 1)) == Comparison.SMALLER
        assert kernel.compare_xy(Point(1, 1), Point(1, 1)) == Comparison.EQUAL
        assert kernel.compare_xy(Point(2, 0), Point(1, 9)) == Comparison.LARGER

    def test_to_exact_keeps_float_value(self, kernel: RationalKernel) -> None:
        """Test floats convert without rounding."""
        assert kernel.to_exact(0.5) == Fraction(1, 2)
        assert float(kernel.to_exact(0.1)) == 0.1

    def test_squared_distance(self, kernel: RationalKernel) -> None:
        """Test exact squared distance."""
        assert kernel.squared_distance(Point(0, 0), Point(3, 4)) == 25
        assert kernel.squared_distance(Point("1/2", 0), Point(0, 0)) == Fraction(1, 4)

    def test_sqrt_to_double(self, kernel: RationalKernel) -> None:
        """Test floating-point square root."""
        assert kernel.sqrt_to_double(Fraction(9, 4)) == 1.5

    def test_construct_line(self, kernel: RationalKernel) -> None:
        """Test the constructed line passes through both points."""
        p, q = Point(1, 2), Point(4, -1)
        line = kernel.construct_line(p, q)

        assert line.has_on(p)
        assert line.has_on(q)
        assert not line.has_on(Point(0, 0))

    def test_construct_line_equal_points(self, kernel: RationalKernel) -> None:
        """Test a line needs two distinct points."""
        with pytest.raises(ValueError):
            kernel.construct_line(Point(1, 1), Point(1, 1))

    def test_perpendicular_line(self, kernel: RationalKernel) -> None:
        """Test perpendicular through a point."""
        line = kernel.construct_line(Point(0, 0), Point(1, 0))
        perp = kernel.perpendicular_line(line, Point(3, 0))

        assert perp.has_on(Point(3, 0))
        assert perp.has_on(Point(3, 7))
        assert line.a * perp.a + line.b * perp.b == 0

    def test_intersect(self, kernel: RationalKernel) -> None:
        """Test intersection of two crossing lines."""
        l1 = kernel.construct_line(Point(0, 0), Point(2, 2))
        l2 = kernel.construct_line(Point(0, 2), Point(2, 0))

        assert kernel.intersect(l1, l2) == Point(1, 1)

    def test_intersect_parallel(self, kernel: RationalKernel) -> None:
        """Test parallel lines have no unique intersection."""
        l1 = Line(Fraction(0), Fraction(1), Fraction(0))
        l2 = Line(Fraction(0), Fraction(1), Fraction(-1))

        assert kernel.intersect(l1, l2) is None
        assert kernel.intersect(l1, l1) is None


class TestCircleKernel:
    """Tests for arc construction and x-monotone splitting."""

    def test_make_arc(self, circles: CircleKernel) -> None:
        """Test a valid arc is constructed."""
        arc = circles.make_arc(Point(0, 0), Fraction(5), Point(3, 4), Point(-4, 3))
        assert arc.orientation == Orientation.COUNTER_CLOCKWISE
        assert arc.radius == 5

    def test_make_arc_endpoint_off_circle(self, circles: CircleKernel) -> None:
        """Test endpoints must lie exactly on the circle."""
        with pytest.raises(ArcConstructionError, match="not on the circle"):
            circles.make_arc(Point(0, 0), Fraction(1), Point(1, 0), Point(1, 1))

    def test_make_arc_bad_radius(self, circles: CircleKernel) -> None:
        """Test radius must be positive."""
        with pytest.raises(ArcConstructionError):
            circles.make_arc(Point(0, 0), Fraction(0), Point(0, 0), Point(0, 0))

    def test_make_arc_collinear_orientation(self, circles: CircleKernel) -> None:
        """Test collinear orientation is rejected."""
        with pytest.raises(ArcConstructionError):
            circles.make_arc(
                Point(0, 0), Fraction(1), Point(1, 0), Point(0, 1), Orientation.COLLINEAR
            )

    def test_degenerate_arc_has_no_pieces(self, circles: CircleKernel) -> None:
        """Test source equal to target yields nothing."""
        arc = circles.make_arc(Point(0, 0), Fraction(1), Point(1, 0), Point(1, 0))
        assert circles.make_x_monotone(arc) == []

    def test_quarter_arc_single_piece(self, circles: CircleKernel) -> None:
        """Test an arc inside one half is not split."""
        arc = circles.make_arc(Point(1, 0), Fraction(1), Point(1, -1), Point(2, 0))
        pieces = circles.make_x_monotone(arc)

        assert len(pieces) == 1
        assert pieces[0].source == Point(1, -1)
        assert pieces[0].target == Point(2, 0)
        assert pieces[0].is_directed_right

    def test_half_circle_from_rightmost(self, circles: CircleKernel) -> None:
        """Test the upper half from rightmost to leftmost point is one piece."""
        arc = circles.make_arc(Point(0, 0), Fraction(1), Point(1, 0), Point(-1, 0))
        pieces = circles.make_x_monotone(arc)

        assert len(pieces) == 1
        assert not pieces[0].is_directed_right

    def test_arc_crossing_leftmost_point(self, circles: CircleKernel) -> None:
        """Test an arc through the leftmost point splits there."""
        arc = circles.make_arc(Point(0, 0), Fraction(5), Point(-3, 4), Point(-3, -4))
        pieces = circles.make_x_monotone(arc)

        assert [(p.source, p.target) for p in pieces] == [
            (Point(-3, 4), Point(-5, 0)),
            (Point(-5, 0), Point(-3, -4)),
        ]
        assert not pieces[0].is_directed_right
        assert pieces[1].is_directed_right

    def test_near_full_arc_three_pieces(self, circles: CircleKernel) -> None:
        """Test an arc covering both extreme points yields three pieces."""
        arc = circles.make_arc(Point(0, 0), Fraction(5), Point(3, 4), Point(4, 3))
        pieces = circles.make_x_monotone(arc)

        assert [(p.source, p.target) for p in pieces] == [
            (Point(3, 4), Point(-5, 0)),
            (Point(-5, 0), Point(5, 0)),
            (Point(5, 0), Point(4, 3)),
        ]

    def test_pieces_chain(self, circles: CircleKernel) -> None:
        """Test each piece starts where the previous one ends."""
        arc = circles.make_arc(Point(0, 0), Fraction(5), Point(0, -5), Point(-4, -3))
        pieces = circles.make_x_monotone(arc)

        assert pieces[0].source == arc.source
        assert pieces[-1].target == arc.target
        for prev, curr in zip(pieces, pieces[1:]):
            assert prev.target == curr.source

    def test_clockwise_arc(self, circles: CircleKernel) -> None:
        """Test clockwise arcs split into reversed counter-clockwise pieces."""
        arc = CircularArc(
            Point(0, 0), Fraction(5), Point(-3, -4), Point(3, -4), Orientation.CLOCKWISE
        )
        pieces = circles.make_x_monotone(arc)

        assert [(p.source, p.target) for p in pieces] == [
            (Point(-3, -4), Point(-5, 0)),
            (Point(-5, 0), Point(5, 0)),
            (Point(5, 0), Point(3, -4)),
        ]
        assert all(p.orientation == Orientation.CLOCKWISE for p in pieces)
