"""Tests for single-edge offsetting."""

from fractions import Fraction

import pytest

from approxoffset.core.approximator import SqrtApproximator
from approxoffset.core.edge import EdgeOffsetter, unit_vector_from_half_angle
from approxoffset.domain import Point
from approxoffset.exceptions import PreconditionError
from approxoffset.kernel import RationalKernel


@pytest.fixture
def offsetter() -> EdgeOffsetter:
    return EdgeOffsetter(SqrtApproximator(epsilon=0.01))


def _distance_to_line_sq(p: Point, a: Point, b: Point) -> Fraction:
    """Squared distance from p to the line through a and b."""
    cross = (b.x - a.x) * (p.y - a.y) - (b.y - a.y) * (p.x - a.x)
    return cross * cross / ((b.x - a.x) ** 2 + (b.y - a.y) ** 2)


def _is_right_of(p: Point, a: Point, b: Point) -> bool:
    return (b.x - a.x) * (p.y - a.y) - (b.y - a.y) * (p.x - a.x) < 0


class TestUnitVector:
    """Tests for the rational half-angle parametrization."""

    @pytest.mark.parametrize("t", [Fraction(0), Fraction(1, 2), Fraction(-3, 7), Fraction(5)])
    def test_on_unit_circle(self, t: Fraction) -> None:
        """Test cos^2 + sin^2 == 1 exactly."""
        cos_phi, sin_phi = unit_vector_from_half_angle(t)
        assert cos_phi * cos_phi + sin_phi * sin_phi == 1

    def test_known_angles(self) -> None:
        """Test t = 0 and t = 1 give angles 0 and pi/2."""
        assert unit_vector_from_half_angle(Fraction(0)) == (1, 0)
        assert unit_vector_from_half_angle(Fraction(1)) == (0, 1)


class TestAxisAlignedEdges:
    """Tests for vertical and horizontal edges."""

    def test_horizontal_right(self, offsetter: EdgeOffsetter) -> None:
        """Test an edge going right is offset downward."""
        result = offsetter.offset(Point(0, 0), Point(1, 0), Fraction(1))

        assert result.first_point == Point(0, -1)
        assert result.last_point == Point(1, -1)
        assert len(result.segments) == 1
        assert result.segments[0].is_directed_right

    def test_horizontal_left(self, offsetter: EdgeOffsetter) -> None:
        """Test an edge going left is offset upward."""
        result = offsetter.offset(Point(1, 1), Point(0, 1), Fraction(1))

        assert result.first_point == Point(1, 2)
        assert result.last_point == Point(0, 2)
        assert not result.segments[0].is_directed_right

    def test_vertical_up(self, offsetter: EdgeOffsetter) -> None:
        """Test an edge going up is offset to the right."""
        result = offsetter.offset(Point(1, 0), Point(1, 1), Fraction(1, 2))

        assert result.first_point == Point("3/2", 0)
        assert result.last_point == Point("3/2", 1)
        assert result.segments[0].is_directed_right

    def test_vertical_down(self, offsetter: EdgeOffsetter) -> None:
        """Test an edge going down is offset to the left."""
        result = offsetter.offset(Point(0, 1), Point(0, 0), Fraction(1))

        assert result.first_point == Point(-1, 1)
        assert result.last_point == Point(-1, 0)
        assert not result.segments[0].is_directed_right

    def test_zero_length_edge(self, offsetter: EdgeOffsetter) -> None:
        """Test coincident endpoints are rejected."""
        with pytest.raises(PreconditionError, match="Zero-length"):
            offsetter.offset(Point(2, 3), Point(2, 3), Fraction(1))


class TestRationalLengthEdges:
    """Tests for general edges whose length is rational."""

    def test_three_four_five(self, offsetter: EdgeOffsetter) -> None:
        """Test a 3-4-5 edge is translated by the exact normal."""
        result = offsetter.offset(Point(0, 0), Point(3, 4), Fraction(5))

        assert result.first_point == Point(4, -3)
        assert result.last_point == Point(7, 1)
        assert len(result.segments) == 1
        assert result.segments[0].is_directed_right

    def test_three_four_five_leftward(self, offsetter: EdgeOffsetter) -> None:
        """Test the exact normal for an edge going left."""
        result = offsetter.offset(Point(3, 4), Point(0, 0), Fraction(5))

        assert result.first_point == Point(-1, 7)
        assert result.last_point == Point(-4, 3)
        assert not result.segments[0].is_directed_right


class TestIrrationalLengthEdges:
    """Tests for general edges approximated by two segments."""

    @pytest.mark.parametrize(
        "source,target",
        [
            (Point(0, 0), Point(1, 1)),
            (Point(4, 0), Point(1, 3)),
            (Point(1, 3), Point(0, 0)),
            (Point(0, 0), Point(2, -1)),
            (Point(5, 5), Point(-2, 3)),
        ],
    )
    def test_two_segment_structure(
        self, offsetter: EdgeOffsetter, source: Point, target: Point
    ) -> None:
        """Test the offset is two chained segments on the correct side."""
        radius = Fraction(1)
        result = offsetter.offset(source, target, radius)

        assert len(result.segments) == 2
        seg1, seg2 = result.segments
        assert seg1.segment.source == result.first_point
        assert seg1.segment.target == seg2.segment.source
        assert seg2.segment.target == result.last_point

        assert RationalKernel().squared_distance(source, result.first_point) == 1
        assert RationalKernel().squared_distance(target, result.last_point) == 1

        for point in (result.first_point, seg1.segment.target, result.last_point):
            assert _is_right_of(point, source, target)

    def test_direction_flags_match_geometry(self, offsetter: EdgeOffsetter) -> None:
        """Test each flag is the lexicographic order of its endpoints."""
        result = offsetter.offset(Point(0, 0), Point(1, 2), Fraction(1))

        for offset_segment in result.segments:
            segment = offset_segment.segment
            expected = (segment.source.x, segment.source.y) < (segment.target.x, segment.target.y)
            assert offset_segment.is_directed_right == expected

    def test_error_bound(self) -> None:
        """Test offset points stay within epsilon of distance r from the edge line."""
        epsilon = 1e-4
        offsetter = EdgeOffsetter(SqrtApproximator(epsilon=epsilon))
        radius = Fraction(1)

        for source, target in [
            (Point(4, 0), Point(1, 3)),
            (Point(1, 3), Point(0, 0)),
            (Point(0, 0), Point(3, 1)),
        ]:
            result = offsetter.offset(source, target, radius)
            points = [result.first_point, result.segments[0].segment.target, result.last_point]
            for point in points:
                distance = float(_distance_to_line_sq(point, source, target)) ** 0.5
                assert abs(distance - float(radius)) <= epsilon

    def test_endpoints_never_beyond_radius(self, offsetter: EdgeOffsetter) -> None:
        """Test endpoint offsets lie on the radius circle, so never beyond r from the line."""
        source, target = Point(1, 3), Point(0, 0)
        result = offsetter.offset(source, target, Fraction(1))

        assert _distance_to_line_sq(result.first_point, source, target) <= 1
        assert _distance_to_line_sq(result.last_point, source, target) <= 1
