"""Tests for corner arc stitching."""

from fractions import Fraction

import pytest

from approxoffset.core.arc import ArcStitcher
from approxoffset.domain import Orientation, Point
from approxoffset.exceptions import ArcConstructionError


@pytest.fixture
def stitcher() -> ArcStitcher:
    return ArcStitcher()


class TestArcStitcher:
    """Tests for ArcStitcher."""

    def test_convex_corner_quarter_arc(self, stitcher: ArcStitcher) -> None:
        """Test a square corner is rounded by one counter-clockwise quarter arc."""
        pieces = stitcher.stitch(Point(1, 0), Point(1, -1), Point(2, 0), Fraction(1))

        assert len(pieces) == 1
        piece = pieces[0]
        assert piece.center == Point(1, 0)
        assert piece.radius == 1
        assert piece.source == Point(1, -1)
        assert piece.target == Point(2, 0)
        assert piece.orientation == Orientation.COUNTER_CLOCKWISE
        assert piece.is_directed_right

    def test_straight_corner_has_no_arc(self, stitcher: ArcStitcher) -> None:
        """Test coinciding offset points produce no pieces."""
        pieces = stitcher.stitch(Point(1, 0), Point(1, -1), Point(1, -1), Fraction(1))
        assert pieces == []

    def test_corner_through_extreme_point(self, stitcher: ArcStitcher) -> None:
        """Test an arc passing the rightmost point is split there."""
        pieces = stitcher.stitch(Point(0, 0), Point(3, -4), Point(3, 4), Fraction(5))

        assert [(p.source, p.target) for p in pieces] == [
            (Point(3, -4), Point(5, 0)),
            (Point(5, 0), Point(3, 4)),
        ]
        assert pieces[0].is_directed_right
        assert not pieces[1].is_directed_right

    def test_reflex_corner_long_arc(self, stitcher: ArcStitcher) -> None:
        """Test a reflex corner is stitched the long way around."""
        pieces = stitcher.stitch(Point(0, 0), Point(0, 1), Point(1, 0), Fraction(1))

        assert [(p.source, p.target) for p in pieces] == [
            (Point(0, 1), Point(-1, 0)),
            (Point(-1, 0), Point(1, 0)),
        ]

    def test_point_off_circle(self, stitcher: ArcStitcher) -> None:
        """Test offset points must lie on the radius circle."""
        with pytest.raises(ArcConstructionError):
            stitcher.stitch(Point(0, 0), Point(1, 0), Point(0, 2), Fraction(1))
