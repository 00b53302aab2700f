"""Exact numeric kernel.

The offset algorithm only needs a handful of exact primitives: sign and
comparison predicates, squared distances, line construction and two-line
intersection, plus a floating-point square root used to seed approximations.
NumericKernel names that capability set; RationalKernel implements it over
fractions.Fraction, which keeps every constructed point exact.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from fractions import Fraction
from typing import Protocol

from approxoffset.domain import Point


class Sign(IntEnum):
    """Sign of an exact number."""

    NEGATIVE = -1
    ZERO = 0
    POSITIVE = 1


class Comparison(IntEnum):
    """Result of comparing two exact values."""

    SMALLER = -1
    EQUAL = 0
    LARGER = 1


@dataclass(frozen=True, slots=True)
class Line:
    """The line a*x + b*y + c = 0.

    Attributes:
        a: Coefficient of x
        b: Coefficient of y
        c: Constant term
    """

    a: Fraction
    b: Fraction
    c: Fraction

    def has_on(self, p: Point) -> bool:
        """Check whether p lies exactly on the line."""
        return self.a * p.x + self.b * p.y + self.c == 0


class NumericKernel(Protocol):
    """Capabilities the offset algorithm requires from a number type."""

    def to_exact(self, value: float | int | Fraction) -> Fraction: ...

    def sign(self, value: Fraction) -> Sign: ...

    def compare(self, a: Fraction, b: Fraction) -> Comparison: ...

    def compare_xy(self, p: Point, q: Point) -> Comparison: ...

    def squared_distance(self, p: Point, q: Point) -> Fraction: ...

    def sqrt_to_double(self, value: Fraction) -> float: ...

    def construct_line(self, p: Point, q: Point) -> Line: ...

    def perpendicular_line(self, line: Line, p: Point) -> Line: ...

    def intersect(self, l1: Line, l2: Line) -> Point | None: ...


class RationalKernel:
    """NumericKernel over Python's arbitrary-precision Fractions.

    Stateless; a single instance may be shared freely.
    """

    def to_exact(self, value: float | int | Fraction) -> Fraction:
        """Convert a number to a Fraction without rounding."""
        return Fraction(value)

    def sign(self, value: Fraction) -> Sign:
        if value > 0:
            return Sign.POSITIVE
        if value < 0:
            return Sign.NEGATIVE
        return Sign.ZERO

    def compare(self, a: Fraction, b: Fraction) -> Comparison:
        return Comparison(self.sign(a - b))

    def compare_xy(self, p: Point, q: Point) -> Comparison:
        """Compare two points lexicographically, x first."""
        result = self.compare(p.x, q.x)
        if result != Comparison.EQUAL:
            return result
        return self.compare(p.y, q.y)

    def squared_distance(self, p: Point, q: Point) -> Fraction:
        dx = q.x - p.x
        dy = q.y - p.y
        return dx * dx + dy * dy

    def sqrt_to_double(self, value: Fraction) -> float:
        """Floating-point square root of a non-negative exact value."""
        return math.sqrt(float(value))

    def construct_line(self, p: Point, q: Point) -> Line:
        """Construct the line through p and q, directed from p to q.

        Raises:
            ValueError: If p and q coincide
        """
        if p == q:
            raise ValueError("Cannot construct a line through two equal points")

        return Line(
            a=p.y - q.y,
            b=q.x - p.x,
            c=p.x * q.y - p.y * q.x,
        )

    def perpendicular_line(self, line: Line, p: Point) -> Line:
        """Construct the line through p perpendicular to line.

        The result is directed 90 degrees counter-clockwise from line.
        """
        return Line(a=-line.b, b=line.a, c=line.b * p.x - line.a * p.y)

    def intersect(self, l1: Line, l2: Line) -> Point | None:
        """Intersect two lines.

        Returns:
            The unique intersection point, or None if the lines are parallel
            or identical
        """
        denom = l1.a * l2.b - l2.a * l1.b
        if denom == 0:
            return None

        x = (l1.b * l2.c - l2.b * l1.c) / denom
        y = (l2.a * l1.c - l1.a * l2.c) / denom
        return Point(x, y)


DEFAULT_KERNEL = RationalKernel()
