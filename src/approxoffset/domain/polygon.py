"""Core geometric types for polygon representation.

This module defines the exact input types of the offset computation:
- Point: A 2D point with exact rational coordinates
- Polygon: An ordered cyclic sequence of vertices
- Orientation: Enum for polygon / turn orientation
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, auto
from fractions import Fraction
from typing import Any

ExactLike = int | float | str | Decimal | Fraction


def to_fraction(value: ExactLike) -> Fraction:
    """Convert a number to an exact rational value.

    Floats are converted exactly (no decimal rounding), strings accept both
    decimal notation ("0.25") and ratios ("1/3").

    Args:
        value: Number or numeric string

    Returns:
        Exact Fraction equal to value

    Raises:
        TypeError: If value is not a supported numeric type
        ValueError: If a string cannot be parsed or a float is not finite
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not coordinates")
    if isinstance(value, (int, float, Decimal, str)):
        return Fraction(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to an exact number")


def format_fraction(value: Fraction) -> str:
    """Serialize a Fraction as "p/q" (or "p" for integers)."""
    if value.denominator == 1:
        return str(value.numerator)
    return f"{value.numerator}/{value.denominator}"


class Orientation(Enum):
    """Orientation of a vertex sequence.

    Counter-clockwise polygons have positive signed area, clockwise ones
    negative. Collinear sequences enclose no area.
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()
    COLLINEAR = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space with exact rational coordinates.

    Immutable and hashable. Coordinates given as ints, floats, strings or
    Decimals are converted to Fractions on construction.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: Fraction
    y: Fraction

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", to_fraction(self.x))
        object.__setattr__(self, "y", to_fraction(self.y))

    def to_tuple(self) -> tuple[Fraction, Fraction]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of exact (x, y) coordinates
        """
        return (self.x, self.y)

    def to_float_tuple(self) -> tuple[float, float]:
        """Convert to (x, y) floats for display and plotting."""
        return (float(self.x), float(self.y))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y as "p/q" strings
        """
        return {"x": format_fraction(self.x), "y": format_fraction(self.y)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=to_fraction(data["x"]), y=to_fraction(data["y"]))


@dataclass
class Polygon:
    """A polygon given by its vertices in cyclic order.

    The polygon must be simple; this is a caller contract and is not
    verified here. Either orientation is accepted.

    Attributes:
        vertices: Vertices in boundary order (first vertex not repeated)
        name: Optional name used in logs and output files
    """

    vertices: list[Point]
    name: str = ""
    _cached_area: Fraction | None = field(default=None, repr=False, init=False, compare=False)

    def __len__(self) -> int:
        return len(self.vertices)

    def is_empty(self) -> bool:
        """Check whether the polygon has no vertices."""
        return not self.vertices

    def signed_area(self) -> Fraction:
        """Calculate the exact signed area using the shoelace formula.

        - Positive area: counter-clockwise orientation
        - Negative area: clockwise orientation

        Result is cached for efficiency.

        Returns:
            Signed area of the polygon
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.vertices)
        area = Fraction(0)
        if n >= 3:
            for i in range(n):
                j = (i + 1) % n
                area += self.vertices[i].x * self.vertices[j].y
                area -= self.vertices[j].x * self.vertices[i].y

        self._cached_area = area / 2
        return self._cached_area

    def orientation(self) -> Orientation:
        """Determine orientation from the sign of the signed area."""
        area = self.signed_area()
        if area > 0:
            return Orientation.COUNTER_CLOCKWISE
        if area < 0:
            return Orientation.CLOCKWISE
        return Orientation.COLLINEAR

    def counterclockwise_vertices(self) -> list[Point]:
        """Vertices in counter-clockwise order, starting at the first vertex.

        Clockwise polygons are walked backwards from vertex 0, so the
        starting vertex is the same for both orientations.
        """
        if self.orientation() == Orientation.CLOCKWISE:
            return [self.vertices[0]] + self.vertices[:0:-1]
        return list(self.vertices)

    def bounding_box(self) -> tuple[Fraction, Fraction, Fraction, Fraction]:
        """Calculate bounding box of the polygon.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.vertices:
            zero = Fraction(0)
            return (zero, zero, zero, zero)

        xs = [p.x for p in self.vertices]
        ys = [p.y for p in self.vertices]
        return (min(xs), min(ys), max(xs), max(ys))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the polygon
        """
        return {
            "name": self.name,
            "vertices": [p.to_dict() for p in self.vertices],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Polygon":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a polygon

        Returns:
            Polygon instance
        """
        vertices = [Point.from_dict(p) for p in data["vertices"]]
        return cls(vertices=vertices, name=data.get("name", ""))
