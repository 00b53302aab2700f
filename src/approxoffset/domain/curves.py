"""Curve types making up an offset boundary.

Offset boundaries consist of segments and circular arcs:
- Segment: A directed straight line segment
- CircularArc: A directed arc of a circle, as constructed around a vertex
- XMonotoneArc: A piece of a circular arc crossed at most once by any
  vertical line, the form required for arrangement insertion
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Any

from approxoffset.domain.polygon import (
    Orientation,
    Point,
    format_fraction,
    to_fraction,
)


def _xy_smaller(p: Point, q: Point) -> bool:
    return (p.x, p.y) < (q.x, q.y)


@dataclass(frozen=True, slots=True)
class Segment:
    """A directed line segment from source to target.

    Attributes:
        source: Start point
        target: End point
    """

    source: Point
    target: Point

    @property
    def is_directed_right(self) -> bool:
        """True if source is lexicographically smaller than target."""
        return _xy_smaller(self.source, self.target)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "segment",
            "source": self.source.to_dict(),
            "target": self.target.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        return cls(
            source=Point.from_dict(data["source"]),
            target=Point.from_dict(data["target"]),
        )


@dataclass(frozen=True, slots=True)
class CircularArc:
    """A directed circular arc.

    The endpoints lie exactly on the supporting circle. The arc runs from
    source to target in the given orientation.

    Attributes:
        center: Center of the supporting circle
        radius: Radius of the supporting circle
        source: Start point
        target: End point
        orientation: Traversal direction around the center
    """

    center: Point
    radius: Fraction
    source: Point
    target: Point
    orientation: Orientation = Orientation.COUNTER_CLOCKWISE

    @property
    def is_degenerate(self) -> bool:
        """True if the arc starts and ends at the same point."""
        return self.source == self.target


@dataclass(frozen=True, slots=True)
class XMonotoneArc:
    """An x-monotone piece of a circular arc.

    Attributes:
        center: Center of the supporting circle
        radius: Radius of the supporting circle
        source: Start point
        target: End point
        orientation: Traversal direction around the center
    """

    center: Point
    radius: Fraction
    source: Point
    target: Point
    orientation: Orientation = Orientation.COUNTER_CLOCKWISE

    @property
    def is_directed_right(self) -> bool:
        """True if the arc is traversed from left to right."""
        return _xy_smaller(self.source, self.target)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "arc",
            "center": self.center.to_dict(),
            "radius": format_fraction(self.radius),
            "source": self.source.to_dict(),
            "target": self.target.to_dict(),
            "orientation": self.orientation.name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "XMonotoneArc":
        return cls(
            center=Point.from_dict(data["center"]),
            radius=to_fraction(data["radius"]),
            source=Point.from_dict(data["source"]),
            target=Point.from_dict(data["target"]),
            orientation=Orientation[data["orientation"]],
        )


Curve = Segment | XMonotoneArc


def curve_from_dict(data: dict[str, Any]) -> Curve:
    """Deserialize a segment or x-monotone arc by its "kind" field.

    Raises:
        ValueError: If the kind is unknown
    """
    kind = data.get("kind")
    if kind == "segment":
        return Segment.from_dict(data)
    if kind == "arc":
        return XMonotoneArc.from_dict(data)
    raise ValueError(f"Unknown curve kind: {kind!r}")
