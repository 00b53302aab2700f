"""Labels attached to offset curves.

Labels let an arrangement layer rebuild cycle structure from a flat stream of
curves without re-deriving any geometry.
"""

from dataclasses import dataclass
from typing import Any

from approxoffset.domain.curves import Curve, curve_from_dict
from approxoffset.domain.polygon import Point


@dataclass(frozen=True, slots=True)
class CurveLabel:
    """Position of a curve within its convolution cycle.

    Attributes:
        is_directed_right: Whether the curve is traversed left to right
        cycle_id: Identifier of the polygon contour the curve belongs to
        curve_index: Sequential position within the cycle, starting at 0
        is_last: True only for the curve closing the cycle
    """

    is_directed_right: bool
    cycle_id: int
    curve_index: int
    is_last: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "directed_right": self.is_directed_right,
            "cycle_id": self.cycle_id,
            "index": self.curve_index,
            "is_last": self.is_last,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurveLabel":
        return cls(
            is_directed_right=data["directed_right"],
            cycle_id=data["cycle_id"],
            curve_index=data["index"],
            is_last=data.get("is_last", False),
        )


@dataclass(frozen=True, slots=True)
class LabeledCurve:
    """A segment or x-monotone arc together with its cycle label.

    Attributes:
        curve: Curve geometry
        label: Cycle label
    """

    curve: Curve
    label: CurveLabel

    @property
    def source(self) -> Point:
        return self.curve.source

    @property
    def target(self) -> Point:
        return self.curve.target

    @property
    def is_directed_right(self) -> bool:
        return self.label.is_directed_right

    @property
    def cycle_id(self) -> int:
        return self.label.cycle_id

    @property
    def curve_index(self) -> int:
        return self.label.curve_index

    @property
    def is_last(self) -> bool:
        return self.label.is_last

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with curve geometry and label
        """
        return {"curve": self.curve.to_dict(), "label": self.label.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LabeledCurve":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a labeled curve

        Returns:
            LabeledCurve instance
        """
        return cls(
            curve=curve_from_dict(data["curve"]),
            label=CurveLabel.from_dict(data["label"]),
        )
