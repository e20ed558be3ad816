"""Placement types produced by the LED placement engine.

CenterCandidate and Chain are ephemeral intermediate results of a single
placement computation. LEDPosition is the only type that leaves the engine.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PositionSource(str, Enum):
    """How an LED position was created."""

    AUTO = "auto"
    MANUAL = "manual"


@dataclass(frozen=True, slots=True)
class CenterCandidate:
    """A proposed module-center location on the stroke centerline.

    Attributes:
        x: X coordinate of the recentered point
        y: Y coordinate of the recentered point
        path_distance: Arc distance of the originating outline sample
        local_width: Inscribed width of the shape along the normal
        clearance: Lesser of the two edge distances measured from the inset probe
        normal: Unit normal pointing into the fill at the originating sample
        tangent: Unit tangent of the outline at the originating sample
        id: Identifier unique within one computation
    """

    x: float
    y: float
    path_distance: float
    local_width: float
    clearance: float
    normal: tuple[float, float]
    tangent: tuple[float, float]
    id: str

    def distance_to(self, other: "CenterCandidate") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass
class CandidateSet:
    """Deduplicated candidates plus the sampling stride that produced them."""

    candidates: list[CenterCandidate]
    step: float

    def __len__(self) -> int:
        return len(self.candidates)


@dataclass
class Chain:
    """A maximal run of spatially contiguous candidates (one stroke segment).

    Attributes:
        candidates: Candidates in generation order
    """

    candidates: list[CenterCandidate] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.candidates)

    def cumulative_lengths(self) -> list[float]:
        """Polyline arc length from the first candidate to each candidate."""
        if not self.candidates:
            return []
        lengths = [0.0]
        for a, b in zip(self.candidates, self.candidates[1:]):
            lengths.append(lengths[-1] + a.distance_to(b))
        return lengths

    @property
    def length(self) -> float:
        """Total polyline arc length of the chain."""
        lengths = self.cumulative_lengths()
        return lengths[-1] if lengths else 0.0


@dataclass(frozen=True, slots=True)
class LEDPosition:
    """A placed LED module.

    Attributes:
        x: Module center X
        y: Module center Y
        rotation: Rotation in degrees
        source: Whether the position was generated or placed by hand
        id: Optional stable identifier assigned by the caller
    """

    x: float
    y: float
    rotation: float
    source: PositionSource = PositionSource.AUTO
    id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC and persistence."""
        data: dict[str, Any] = {
            "x": self.x,
            "y": self.y,
            "rotation": self.rotation,
            "source": self.source.value,
        }
        if self.id is not None:
            data["id"] = self.id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LEDPosition":
        """Deserialize from dictionary."""
        return cls(
            x=data["x"],
            y=data["y"],
            rotation=data["rotation"],
            source=PositionSource(data.get("source", PositionSource.AUTO.value)),
            id=data.get("id"),
        )
