"""Domain models for LED Layout.

Outlines, placement intermediates, LED positions and validation results.
Models are:

- Immutable where possible (using frozen dataclasses)
- Serializable for inter-process communication (parallel processing)
- Plain polygons; fontTools only appears as a pen target

Key classes:
- Point, BoundingBox: Basic geometry
- Contour, Outline: Flattened glyph boundaries
- CenterCandidate, CandidateSet, Chain: Placement intermediates
- LEDPosition: Final module placement
- PathEditValidationResult: Outcome of a path edit check
"""

from ledlayout.domain.outline import BoundingBox, Contour, Outline, Point
from ledlayout.domain.placement import (
    CandidateSet,
    CenterCandidate,
    Chain,
    LEDPosition,
    PositionSource,
)
from ledlayout.domain.validation import (
    PathEditValidationResult,
    PathMetrics,
    RejectReason,
    Severity,
)

__all__: list[str] = [
    # Enums
    "PositionSource",
    "RejectReason",
    "Severity",
    # Geometry
    "BoundingBox",
    "Contour",
    "Outline",
    "Point",
    # Placement
    "CandidateSet",
    "CenterCandidate",
    "Chain",
    "LEDPosition",
    # Validation
    "PathEditValidationResult",
    "PathMetrics",
]
