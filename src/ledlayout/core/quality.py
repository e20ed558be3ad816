"""Placement quality metrics.

Scores a finished layout on containment, clearance from the outline edge,
how centered each module sits across its stroke, and how even the spacing
between neighbours is.
"""

import math
import statistics
from dataclasses import asdict, dataclass, field
from typing import Any

from ledlayout.core.geometry import find_distance_to_edge, is_capsule_inside
from ledlayout.domain import LEDPosition, Outline

DEFAULT_RENDER_LENGTH = 12.0


@dataclass(frozen=True)
class PlacementQuality:
    """Aggregate quality figures for one layout.

    Attributes:
        inside_rate: Fraction of modules whose capsule footprint is inside
        min_clearance: Smallest axis-aligned distance from a module to the edge
        mean_clearance: Mean of the per-module clearances
        symmetry_mean: Mean centering score (1.0 = perfectly centered)
        nn_mean: Mean nearest-neighbour distance
        nn_cv: Coefficient of variation of nearest-neighbour distances
        count: Number of modules evaluated
    """

    inside_rate: float = 0.0
    min_clearance: float = 0.0
    mean_clearance: float = 0.0
    symmetry_mean: float = 0.0
    nn_mean: float = 0.0
    nn_cv: float = 0.0
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class QualityThresholds:
    """Pass/fail limits used by ``grade_placement``."""

    inside_rate: float = 0.98
    min_clearance: float = 0.6
    symmetry_mean: float = 0.45
    nn_cv: float = 0.45


@dataclass(frozen=True)
class QualityGrade:
    passed: bool
    failures: list[str] = field(default_factory=list)


def _axis_symmetry(a: float, b: float) -> float:
    total = a + b
    if total <= 0:
        return 0.0
    return 1 - abs(a - b) / total


def nearest_neighbor_distances(positions: list[LEDPosition]) -> list[float]:
    """Distance from each position to its closest other position."""
    distances = []
    for i, a in enumerate(positions):
        best = min(
            (math.hypot(a.x - b.x, a.y - b.y) for j, b in enumerate(positions) if j != i),
            default=None,
        )
        if best is not None:
            distances.append(best)
    return distances


def evaluate_placement_quality(
    outline: Outline,
    positions: list[LEDPosition],
    render_length: float = DEFAULT_RENDER_LENGTH,
) -> PlacementQuality:
    """Measure a layout against its outline.

    Args:
        outline: Outline the modules were placed in
        positions: Module positions
        render_length: Module footprint length used for the capsule test

    Returns:
        PlacementQuality (all zeros for an empty layout)
    """
    if not positions:
        return PlacementQuality()

    bbox = outline.bounding_box()
    max_dist = max(bbox.width, bbox.height) * 1.5 + 20

    inside = 0
    clearances = []
    symmetries = []
    for led in positions:
        if is_capsule_inside(outline, led.x, led.y, led.rotation, render_length / 2):
            inside += 1

        right = find_distance_to_edge(outline, led.x, led.y, 1, 0, max_dist)
        left = find_distance_to_edge(outline, led.x, led.y, -1, 0, max_dist)
        down = find_distance_to_edge(outline, led.x, led.y, 0, 1, max_dist)
        up = find_distance_to_edge(outline, led.x, led.y, 0, -1, max_dist)

        clearances.append(min(right, left, down, up))
        symmetries.append(max(_axis_symmetry(right, left), _axis_symmetry(down, up)))

    nn = nearest_neighbor_distances(positions)
    nn_mean = statistics.fmean(nn) if nn else 0.0
    nn_std = statistics.pstdev(nn) if nn else 0.0

    return PlacementQuality(
        inside_rate=inside / len(positions),
        min_clearance=min(clearances),
        mean_clearance=statistics.fmean(clearances),
        symmetry_mean=statistics.fmean(symmetries),
        nn_mean=nn_mean,
        nn_cv=nn_std / nn_mean if nn_mean > 0 else 0.0,
        count=len(positions),
    )


def grade_placement(
    quality: PlacementQuality,
    thresholds: QualityThresholds | None = None,
) -> QualityGrade:
    """Compare quality figures against thresholds.

    Returns:
        QualityGrade listing every failed threshold as a short message
    """
    thresholds = thresholds or QualityThresholds()
    failures = []

    if quality.inside_rate < thresholds.inside_rate:
        failures.append(f"inside_rate < {thresholds.inside_rate:.2f}")
    if quality.min_clearance < thresholds.min_clearance:
        failures.append(f"min_clearance < {thresholds.min_clearance:.2f}")
    if quality.symmetry_mean < thresholds.symmetry_mean:
        failures.append(f"symmetry_mean < {thresholds.symmetry_mean:.2f}")
    if quality.nn_cv > thresholds.nn_cv:
        failures.append(f"nn_cv > {thresholds.nn_cv:.2f}")

    return QualityGrade(passed=not failures, failures=failures)
