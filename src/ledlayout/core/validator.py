"""Safety gate for free-hand outline edits.

A proposed path replaces a character's outline only if it passes a short
series of checks, evaluated in order; the first one that fails decides the
result:

1. Blank or zero-area path data is degenerate (always an error).
2. Escaping the base bounding box by more than a margin is a warning
   (an error in strict mode).
3. Any contour crossing itself is a warning (an error in strict mode).
4. A large jump in total length, or a single very long segment, is a
   curvature spike. Extreme spikes are errors even in lenient mode.
"""

import math
from dataclasses import dataclass

from ledlayout.config import ValidationOptions
from ledlayout.core.geometry import clamp, polyline_has_self_intersection
from ledlayout.domain import (
    BoundingBox,
    Contour,
    PathEditValidationResult,
    PathMetrics,
    Point,
    RejectReason,
    Severity,
)
from ledlayout.exceptions import PathDataError
from ledlayout.io.path_data import parse_path_data, path_bounds

_DUPLICATE_EPSILON = 1e-5


@dataclass(frozen=True)
class SegmentStats:
    """Length statistics of a sampled polyline."""

    total: float = 0.0
    max_segment: float = 0.0
    median_segment: float = 0.0


def sample_contour_points(contour: Contour, options: ValidationOptions) -> list[Point]:
    """Resample a contour at uniform arc-length spacing.

    The sample count is ``length / sample_spacing`` clamped to
    ``[min_samples, max_samples]``. Near-coincident samples are dropped, as
    is the wrap-around sample of a closed contour. Contours of zero or
    non-finite length return their vertices unchanged.
    """
    length = contour.length
    if not 0 < length < math.inf:
        return list(contour.points)

    count = int(clamp(math.ceil(length / options.sample_spacing), options.min_samples, options.max_samples))
    last = count if not contour.closed else count - 1
    sampled: list[Point] = []
    for i in range(last + 1):
        point = contour.point_at(length * i / count)
        if sampled and sampled[-1].distance_to(point) < _DUPLICATE_EPSILON:
            continue
        sampled.append(point)

    if contour.closed and len(sampled) > 1 and sampled[-1].distance_to(sampled[0]) < _DUPLICATE_EPSILON:
        sampled.pop()
    return sampled if len(sampled) > 1 else list(contour.points)


def segment_stats(points: list[Point], closed: bool) -> SegmentStats:
    """Total, longest and median segment length of a polyline."""
    if len(points) < 2:
        return SegmentStats()
    lengths = [a.distance_to(b) for a, b in zip(points, points[1:])]
    if closed and len(points) > 2:
        lengths.append(points[-1].distance_to(points[0]))
    ordered = sorted(lengths)
    return SegmentStats(
        total=sum(lengths),
        max_segment=ordered[-1],
        median_segment=ordered[len(ordered) // 2],
    )


def escapes_bounds(candidate: BoundingBox, base: BoundingBox, options: ValidationOptions) -> bool:
    """True if ``candidate`` reaches past ``base`` grown by the escape margin."""
    margin = max(options.bbox_margin_min, base.diagonal * options.bbox_margin_ratio)
    return (
        candidate.x < base.x - margin
        or candidate.y < base.y - margin
        or candidate.max_x > base.max_x + margin
        or candidate.max_y > base.max_y + margin
    )


def _contours_or_none(path_data: str) -> tuple[Contour, ...] | None:
    try:
        return parse_path_data(path_data).contours
    except PathDataError:
        return None


def validate_path_edit(
    previous_path_data: str,
    candidate_path_data: str,
    base_bbox: BoundingBox | None = None,
    options: ValidationOptions | None = None,
) -> PathEditValidationResult:
    """Decide whether a proposed outline may replace the current one.

    Args:
        previous_path_data: Path data of the outline being edited
        candidate_path_data: Proposed replacement path data
        base_bbox: Bounding box the edit should stay within; also used when
            the candidate's own bounds cannot be computed
        options: Thresholds and strict mode (defaults if None)

    Returns:
        PathEditValidationResult; ``ok`` is False only for ERROR severity
    """
    options = options or ValidationOptions()
    lenient = Severity.ERROR if options.strict else Severity.WARN

    if not candidate_path_data.strip():
        return PathEditValidationResult.of(Severity.ERROR, RejectReason.DEGENERATE_SEGMENT)

    bbox = path_bounds(candidate_path_data) or base_bbox
    if (
        bbox is None
        or not math.isfinite(bbox.width)
        or not math.isfinite(bbox.height)
        or bbox.width < options.min_bbox_extent
        or bbox.height < options.min_bbox_extent
    ):
        return PathEditValidationResult.of(Severity.ERROR, RejectReason.DEGENERATE_SEGMENT)

    if base_bbox is not None and escapes_bounds(bbox, base_bbox, options):
        return PathEditValidationResult.of(lenient, RejectReason.BBOX_ESCAPE)

    contours = _contours_or_none(candidate_path_data)
    if not contours:
        return PathEditValidationResult.of(Severity.ERROR, RejectReason.DEGENERATE_SEGMENT)
    previous_contours = _contours_or_none(previous_path_data) or ()

    candidate_total = 0.0
    previous_total = 0.0
    candidate_max = 0.0
    previous_median = 0.0

    for i, contour in enumerate(contours):
        sampled = sample_contour_points(contour, options)
        if len(sampled) < 3:
            return PathEditValidationResult.of(Severity.ERROR, RejectReason.DEGENERATE_SEGMENT)
        if polyline_has_self_intersection(sampled, contour.closed):
            return PathEditValidationResult.of(
                lenient,
                RejectReason.SELF_INTERSECTION,
                PathMetrics(contour_count=len(contours)),
            )
        stats = segment_stats(sampled, contour.closed)
        candidate_total += stats.total
        candidate_max = max(candidate_max, stats.max_segment)

        # Contours are paired with the previous outline by index.
        if i < len(previous_contours):
            previous = previous_contours[i]
            previous_stats = segment_stats(sample_contour_points(previous, options), previous.closed)
            previous_total += previous_stats.total
            previous_median = max(previous_median, previous_stats.median_segment)

    metrics = PathMetrics(
        candidate_length=candidate_total,
        previous_length=previous_total,
        max_segment=candidate_max,
        previous_median_segment=previous_median,
        contour_count=len(contours),
    )

    if previous_total > 0 and candidate_total > previous_total * options.length_ratio_limit:
        return PathEditValidationResult.of(lenient, RejectReason.CURVATURE_SPIKE, metrics)

    threshold = max(previous_median * options.median_segment_factor, bbox.diagonal * options.diagonal_factor)
    if candidate_max > threshold:
        ratio = candidate_max / threshold if threshold > 0 else 0.0
        severity = Severity.ERROR if ratio > options.severe_spike_ratio else lenient
        return PathEditValidationResult.of(severity, RejectReason.CURVATURE_SPIKE, metrics)

    return PathEditValidationResult.of(Severity.OK, None, metrics)
