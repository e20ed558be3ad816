"""Column expansion for multi-column module layouts.

Each selected centerline point is expanded into up to five parallel
positions offset along the local normal. Columns are tried center-first so
the budget is spent on the positions most likely to fit.
"""

import math

from ledlayout.config import Orientation, PlacementTuning
from ledlayout.core.geometry import is_capsule_inside, is_point_inside
from ledlayout.domain import CenterCandidate, LEDPosition, Outline


def column_offsets(column_count: int) -> list[float]:
    """Symmetric column offsets in units of column spacing, center first.

    Examples:
        >>> column_offsets(3)
        [0.0, -1.0, 1.0]
        >>> column_offsets(2)
        [-0.5, 0.5]
    """
    offsets = [i - (column_count - 1) / 2 for i in range(column_count)]
    return sorted(offsets, key=abs)


def column_spacing(candidate: CenterCandidate, column_count: int, tuning: PlacementTuning) -> float:
    """Distance between neighbouring columns at a centerline point."""
    if column_count <= 1:
        return 0.0
    usable_width = max(
        tuning.module_render_height * tuning.min_usable_width_factor,
        candidate.local_width * tuning.usable_width_factor,
    )
    return usable_width / (column_count - 1)


def rotation_for(candidate: CenterCandidate, orientation: Orientation) -> float:
    """Module rotation in degrees for an orientation mode."""
    if orientation == Orientation.HORIZONTAL:
        return 0.0
    if orientation == Orientation.VERTICAL:
        return 90.0
    tx, ty = candidate.tangent
    return math.degrees(math.atan2(ty, tx))


def fit_column(
    outline: Outline,
    candidate: CenterCandidate,
    distance: float,
    rotation: float,
    tuning: PlacementTuning,
) -> tuple[float, float] | None:
    """Place one column position, shrinking toward the center if needed.

    Tries the full offset with a capsule of ``capsule_scale`` times half
    the render length. For a non-zero offset, retries at
    ``retry_offset_scale`` of the offset with a ``retry_capsule_scale``
    capsule. As a last resort the point itself only has to be inside, so
    narrow strokes still get modules even if the footprint grazes the edge.

    Returns:
        (x, y) of the placed position, or None if the point is outside
    """
    nx, ny = candidate.normal
    half_length = tuning.module_render_length / 2

    x = candidate.x + nx * distance
    y = candidate.y + ny * distance
    if is_capsule_inside(outline, x, y, rotation, half_length * tuning.capsule_scale):
        return x, y

    if abs(distance) > 1e-9:
        x = candidate.x + nx * distance * tuning.retry_offset_scale
        y = candidate.y + ny * distance * tuning.retry_offset_scale
        if is_capsule_inside(outline, x, y, rotation, half_length * tuning.retry_capsule_scale):
            return x, y

    if is_point_inside(outline, x, y):
        return x, y
    return None


def expand_columns(
    outline: Outline,
    base: list[CenterCandidate],
    column_count: int,
    orientation: Orientation,
    target_count: int,
    tuning: PlacementTuning,
) -> list[LEDPosition]:
    """Expand centerline points into column positions.

    Args:
        outline: Outline being filled
        base: Selected centerline points
        column_count: Columns per point (1-5)
        orientation: Rotation mode for the modules
        target_count: Hard cap on emitted positions
        tuning: Placement constants

    Returns:
        Positions in emission order: per base point, center column first
    """
    offsets = column_offsets(column_count)
    positions: list[LEDPosition] = []

    for candidate in base:
        rotation = rotation_for(candidate, orientation)
        spacing = column_spacing(candidate, column_count, tuning)
        for offset in offsets:
            if len(positions) >= target_count:
                return positions
            placed = fit_column(outline, candidate, offset * spacing, rotation, tuning)
            if placed is not None:
                positions.append(LEDPosition(x=placed[0], y=placed[1], rotation=rotation))

    return positions
