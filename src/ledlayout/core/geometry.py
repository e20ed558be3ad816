"""Geometry kernel shared by placement and validation.

This module provides the primitive queries every other component builds on:
- Point-in-fill testing (even-odd rule, boundary counts as inside)
- Distance to the stroke edge along a ray
- Capsule (module footprint) containment
- Orientation-based segment intersection

All functions are pure, stateless, and designed for use in parallel processing.
They return a definite value for any input, including empty outlines.
"""

import math

from ledlayout.domain import Outline, Point

# Points closer than this to an edge are treated as on the boundary.
BOUNDARY_TOLERANCE = 1e-6
_COLLINEAR_EPSILON = 1e-9


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value to the closed interval [low, high]."""
    return max(low, min(high, value))


def distance_to_segment(px: float, py: float, a: Point, b: Point) -> float:
    """Distance from (px, py) to the segment a-b."""
    dx = b.x - a.x
    dy = b.y - a.y
    length_sq = dx * dx + dy * dy
    if length_sq < 1e-18:
        return math.hypot(px - a.x, py - a.y)
    t = clamp(((px - a.x) * dx + (py - a.y) * dy) / length_sq, 0.0, 1.0)
    return math.hypot(px - (a.x + t * dx), py - (a.y + t * dy))


def is_point_inside(outline: Outline, x: float, y: float) -> bool:
    """Test whether a point lies in the filled region of an outline.

    Uses the even-odd rule over all contours so counters (holes) are
    excluded. Open contours are filled as if closed, matching SVG rendering.
    Points on the boundary count as inside so tangent conditions never
    produce false negatives.

    Args:
        outline: The outline to test against
        x: X coordinate of point to test
        y: Y coordinate of point to test

    Returns:
        True if the point is inside or on the boundary, False otherwise.
        Always False for empty outlines.

    Examples:
        >>> square = Outline.from_polygons([[(0, 0), (10, 0), (10, 10), (0, 10)]])
        >>> is_point_inside(square, 5, 5)
        True
        >>> is_point_inside(square, 10, 5)  # on the edge
        True
        >>> is_point_inside(square, 15, 5)
        False
    """
    inside = False
    for contour in outline.contours:
        pts = contour.points
        n = len(pts)
        if n == 0:
            continue
        if n < 3:
            # Degenerate contour: no area, but its edge still counts as boundary
            for a, b in zip(pts, pts[1:] or pts):
                if distance_to_segment(x, y, a, b) <= BOUNDARY_TOLERANCE:
                    return True
            continue

        j = n - 1
        for i in range(n):
            a = pts[j]
            b = pts[i]
            if distance_to_segment(x, y, a, b) <= BOUNDARY_TOLERANCE:
                return True
            # Check if ray from point to the right crosses edge (j, i)
            if (b.y > y) != (a.y > y) and x < (a.x - b.x) * (y - b.y) / (a.y - b.y) + b.x:
                inside = not inside
            j = i

    return inside


def find_distance_to_edge(
    outline: Outline,
    x: float,
    y: float,
    dir_x: float,
    dir_y: float,
    max_dist: float = 1000.0,
    march_step: float = 2.0,
    refine_iterations: int = 12,
) -> float:
    """Distance along a ray at which the point leaves the filled region.

    Marches linearly to find the first exit, then refines it by bisection.
    A pure bisection would skip over gaps in concave shapes (such as "S")
    and land in a different stroke.

    Args:
        outline: The outline to measure
        x: Ray origin X
        y: Ray origin Y
        dir_x: Ray direction X (normalized internally)
        dir_y: Ray direction Y (normalized internally)
        max_dist: Cap on the returned distance
        march_step: Linear march stride
        refine_iterations: Number of bisection steps

    Returns:
        Distance to the first outside point (approximate, slightly past the
        edge), ``max_dist`` if the ray never leaves the fill, and 0.0 when
        the origin is outside or the direction is degenerate.
    """
    length = math.hypot(dir_x, dir_y)
    if length < 1e-12 or max_dist <= 0 or march_step <= 0:
        return 0.0
    dir_x /= length
    dir_y /= length

    if not is_point_inside(outline, x, y):
        return 0.0

    first_outside = -1.0
    d = min(march_step, max_dist)
    while True:
        if not is_point_inside(outline, x + dir_x * d, y + dir_y * d):
            first_outside = d
            break
        if d >= max_dist:
            break
        d = min(d + march_step, max_dist)

    if first_outside < 0:
        return max_dist

    low = max(0.0, first_outside - march_step)
    high = first_outside
    for _ in range(refine_iterations):
        mid = (low + high) / 2
        if is_point_inside(outline, x + dir_x * mid, y + dir_y * mid):
            low = mid
        else:
            high = mid

    return high


def capsule_sample_points(
    x: float,
    y: float,
    rotation_degrees: float,
    half_length: float,
    radius: float = 0.0,
    segment_samples: int = 5,
) -> list[tuple[float, float]]:
    """Sample points covering a capsule footprint.

    The capsule is a segment of length ``2 * half_length`` centered at
    (x, y) and rotated by ``rotation_degrees``, swept by a disc of
    ``radius``. With radius 0 only the spine is sampled.
    """
    angle = math.radians(rotation_degrees)
    ux, uy = math.cos(angle), math.sin(angle)
    vx, vy = -uy, ux
    count = max(2, segment_samples)
    half_length = max(0.0, half_length)

    points: list[tuple[float, float]] = [(x, y)]
    for k in range(count):
        t = -half_length + 2 * half_length * k / (count - 1)
        sx, sy = x + ux * t, y + uy * t
        points.append((sx, sy))
        if radius > 0:
            points.append((sx + vx * radius, sy + vy * radius))
            points.append((sx - vx * radius, sy - vy * radius))
    if radius > 0:
        points.append((x + ux * (half_length + radius), y + uy * (half_length + radius)))
        points.append((x - ux * (half_length + radius), y - uy * (half_length + radius)))
    return points


def is_capsule_inside(
    outline: Outline,
    x: float,
    y: float,
    rotation_degrees: float,
    half_length: float,
    radius: float = 0.0,
) -> bool:
    """Check whether a rotated capsule footprint lies fully inside the fill.

    Args:
        outline: The outline to test against
        x: Capsule center X
        y: Capsule center Y
        rotation_degrees: Rotation of the capsule axis in degrees
        half_length: Half the spine length
        radius: End-cap radius (0 tests the spine only)

    Returns:
        True if every sampled point of the capsule is inside the fill
    """
    return all(
        is_point_inside(outline, px, py)
        for px, py in capsule_sample_points(x, y, rotation_degrees, half_length, radius)
    )


def orientation(a: Point, b: Point, c: Point) -> int:
    """Orientation of the ordered triple (a, b, c).

    Returns:
        0 if collinear, 1 if clockwise, 2 if counter-clockwise
    """
    value = (b.y - a.y) * (c.x - b.x) - (b.x - a.x) * (c.y - b.y)
    if abs(value) < _COLLINEAR_EPSILON:
        return 0
    return 1 if value > 0 else 2


def _on_segment(a: Point, b: Point, c: Point) -> bool:
    """Whether collinear point b lies within the box spanned by a and c."""
    return (
        b.x <= max(a.x, c.x) + _COLLINEAR_EPSILON
        and b.x + _COLLINEAR_EPSILON >= min(a.x, c.x)
        and b.y <= max(a.y, c.y) + _COLLINEAR_EPSILON
        and b.y + _COLLINEAR_EPSILON >= min(a.y, c.y)
    )


def segments_intersect(a1: Point, a2: Point, b1: Point, b2: Point) -> bool:
    """Test whether segments a1-a2 and b1-b2 intersect.

    Touching and collinear-overlapping segments count as intersecting.
    """
    o1 = orientation(a1, a2, b1)
    o2 = orientation(a1, a2, b2)
    o3 = orientation(b1, b2, a1)
    o4 = orientation(b1, b2, a2)

    if o1 != o2 and o3 != o4:
        return True
    if o1 == 0 and _on_segment(a1, b1, a2):
        return True
    if o2 == 0 and _on_segment(a1, b2, a2):
        return True
    if o3 == 0 and _on_segment(b1, a1, b2):
        return True
    return o4 == 0 and _on_segment(b1, a2, b2)


def polyline_has_self_intersection(points: list[Point], closed: bool) -> bool:
    """Check a polyline for crossings between non-adjacent segments."""
    segments = list(zip(points, points[1:]))
    if closed and len(points) > 2:
        segments.append((points[-1], points[0]))

    count = len(segments)
    for i in range(count):
        a1, a2 = segments[i]
        for j in range(i + 2, count):
            if closed and i == 0 and j == count - 1:
                continue
            b1, b2 = segments[j]
            if segments_intersect(a1, a2, b1, b2):
                return True
    return False
