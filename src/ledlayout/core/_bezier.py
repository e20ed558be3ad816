"""Internal Bezier curve flattening algorithms.

This is an internal module containing helpers for the path-data pen.
Not intended for public use.
"""

import math

Coord = tuple[float, float]

# Subdivision depth cap; 2**16 segments per curve is far beyond any glyph.
_MAX_DEPTH = 16


def _mid(a: Coord, b: Coord) -> Coord:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def flatten_quadratic(points: list[Coord], tolerance: float, _depth: int = 0) -> list[Coord]:
    """Flatten a quadratic Bezier curve using recursive subdivision.

    Args:
        points: List of 3 control points [p0, p1, p2]
        tolerance: Maximum distance between curve midpoint and chord midpoint

    Returns:
        List of points approximating the curve, endpoints included
    """
    p0, p1, p2 = points

    # Curve midpoint (t=0.5) against the chord midpoint
    curve_mid = (
        0.25 * p0[0] + 0.5 * p1[0] + 0.25 * p2[0],
        0.25 * p0[1] + 0.5 * p1[1] + 0.25 * p2[1],
    )
    chord_mid = _mid(p0, p2)
    distance = math.hypot(curve_mid[0] - chord_mid[0], curve_mid[1] - chord_mid[1])

    if distance <= tolerance or _depth >= _MAX_DEPTH:
        return [p0, p2]

    left = flatten_quadratic([p0, _mid(p0, p1), curve_mid], tolerance, _depth + 1)
    right = flatten_quadratic([curve_mid, _mid(p1, p2), p2], tolerance, _depth + 1)

    # Combine, avoiding duplicate midpoint
    return left[:-1] + right


def flatten_cubic(points: list[Coord], tolerance: float, _depth: int = 0) -> list[Coord]:
    """Flatten a cubic Bezier curve using recursive subdivision.

    Uses De Casteljau's algorithm for subdivision.

    Args:
        points: List of 4 control points [p0, p1, p2, p3]
        tolerance: Maximum distance between curve midpoint and chord midpoint

    Returns:
        List of points approximating the curve, endpoints included
    """
    p0, p1, p2, p3 = points

    # First level
    q1 = _mid(p0, p1)
    q2 = _mid(p1, p2)
    q3 = _mid(p2, p3)

    # Second level
    r1 = _mid(q1, q2)
    r2 = _mid(q2, q3)

    # Third level (curve midpoint)
    mid = _mid(r1, r2)

    chord_mid = _mid(p0, p3)
    distance = math.hypot(mid[0] - chord_mid[0], mid[1] - chord_mid[1])

    # An S-curve can have its midpoint on the chord; control points must be near it too.
    control_spread = max(
        _distance_to_line(p1, p0, p3),
        _distance_to_line(p2, p0, p3),
    )

    if (distance <= tolerance and control_spread <= tolerance * 4) or _depth >= _MAX_DEPTH:
        return [p0, p3]

    left = flatten_cubic([p0, q1, r1, mid], tolerance, _depth + 1)
    right = flatten_cubic([mid, r2, q3, p3], tolerance, _depth + 1)

    return left[:-1] + right


def _distance_to_line(p: Coord, a: Coord, b: Coord) -> float:
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length = math.hypot(dx, dy)
    if length < 1e-12:
        return math.hypot(p[0] - a[0], p[1] - a[1])
    return abs(dx * (a[1] - p[1]) - dy * (a[0] - p[0])) / length
