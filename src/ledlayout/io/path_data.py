"""SVG path data <-> Outline conversion.

Path data is parsed with fontTools' SVG path parser, which resolves relative
commands, smooth curves and arcs, and drives a pen. ``OutlinePen`` flattens
the curves it receives into polyline contours.
"""

import math

from fontTools.pens.basePen import BasePen
from fontTools.pens.boundsPen import BoundsPen
from fontTools.svgLib.path import parse_path

from ledlayout.core._bezier import flatten_cubic, flatten_quadratic
from ledlayout.domain import BoundingBox, Contour, Outline, Point
from ledlayout.exceptions import PathDataError

DEFAULT_FLATTEN_TOLERANCE = 0.25


class OutlinePen(BasePen):
    """Pen that records flattened contours.

    Works with any fontTools drawing source: the SVG path parser, font
    glyphs (pass the glyph set so components decompose), or another
    Outline's ``draw`` method.

    Example:
        pen = OutlinePen()
        parse_path("M0 0 Q50 -40 100 0 Z", pen)
        outline = pen.outline
    """

    def __init__(self, glyphSet=None, tolerance: float = DEFAULT_FLATTEN_TOLERANCE) -> None:
        super().__init__(glyphSet)
        self.tolerance = tolerance
        self._contours: list[Contour] = []
        self._current: list[tuple[float, float]] = []

    def _moveTo(self, pt):
        self._flush(closed=False)
        self._current = [(float(pt[0]), float(pt[1]))]

    def _lineTo(self, pt):
        self._append(pt)

    def _curveToOne(self, pt1, pt2, pt3):
        start = self._getCurrentPoint()
        for point in flatten_cubic([start, pt1, pt2, pt3], self.tolerance)[1:]:
            self._append(point)

    def _qCurveToOne(self, pt1, pt2):
        start = self._getCurrentPoint()
        for point in flatten_quadratic([start, pt1, pt2], self.tolerance)[1:]:
            self._append(point)

    def _closePath(self):
        self._flush(closed=True)

    def _endPath(self):
        self._flush(closed=False)

    def _append(self, pt) -> None:
        pt = (float(pt[0]), float(pt[1]))
        if self._current and self._current[-1] == pt:
            return
        self._current.append(pt)

    def _flush(self, closed: bool) -> None:
        points = self._current
        self._current = []
        if not points:
            return
        if closed and len(points) > 1 and points[-1] == points[0]:
            points = points[:-1]
        self._contours.append(
            Contour(points=tuple(Point(x, y) for x, y in points), closed=closed)
        )

    @property
    def outline(self) -> Outline:
        """The outline drawn so far (a dangling sub-path is kept open)."""
        self._flush(closed=False)
        return Outline(contours=tuple(self._contours))


def parse_path_data(path_data: str, tolerance: float = DEFAULT_FLATTEN_TOLERANCE) -> Outline:
    """Parse SVG path data into a flattened Outline.

    Args:
        path_data: SVG ``d`` attribute, e.g. "M0 0 H100 V100 H0 Z"
        tolerance: Curve flattening tolerance in path units

    Returns:
        Outline (empty for blank path data)

    Raises:
        PathDataError: If the path data is malformed or has coordinates
            that overflow to infinity
    """
    pen = OutlinePen(tolerance=tolerance)
    try:
        parse_path(path_data, pen)
    except (ValueError, IndexError) as e:
        raise PathDataError(path_data, str(e) or type(e).__name__) from e
    outline = pen.outline
    for contour in outline.contours:
        if not all(math.isfinite(p.x) and math.isfinite(p.y) for p in contour.points):
            raise PathDataError(path_data, "non-finite coordinate")
    return outline


def path_bounds(path_data: str) -> BoundingBox | None:
    """Exact bounding box of SVG path data, including curve extrema.

    Returns:
        BoundingBox, or None for empty or unparseable path data
    """
    pen = BoundsPen(None)
    try:
        parse_path(path_data, pen)
    except (ValueError, IndexError):
        return None
    if pen.bounds is None:
        return None
    x_min, y_min, x_max, y_max = pen.bounds
    return BoundingBox(x_min, y_min, x_max - x_min, y_max - y_min)
