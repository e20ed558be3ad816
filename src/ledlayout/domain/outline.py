"""Core geometric types for outline representation.

This module defines the fundamental geometric types used throughout LED Layout:
- Point: A 2D point
- BoundingBox: Axis-aligned box derived from an outline
- Contour: A flattened polyline, usually closed
- Outline: The boundary of a filled region, made of one or more contours

Outlines live in SVG user space (y grows downwards). They are immutable and
are regenerated whenever the source glyph or a user edit changes.
"""

import math
from bisect import bisect_right
from dataclasses import dataclass
from functools import cached_property
from typing import Any

from fontTools.pens.svgPathPen import SVGPathPen


def _format_number(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in outline units
        y: Y coordinate in outline units
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary."""
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        x: Left edge
        y: Top edge (SVG space)
        width: Horizontal extent
        height: Vertical extent
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def diagonal(self) -> float:
        return math.hypot(self.width, self.height)

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, x: float, y: float) -> bool:
        """Check whether a point lies inside the box (edges included)."""
        return self.x <= x <= self.max_x and self.y <= y <= self.max_y

    @classmethod
    def from_points(cls, points: list[Point]) -> "BoundingBox | None":
        """Bounding box of a point cloud, or None when there are no points."""
        if not points:
            return None
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BoundingBox":
        return cls(x=data["x"], y=data["y"], width=data["width"], height=data["height"])


@dataclass(frozen=True)
class Contour:
    """A flattened polyline forming part of an outline boundary.

    Closed contours have an implicit edge from the last point back to the
    first; the first point is not repeated at the end.

    Attributes:
        points: Vertices in drawing order
        closed: Whether the contour wraps around
    """

    points: tuple[Point, ...]
    closed: bool = True

    @cached_property
    def cumulative_lengths(self) -> tuple[float, ...]:
        """Arc length from the first vertex to each vertex.

        For closed contours an extra trailing entry holds the full perimeter
        (the distance back to the first vertex).
        """
        if not self.points:
            return ()
        lengths = [0.0]
        for a, b in zip(self.points, self.points[1:]):
            lengths.append(lengths[-1] + a.distance_to(b))
        if self.closed and len(self.points) > 1:
            lengths.append(lengths[-1] + self.points[-1].distance_to(self.points[0]))
        return tuple(lengths)

    @property
    def length(self) -> float:
        """Total arc length (perimeter for closed contours)."""
        lengths = self.cumulative_lengths
        return lengths[-1] if lengths else 0.0

    def segments(self) -> list[tuple[Point, Point]]:
        """Edges of the contour, including the closing edge."""
        pts = self.points
        edges = list(zip(pts, pts[1:]))
        if self.closed and len(pts) > 2:
            edges.append((pts[-1], pts[0]))
        return edges

    def signed_area(self) -> float:
        """Signed area using the shoelace formula (0.0 for open contours)."""
        n = len(self.points)
        if n < 3 or not self.closed:
            return 0.0
        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y
        return area / 2.0

    def point_at(self, distance: float) -> Point:
        """Point at an arc distance from the first vertex.

        Distances wrap around closed contours and are clamped on open ones.
        """
        if not self.points:
            raise ValueError("Cannot sample an empty contour")
        total = self.length
        if total <= 0:
            return self.points[0]
        if self.closed:
            distance %= total
        else:
            distance = min(max(distance, 0.0), total)

        lengths = self.cumulative_lengths
        i = min(bisect_right(lengths, distance) - 1, len(lengths) - 2)
        a = self.points[i]
        b = self.points[(i + 1) % len(self.points)]
        seg = lengths[i + 1] - lengths[i]
        if seg <= 0:
            return a
        t = (distance - lengths[i]) / seg
        return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)

    def tangent_at(self, distance: float, delta: float) -> tuple[float, float] | None:
        """Unit tangent by central finite difference, None if degenerate."""
        before = self.point_at(distance - delta)
        after = self.point_at(distance + delta)
        dx = after.x - before.x
        dy = after.y - before.y
        length = math.hypot(dx, dy)
        if length < 1e-12:
            return None
        return dx / length, dy / length

    def to_dict(self) -> dict[str, Any]:
        return {"points": [p.to_dict() for p in self.points], "closed": self.closed}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        return cls(
            points=tuple(Point.from_dict(p) for p in data["points"]),
            closed=data.get("closed", True),
        )


@dataclass(frozen=True)
class Outline:
    """The closed boundary of a filled glyph region.

    An outline may hold several contours: disjoint strokes (the dot and stem
    of "i") and holes (the counter of "o"). Fill is decided with the even-odd
    rule across all contours.

    Attributes:
        contours: Contours in drawing order
    """

    contours: tuple[Contour, ...] = ()

    @classmethod
    def from_polygons(cls, polygons: list[list[tuple[float, float]]]) -> "Outline":
        """Build an outline from closed polygons given as coordinate lists."""
        return cls(
            contours=tuple(
                Contour(points=tuple(Point(x, y) for x, y in polygon))
                for polygon in polygons
                if polygon
            )
        )

    @cached_property
    def _contour_offsets(self) -> tuple[float, ...]:
        offsets = [0.0]
        for contour in self.contours:
            offsets.append(offsets[-1] + contour.length)
        return tuple(offsets)

    @property
    def arc_length(self) -> float:
        """Total length of all contours (sub-path jumps not included)."""
        return self._contour_offsets[-1]

    def is_empty(self) -> bool:
        """True for outlines without measurable length (e.g. a space).

        Outlines whose length overflows to infinity count as empty too.
        """
        return not 0 < self.arc_length < math.inf

    def bounding_box(self) -> BoundingBox:
        """Bounding box of all vertices (zero box when empty)."""
        points = [p for contour in self.contours for p in contour.points]
        return BoundingBox.from_points(points) or BoundingBox(0.0, 0.0, 0.0, 0.0)

    def locate(self, distance: float) -> tuple[Contour, float]:
        """Map a global arc distance to a contour and a local distance."""
        offsets = self._contour_offsets
        distance = min(max(distance, 0.0), self.arc_length)
        i = min(bisect_right(offsets, distance) - 1, len(self.contours) - 1)
        # skip zero-length contours sharing this offset
        while i < len(self.contours) - 1 and self.contours[i].length <= 0:
            i += 1
        return self.contours[i], distance - offsets[i]

    def sample(
        self, distance: float, delta: float
    ) -> tuple[Point, tuple[float, float]] | None:
        """Point and unit tangent at a global arc distance.

        The tangent is measured within the owning contour so the finite
        difference never spans two contours.

        Returns:
            (point, tangent), or None when the outline is empty or the
            tangent is degenerate
        """
        if self.is_empty():
            return None
        contour, local = self.locate(distance)
        tangent = contour.tangent_at(local, delta)
        if tangent is None:
            return None
        return contour.point_at(local), tangent

    def draw(self, pen: Any) -> None:
        """Replay the outline into a fontTools pen."""
        for contour in self.contours:
            if not contour.points:
                continue
            first, *rest = contour.points
            pen.moveTo(first.to_tuple())
            for point in rest:
                pen.lineTo(point.to_tuple())
            if contour.closed:
                pen.closePath()
            else:
                pen.endPath()

    def to_path_data(self) -> str:
        """Serialize to SVG path data."""
        pen = SVGPathPen(None, ntos=_format_number)
        self.draw(pen)
        return pen.getCommands()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC."""
        return {"contours": [c.to_dict() for c in self.contours]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Outline":
        """Deserialize from dictionary."""
        return cls(contours=tuple(Contour.from_dict(c) for c in data["contours"]))
