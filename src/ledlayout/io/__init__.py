"""Outline providers.

- parse_path_data / path_bounds: SVG path data in, Outline or bounds out
- OutlinePen: fontTools pen that records flattened contours
- GlyphOutlineSource: character outlines from a TTF/OTF font
"""

from ledlayout.io.glyph_source import GlyphOutlineSource
from ledlayout.io.path_data import (
    DEFAULT_FLATTEN_TOLERANCE,
    OutlinePen,
    parse_path_data,
    path_bounds,
)

__all__ = [
    "DEFAULT_FLATTEN_TOLERANCE",
    "GlyphOutlineSource",
    "OutlinePen",
    "parse_path_data",
    "path_bounds",
]
