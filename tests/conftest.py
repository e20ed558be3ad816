"""Shared fixtures: simple outlines, placement configurations and a test font."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from ledlayout.catalog import get_module
from ledlayout.config import Orientation, PlacementConfig
from ledlayout.domain import Outline

SHAPE_PATHS = {
    "square": "M0 0 H100 V100 H0 Z",
    "wide_bar": "M0 0 H400 V60 H0 Z",
    # Stem and dot of a lowercase "i"
    "letter_i": "M0 40 H20 V140 H0 Z M0 0 H20 V20 H0 Z",
    # Square ring: outer 0..100, counter 30..70
    "ring": "M0 0 H100 V100 H0 Z M30 30 H70 V70 H30 Z",
    "figure_eight": "M0 0 L100 100 L100 0 L0 100 Z",
}


@pytest.fixture
def shape_paths() -> dict[str, str]:
    """SVG path data for the shared test shapes."""
    return dict(SHAPE_PATHS)


@pytest.fixture
def square() -> Outline:
    """100 x 100 square."""
    return Outline.from_polygons([[(0, 0), (100, 0), (100, 100), (0, 100)]])


@pytest.fixture
def ring() -> Outline:
    """Square with a square counter."""
    return Outline.from_polygons([
        [(0, 0), (100, 0), (100, 100), (0, 100)],
        [(30, 30), (70, 30), (70, 70), (30, 70)],
    ])


@pytest.fixture
def make_config():
    """Factory for placement configurations."""

    def _make(
        target_count: int | None = 4,
        column_count: int = 1,
        orientation: Orientation = Orientation.HORIZONTAL,
        module: str = "tetra-max-small-24v",
        pixels_per_inch: float = 12.5,
    ) -> PlacementConfig:
        return PlacementConfig(
            target_module=get_module(module),
            pixels_per_inch=pixels_per_inch,
            target_count=target_count,
            column_count=column_count,
            orientation=orientation,
        )

    return _make


def _draw_rect(pen, x0: float, y0: float, x1: float, y1: float) -> None:
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()


@pytest.fixture(scope="session")
def test_font_path(tmp_path_factory) -> Path:
    """Minimal TrueType font: "I" is a bar, "o" a square ring, plus a blank space.

    Units per em 1000, ascender 800. At a 100 px em the "I" spans
    x 10..30 and y 10..80 in y-down pixel space.
    """
    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder([".notdef", "space", "I", "o"])
    builder.setupCharacterMap({ord(" "): "space", ord("I"): "I", ord("o"): "o"})

    pen = TTGlyphPen(None)
    _draw_rect(pen, 100, 0, 300, 700)
    glyph_i = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_rect(pen, 50, 0, 550, 500)
    _draw_rect(pen, 450, 100, 150, 400)
    glyph_o = pen.glyph()

    builder.setupGlyf({
        ".notdef": TTGlyphPen(None).glyph(),
        "space": TTGlyphPen(None).glyph(),
        "I": glyph_i,
        "o": glyph_o,
    })
    builder.setupHorizontalMetrics({
        ".notdef": (500, 0),
        "space": (250, 0),
        "I": (400, 100),
        "o": (600, 50),
    })
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": "LayoutTest", "styleName": "Regular"})
    builder.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    builder.setupPost()

    path = tmp_path_factory.mktemp("fonts") / "LayoutTest.ttf"
    builder.save(str(path))
    return path
