"""Glyph outlines from TTF/OTF fonts.

Glyphs are drawn through a TransformPen that scales font units to pixels and
flips the y axis, so outlines come out in SVG (y-down) space with the top of
the ascender at y = 0.
"""

from pathlib import Path

from fontTools.pens.transformPen import TransformPen
from fontTools.ttLib import TTFont, TTLibError

from ledlayout.domain import Outline
from ledlayout.exceptions import FontLoadError, GlyphNotFoundError
from ledlayout.io.path_data import DEFAULT_FLATTEN_TOLERANCE, OutlinePen


class GlyphOutlineSource:
    """Reads character outlines from a font file.

    Example:
        with GlyphOutlineSource(Path("font.ttf")) as source:
            outline = source.outline_for_char("A", size_px=200)
    """

    def __init__(self, font_path: Path, tolerance: float = DEFAULT_FLATTEN_TOLERANCE) -> None:
        """Open the font.

        Args:
            font_path: Path to the TTF or OTF font file
            tolerance: Curve flattening tolerance in pixels

        Raises:
            FontLoadError: If the file is missing or not a font
        """
        self._font_path = font_path
        self.tolerance = tolerance
        if not font_path.exists():
            raise FontLoadError(str(font_path), "file not found")
        try:
            self._font = TTFont(str(font_path))
            self._cmap = self._font.getBestCmap() or {}
        except (TTLibError, OSError, KeyError) as e:
            raise FontLoadError(str(font_path), str(e)) from e
        self._glyph_set = self._font.getGlyphSet()

    def __enter__(self) -> "GlyphOutlineSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._font.close()

    @property
    def units_per_em(self) -> int:
        return self._font["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def ascender(self) -> int:
        return self._font["hhea"].ascent  # type: ignore[attr-defined]

    def glyph_name(self, char: str) -> str:
        """Glyph name mapped to a character.

        Raises:
            GlyphNotFoundError: If the font has no glyph for the character
        """
        name = self._cmap.get(ord(char))
        if name is None:
            raise GlyphNotFoundError(char)
        return name

    def advance_width(self, char: str, size_px: float) -> float:
        """Horizontal advance of a character in pixels."""
        advance, _ = self._font["hmtx"][self.glyph_name(char)]
        return advance * size_px / self.units_per_em

    def outline_for_char(self, char: str, size_px: float) -> Outline:
        """Flattened outline of a character at an em size in pixels.

        Args:
            char: Single character
            size_px: Em size in pixels

        Returns:
            Outline in y-down pixel space (empty for blank glyphs like space)

        Raises:
            GlyphNotFoundError: If the font has no glyph for the character
        """
        name = self.glyph_name(char)
        scale = size_px / self.units_per_em
        pen = OutlinePen(self._glyph_set, tolerance=self.tolerance)
        transform = (scale, 0, 0, -scale, 0, self.ascender * scale)
        self._glyph_set[name].draw(TransformPen(pen, transform))
        return pen.outline
