"""Exception hierarchy for LED Layout.

The placement and validation core never raises for degenerate geometry; these
exceptions cover input loading, catalog lookup and batch processing.
"""


class LedLayoutError(Exception):
    """Base exception for all LED Layout errors."""

    pass


class PathDataError(LedLayoutError):
    """SVG path data could not be parsed."""

    def __init__(self, path_data: str, reason: str) -> None:
        self.path_data = path_data
        self.reason = reason
        preview = path_data if len(path_data) <= 40 else path_data[:37] + "..."
        super().__init__(f"Invalid path data '{preview}': {reason}")


class FontError(LedLayoutError):
    """Errors related to reading glyph outlines from a font."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(FontError):
    """Requested character has no glyph in the font."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"No glyph for character {char!r} in font")


class CatalogLookupError(LedLayoutError):
    """Unknown module or power supply SKU."""

    def __init__(self, kind: str, sku: str) -> None:
        self.kind = kind
        self.sku = sku
        super().__init__(f"Unknown {kind} '{sku}'")


class CharacterPlacementError(LedLayoutError):
    """Placement failed for one character of a batch."""

    def __init__(self, char_id: str, reason: str) -> None:
        self.char_id = char_id
        self.reason = reason
        super().__init__(f"Placement failed for '{char_id}': {reason}")
