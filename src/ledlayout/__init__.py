"""LED Layout - Automatic LED module placement for channel-letter signage.

Given the outline of a glyph (a closed 2D path, possibly with holes) this
package computes evenly spaced LED module positions that lie inside the
filled interior of the shape, and validates free-hand edits to an outline
before they are accepted.

Example:
    >>> from ledlayout import generate_led_positions, parse_path_data
    >>> from ledlayout.catalog import get_module
    >>> from ledlayout.config import PlacementConfig
    >>> outline = parse_path_data("M0 0 H100 V100 H0 Z")
    >>> config = PlacementConfig(
    ...     target_module=get_module("tetra-max-small-24v"),
    ...     pixels_per_inch=12.5,
    ...     target_count=4,
    ...     orientation="horizontal",
    ... )
    >>> len(generate_led_positions(outline, config))
    4
"""

__version__ = "0.1.0"

from ledlayout.core.placement import generate_led_positions
from ledlayout.core.validator import validate_path_edit
from ledlayout.io.path_data import parse_path_data

__all__ = [
    "__version__",
    "generate_led_positions",
    "parse_path_data",
    "validate_path_edit",
]
