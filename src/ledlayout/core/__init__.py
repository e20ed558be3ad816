"""Core algorithms for ledlayout.

This module contains the core algorithms for:

- Geometry operations (point-in-fill, edge distance, capsule containment)
- Centerline candidate generation
- Chain building, count allocation and even subsampling
- Column expansion
- Path edit validation
- Placement quality metrics and electrical figures

All algorithm functions are designed to be:
- Stateless (safe for use in worker processes)
- Pure (no side effects, no logging)
- Deterministic (same input, same output)

Key functions:
- generate_led_positions: Place modules inside an outline
- validate_path_edit: Gate a free-hand outline edit
- evaluate_placement_quality: Score a finished layout
- calculate_power_load: Wattage and current of a module count

Key classes:
- LayoutProcessor: Places many characters in parallel
"""

from ledlayout.core.candidates import generate_candidates
from ledlayout.core.chains import (
    allocate_chain_counts,
    allocate_counts,
    build_chains,
    pick_evenly,
)
from ledlayout.core.columns import column_offsets, expand_columns
from ledlayout.core.engineering import (
    BOMItem,
    PowerAnalysis,
    calculate_power_load,
    generate_bom,
    power_supply_quantity,
    recommend_power_supply,
)
from ledlayout.core.geometry import (
    find_distance_to_edge,
    is_capsule_inside,
    is_point_inside,
)
from ledlayout.core.placement import (
    PlacementReport,
    derive_target_count,
    generate_led_positions,
    place_outline,
)
from ledlayout.core.processor import CharacterLayout, LayoutProcessor, place_character
from ledlayout.core.quality import (
    PlacementQuality,
    QualityThresholds,
    evaluate_placement_quality,
    grade_placement,
)
from ledlayout.core.validator import validate_path_edit

__all__ = [
    "BOMItem",
    "CharacterLayout",
    "LayoutProcessor",
    "PlacementQuality",
    "PlacementReport",
    "PowerAnalysis",
    "QualityThresholds",
    "allocate_chain_counts",
    "allocate_counts",
    "build_chains",
    "calculate_power_load",
    "column_offsets",
    "derive_target_count",
    "evaluate_placement_quality",
    "expand_columns",
    "find_distance_to_edge",
    "generate_bom",
    "generate_candidates",
    "generate_led_positions",
    "grade_placement",
    "is_capsule_inside",
    "is_point_inside",
    "pick_evenly",
    "place_character",
    "place_outline",
    "power_supply_quantity",
    "recommend_power_supply",
    "validate_path_edit",
]
