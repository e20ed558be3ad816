"""Automatic LED module placement.

Pipeline (one direction only):
    outline -> centerline candidates -> chains -> length-proportional
    allocation -> even subsampling -> column expansion -> LEDPosition list

The computation is deterministic and free of side effects, so characters can
be placed independently and in parallel.
"""

import math
from dataclasses import dataclass, field

from ledlayout.catalog import LEDModule
from ledlayout.config import PlacementConfig
from ledlayout.core.candidates import generate_candidates
from ledlayout.core.chains import (
    allocate_chain_counts,
    build_chains,
    chain_break_threshold,
    pick_evenly,
)
from ledlayout.core.columns import expand_columns
from ledlayout.domain import LEDPosition, Outline


@dataclass
class PlacementReport:
    """Positions plus the intermediate figures that produced them.

    Attributes:
        positions: Final module positions
        target_count: Requested (or derived) module count
        base_count: Centerline points requested before column expansion
        step: Outline sampling stride
        candidate_count: Candidates left after deduplication
        chain_counts: Modules allocated per chain (before column expansion)
    """

    positions: list[LEDPosition] = field(default_factory=list)
    target_count: int = 0
    base_count: int = 0
    step: float = 0.0
    candidate_count: int = 0
    chain_counts: list[int] = field(default_factory=list)

    @property
    def chain_count(self) -> int:
        return len(self.chain_counts)


def derive_target_count(outline: Outline, module: LEDModule, pixels_per_inch: float) -> int:
    """Module count implied by the module's density and the outline length.

    The outline's arc length is converted to feet and multiplied by
    ``modules_per_foot``. Any outline with positive length gets at least one
    module.
    """
    length = outline.arc_length
    if not 0 < length < math.inf or pixels_per_inch <= 0:
        return 0
    feet = length / pixels_per_inch / 12
    return max(1, round(feet * module.installation.modules_per_foot))


def place_outline(outline: Outline, config: PlacementConfig) -> PlacementReport:
    """Run the placement pipeline and report intermediate figures.

    Args:
        outline: Outline of one character or shape
        config: Placement request

    Returns:
        PlacementReport; its positions are empty for degenerate outlines
        or a zero target
    """
    if outline.is_empty():
        return PlacementReport()

    if config.target_count is not None:
        target_count = config.target_count
    else:
        target_count = derive_target_count(outline, config.target_module, config.pixels_per_inch)
    if target_count <= 0:
        return PlacementReport(target_count=target_count)

    tuning = config.tuning
    base_count = math.ceil(target_count / config.column_count)
    candidate_set = generate_candidates(outline, target_count, tuning)
    report = PlacementReport(
        target_count=target_count,
        base_count=base_count,
        step=candidate_set.step,
        candidate_count=len(candidate_set),
    )
    if not candidate_set.candidates:
        return report

    chains = build_chains(
        candidate_set.candidates, chain_break_threshold(candidate_set.step, tuning)
    )
    report.chain_counts = allocate_chain_counts(chains, base_count)

    base = [
        candidate
        for chain, count in zip(chains, report.chain_counts)
        for candidate in pick_evenly(chain, count)
    ]
    report.positions = expand_columns(
        outline, base, config.column_count, config.orientation, target_count, tuning
    )
    return report


def generate_led_positions(outline: Outline, config: PlacementConfig) -> list[LEDPosition]:
    """Compute LED module positions inside an outline.

    Every returned position has its center inside the outline's fill, and
    the list never holds more than the target count.

    Args:
        outline: Outline of one character or shape
        config: Placement request; ``target_count`` None derives the count
            from the module density

    Returns:
        Positions in emission order, empty for degenerate outlines
    """
    return place_outline(outline, config).positions
