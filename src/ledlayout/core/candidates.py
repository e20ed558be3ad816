"""Centerline candidate generation.

Walks the outline at a fixed stride and, at each sample, measures the stroke
along the inward normal to find its local width and midpoint. Each midpoint
becomes a CenterCandidate. A spatial grid then removes near-duplicates that
arise where opposite sides of a stroke project onto the same centerline.
"""

import math
from collections import defaultdict

from ledlayout.config import PlacementTuning
from ledlayout.core.geometry import clamp, find_distance_to_edge, is_point_inside
from ledlayout.domain import CandidateSet, CenterCandidate, Outline, Point


def sampling_step(arc_length: float, target_count: int, tuning: PlacementTuning) -> float:
    """Outline sampling stride for a requested module count.

    Fewer modules relative to the outline length give a coarser stride,
    bounded by ``tuning.min_step`` and ``tuning.max_step``.
    """
    if target_count <= 0:
        return tuning.max_step
    return clamp(
        arc_length / (target_count * tuning.samples_per_module),
        tuning.min_step,
        tuning.max_step,
    )


def measure_candidate(
    outline: Outline,
    point: Point,
    tangent: tuple[float, float],
    path_distance: float,
    candidate_id: str,
    tuning: PlacementTuning,
    max_dist: float,
) -> CenterCandidate | None:
    """Find the stroke center across from an outline sample.

    Args:
        outline: Outline being filled
        point: Sample point on the outline
        tangent: Unit tangent at the sample
        path_distance: Arc distance of the sample
        candidate_id: Identifier for the produced candidate
        tuning: Placement constants
        max_dist: Cap for edge distance searches

    Returns:
        CenterCandidate, or None when the sample cannot yield a usable
        center (no fill on either side, stroke too thin, or the midpoint
        falls in a concave pocket)
    """
    tx, ty = tangent
    nx, ny = -ty, tx
    inset = tuning.inset_distance

    probe_x = point.x + nx * inset
    probe_y = point.y + ny * inset
    if not is_point_inside(outline, probe_x, probe_y):
        nx, ny = -nx, -ny
        probe_x = point.x + nx * inset
        probe_y = point.y + ny * inset
        if not is_point_inside(outline, probe_x, probe_y):
            return None

    forward = find_distance_to_edge(
        outline, probe_x, probe_y, nx, ny, max_dist,
        tuning.edge_march_step, tuning.edge_refine_iterations,
    )
    backward = find_distance_to_edge(
        outline, probe_x, probe_y, -nx, -ny, max_dist,
        tuning.edge_march_step, tuning.edge_refine_iterations,
    )
    local_width = forward + backward
    if local_width < tuning.min_local_width:
        return None

    offset = (forward - backward) / 2
    center_x = probe_x + nx * offset
    center_y = probe_y + ny * offset
    if not is_point_inside(outline, center_x, center_y):
        return None

    return CenterCandidate(
        x=center_x,
        y=center_y,
        path_distance=path_distance,
        local_width=local_width,
        clearance=min(forward, backward),
        normal=(nx, ny),
        tangent=(tx, ty),
        id=candidate_id,
    )


def deduplicate_candidates(
    candidates: list[CenterCandidate],
    step: float,
    tuning: PlacementTuning,
) -> list[CenterCandidate]:
    """Drop candidates crowding an earlier accepted one.

    Candidates are bucketed in a grid of ``step * dedup_cell_factor`` cells.
    A candidate is rejected when an accepted candidate in the surrounding
    3x3 cells lies closer than ``cell * dedup_radius_factor``. Generation
    order is preserved.
    """
    if not candidates or step <= 0:
        return list(candidates)

    cell = step * tuning.dedup_cell_factor
    min_distance = cell * tuning.dedup_radius_factor
    grid: dict[tuple[int, int], list[CenterCandidate]] = defaultdict(list)
    accepted: list[CenterCandidate] = []

    for candidate in candidates:
        col = math.floor(candidate.x / cell)
        row = math.floor(candidate.y / cell)
        crowded = any(
            other.distance_to(candidate) < min_distance
            for dc in (-1, 0, 1)
            for dr in (-1, 0, 1)
            for other in grid.get((col + dc, row + dr), ())
        )
        if crowded:
            continue
        grid[(col, row)].append(candidate)
        accepted.append(candidate)

    return accepted


def generate_candidates(
    outline: Outline,
    target_count: int,
    tuning: PlacementTuning | None = None,
) -> CandidateSet:
    """Generate deduplicated centerline candidates for an outline.

    Args:
        outline: Outline to fill
        target_count: Requested number of modules (drives the stride)
        tuning: Placement constants (defaults if None)

    Returns:
        CandidateSet with candidates in generation order and the stride
        used. Empty for zero-length outlines or a non-positive target.
    """
    tuning = tuning or PlacementTuning()
    arc_length = outline.arc_length
    if not 0 < arc_length < math.inf or target_count <= 0:
        return CandidateSet(candidates=[], step=0.0)

    step = sampling_step(arc_length, target_count, tuning)
    bbox = outline.bounding_box()
    max_dist = max(bbox.width, bbox.height) * 1.5 + 20

    raw: list[CenterCandidate] = []
    sample_count = math.ceil(arc_length / step)
    for i in range(sample_count):
        distance = i * step
        if distance >= arc_length:
            break
        sample = outline.sample(distance, tuning.tangent_delta)
        if sample is None:
            continue
        point, tangent = sample
        candidate = measure_candidate(
            outline, point, tangent, distance, f"c{i}", tuning, max_dist
        )
        if candidate is not None:
            raw.append(candidate)

    return CandidateSet(candidates=deduplicate_candidates(raw, step, tuning), step=step)
