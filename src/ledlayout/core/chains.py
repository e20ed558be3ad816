"""Chain building and count allocation.

Candidates are grouped into chains of spatially contiguous points, one per
physical stroke segment. The module budget is split across chains in
proportion to their length, then each chain is subsampled to even spacing.
"""

import math
from bisect import bisect_left

from ledlayout.config import PlacementTuning
from ledlayout.domain import CenterCandidate, Chain


def chain_break_threshold(step: float, tuning: PlacementTuning) -> float:
    """Gap above which consecutive candidates belong to different chains."""
    return max(
        step * tuning.chain_break_factor,
        tuning.module_render_length * tuning.chain_break_render_factor,
    )


def build_chains(candidates: list[CenterCandidate], break_threshold: float) -> list[Chain]:
    """Split candidates (in generation order) into contiguous chains.

    A new chain starts whenever the distance between consecutive candidates
    exceeds ``break_threshold``. Every candidate lands in exactly one chain.
    """
    chains: list[Chain] = []
    previous: CenterCandidate | None = None

    for candidate in candidates:
        if previous is None or previous.distance_to(candidate) > break_threshold:
            chains.append(Chain())
        chains[-1].candidates.append(candidate)
        previous = candidate

    return chains


def allocate_counts(lengths: list[float], total: int) -> list[int]:
    """Split ``total`` units across items proportionally to their lengths.

    Uses floor plus largest remainder; ties go to the earlier item. When all
    lengths are zero the units are spread as evenly as possible.

    Examples:
        >>> allocate_counts([30.0, 10.0], 5)
        [4, 1]
        >>> allocate_counts([0.0, 0.0, 0.0], 4)
        [2, 1, 1]
    """
    n = len(lengths)
    if n == 0 or total <= 0:
        return [0] * n

    total_length = sum(lengths)
    if total_length <= 0:
        base, extra = divmod(total, n)
        return [base + (1 if i < extra else 0) for i in range(n)]

    raw = [length / total_length * total for length in lengths]
    counts = [math.floor(value) for value in raw]
    leftover = total - sum(counts)
    by_remainder = sorted(range(n), key=lambda i: (-(raw[i] - counts[i]), i))
    for i in by_remainder[:leftover]:
        counts[i] += 1

    return counts


def allocate_chain_counts(chains: list[Chain], total: int) -> list[int]:
    """Allocate a module budget across chains.

    Starts from the length-proportional split. A chain cannot take more
    modules than it has candidates; any surplus is re-split across the
    chains that still have room, again by length.
    """
    counts = allocate_counts([chain.length for chain in chains], total)
    capacities = [len(chain) for chain in chains]

    while True:
        surplus = 0
        for i, capacity in enumerate(capacities):
            if counts[i] > capacity:
                surplus += counts[i] - capacity
                counts[i] = capacity
        open_slots = [i for i, capacity in enumerate(capacities) if counts[i] < capacity]
        if surplus == 0 or not open_slots:
            return counts
        extra = allocate_counts([chains[i].length for i in open_slots], surplus)
        for i, amount in zip(open_slots, extra):
            counts[i] += amount


def pick_evenly(chain: Chain, count: int) -> list[CenterCandidate]:
    """Subsample a chain to ``count`` evenly spaced candidates.

    Targets sit at ``spacing * (i + 0.5)`` along the chain's arc length,
    with ``spacing = length / count``. Each target takes its nearest
    candidate; if that one is already used, the nearest unused index is
    searched outward, alternating left and right.

    Returns:
        Selected candidates in chain order
    """
    items = chain.candidates
    if count <= 0:
        return []
    if len(items) <= count:
        return list(items)

    cumulative = chain.cumulative_lengths()
    total = cumulative[-1]
    n = len(items)
    if total <= 0:
        return [items[i * n // count] for i in range(count)]

    spacing = total / count
    used: set[int] = set()

    for i in range(count):
        target = spacing * (i + 0.5)
        j = bisect_left(cumulative, target)
        if j >= n:
            index = n - 1
        elif j > 0 and target - cumulative[j - 1] <= cumulative[j] - target:
            index = j - 1
        else:
            index = j

        if index in used:
            index = _nearest_unused(index, used, n)
        used.add(index)

    return [items[i] for i in sorted(used)]


def _nearest_unused(index: int, used: set[int], n: int) -> int:
    for offset in range(1, n):
        for candidate in (index - offset, index + offset):
            if 0 <= candidate < n and candidate not in used:
                return candidate
    return index
