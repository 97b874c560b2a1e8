"""Assign regions to trip days and fill each day's time blocks."""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import replace
from typing import Dict, List, Sequence

from ...config import Settings, settings
from ...models.domain import Candidate, Category, Coordinate, RegionProfile, TimeBlock
from ..scoring import PlaceScorer
from .matching import block_priority

# Meals and the cafe stop take one place; activity blocks use the full block capacity.
BLOCK_SLOTS: dict[TimeBlock, int] = {
    TimeBlock.BREAKFAST: 1,
    TimeBlock.MORNING_ACTIVITY: 2,
    TimeBlock.LUNCH: 1,
    TimeBlock.CAFE: 1,
    TimeBlock.AFTERNOON_ACTIVITY: 2,
    TimeBlock.DINNER: 1,
    TimeBlock.EVENING_ACTIVITY: 2,
}


def clamp_trip_days(trip_days: int | None, config: Settings | None = None) -> int:
    config = config or settings
    requested = trip_days if trip_days is not None else config.min_trip_days
    clamped = max(config.min_trip_days, min(config.max_trip_days, requested))
    if clamped != requested:
        logging.warning(f"Requested {trip_days} trip days; clamped to {clamped}")
    return clamped


def max_regions_per_day(region_count: int, trip_days: int) -> int:
    return max(1, math.ceil(region_count / max(1, trip_days)))


def assign_regions_to_days(
    ranked_regions: Sequence[RegionProfile],
    trip_days: int,
) -> Dict[int, List[RegionProfile]]:
    """Greedy load balancing: each region goes to the open day holding the fewest places.

    A day is open while it holds fewer than ``ceil(regions / days)`` regions; if
    every day is full the least loaded day is used. Ties go to the earlier day.
    """

    assignment: Dict[int, List[RegionProfile]] = {day: [] for day in range(1, trip_days + 1)}
    loads: Dict[int, int] = {day: 0 for day in assignment}
    cap = max_regions_per_day(len(ranked_regions), trip_days)

    for region in ranked_regions:
        open_days = [day for day in assignment if len(assignment[day]) < cap] or list(assignment)
        day = min(open_days, key=lambda d: (loads[d], d))
        assignment[day].append(region)
        loads[day] += region.member_count

    for day, regions in assignment.items():
        logging.info(f"Day {day} regions: {[r.name for r in regions]} ({loads[day]} places)")
    return assignment


def _considered_indices(
    regions: Sequence[RegionProfile],
    pool: Sequence[Candidate],
    scorer: PlaceScorer,
    per_category: int,
) -> Dict[int, int]:
    """Map pool index -> region id, keeping the best ``per_category`` members per category per region."""

    considered: Dict[int, int] = {}
    for region in regions:
        seen: Counter[Category] = Counter()
        for entry in scorer.rank(pool, region.member_indices, anchor=region.center):
            if seen[entry.candidate.category] >= per_category:
                continue
            seen[entry.candidate.category] += 1
            considered[entry.index] = region.region_id
    return considered


def allocate_day(
    day_number: int,
    regions: Sequence[RegionProfile],
    pool: Sequence[Candidate],
    *,
    anchor: Coordinate | None = None,
    scorer: PlaceScorer | None = None,
    config: Settings | None = None,
) -> list[Candidate]:
    """Fill the day's time blocks in chronological order.

    Each block takes up to its slot count of unused candidates whose category the
    block accepts, ranked by ``block priority * place score`` against the previous
    stop (or the anchor / top region center for the first stop). Blocks with no
    matching category stay empty.
    """

    config = config or settings
    scorer = scorer or PlaceScorer(config)
    if not regions:
        return []

    region_of = _considered_indices(regions, pool, scorer, config.candidates_per_category)
    used: set[int] = set()
    per_region: Counter[int] = Counter()
    previous = anchor or regions[0].center
    scheduled: list[Candidate] = []

    for block in TimeBlock:
        slots = min(BLOCK_SLOTS[block], config.max_places_per_block)
        for _ in range(slots):
            eligible = [
                index
                for index in region_of
                if index not in used
                and block_priority(block, pool[index].category) > 0
                and per_region[region_of[index]] < config.places_per_region
            ]
            if not eligible:
                break
            weights = {index: block_priority(block, pool[index].category) for index in eligible}
            best = scorer.rank(pool, eligible, anchor=previous, weights=weights)[0]
            used.add(best.index)
            per_region[region_of[best.index]] += 1
            scheduled.append(replace(best.candidate, day=day_number, time_block=block))
            previous = best.candidate.coordinate

    logging.info(f"Day {day_number}: scheduled {len(scheduled)} places from {len(regions)} regions")
    return scheduled
