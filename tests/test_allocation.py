from collections import Counter

import pytest

from src.tripzone.models.domain import Candidate, Category, Cluster, Coordinate, RegionProfile, TimeBlock
from src.tripzone.services.allocation import (
    BLOCK_CATEGORY_PRIORITY,
    allocate_day,
    assign_regions_to_days,
    block_priority,
    clamp_trip_days,
)
from src.tripzone.services.regions import profile_regions


def _candidate(cid: str, lat: float, lon: float, category: Category, rating: float = 4.0,
               reviews: int = 100) -> Candidate:
    return Candidate(
        candidate_id=cid,
        name=f"Place {cid}",
        category=category,
        coordinate=Coordinate(lat, lon),
        rating=rating,
        review_count=reviews,
    )


def _region(region_id: int, members: int) -> RegionProfile:
    return RegionProfile(
        region_id=region_id,
        name=f"R{region_id}",
        center=Coordinate(37.5, 127.0),
        member_count=members,
        average_rating=4.0,
        diversity_score=1.0,
        rank_score=1.0,
        member_indices=tuple(range(members)),
    )


def _single_region(pool: list[Candidate]) -> list[RegionProfile]:
    cluster = Cluster(0, Coordinate(37.5, 127.0), tuple(range(len(pool))))
    return profile_regions([cluster], pool)


@pytest.mark.parametrize("requested, expected", [(0, 1), (-2, 1), (None, 1), (2, 2), (3, 3), (5, 3)])
def test_clamp_trip_days(requested, expected):
    assert clamp_trip_days(requested) == expected


def test_priority_table_never_schedules_lodging():
    assert all(Category.LODGING not in weights for weights in BLOCK_CATEGORY_PRIORITY.values())
    assert block_priority(TimeBlock.LUNCH, Category.RESTAURANT) == 1.0
    assert block_priority(TimeBlock.LUNCH, Category.ATTRACTION) == 0.0


def test_regions_are_balanced_across_days():
    regions = [_region(1, 10), _region(2, 8), _region(3, 6), _region(4, 4)]

    assignment = assign_regions_to_days(regions, 2)

    assert [r.region_id for r in assignment[1]] == [1, 4]
    assert [r.region_id for r in assignment[2]] == [2, 3]


def test_every_day_is_present_even_without_regions():
    assignment = assign_regions_to_days([_region(1, 5)], 3)
    assert sorted(assignment) == [1, 2, 3]
    assert assignment[2] == [] and assignment[3] == []


def test_block_capacity_and_uniqueness():
    pool = [_candidate(f"A{i}", 37.5 + 0.001 * i, 127.0, Category.ATTRACTION) for i in range(8)]
    pool += [_candidate(f"F{i}", 37.5, 127.0 + 0.001 * i, Category.RESTAURANT) for i in range(5)]
    pool += [_candidate("N0", 37.501, 127.001, Category.NIGHT_VIEW)]

    scheduled = allocate_day(1, _single_region(pool), pool)

    per_block = Counter(place.time_block for place in scheduled)
    assert all(count <= 2 for count in per_block.values())
    assert per_block[TimeBlock.MORNING_ACTIVITY] == 2
    assert per_block[TimeBlock.LUNCH] == 1
    assert per_block[TimeBlock.DINNER] == 1
    assert len({place.candidate_id for place in scheduled}) == len(scheduled)
    assert len(scheduled) <= 10
    assert all(place.day == 1 for place in scheduled)


def test_allocation_copies_candidates():
    pool = [_candidate("F0", 37.5, 127.0, Category.RESTAURANT)]

    scheduled = allocate_day(2, _single_region(pool), pool)

    assert len(scheduled) == 1
    assert scheduled[0].time_block == TimeBlock.BREAKFAST
    assert pool[0].time_block is None and pool[0].day is None


def test_mismatched_categories_are_not_forced():
    pool = [_candidate(f"C{i}", 37.5, 127.0 + 0.001 * i, Category.CAFE) for i in range(3)]

    scheduled = allocate_day(1, _single_region(pool), pool)

    blocks = [place.time_block for place in scheduled]
    assert blocks == [TimeBlock.BREAKFAST, TimeBlock.CAFE]


def test_lodging_only_pool_schedules_nothing():
    pool = [_candidate("H0", 37.5, 127.0, Category.LODGING)]
    assert allocate_day(1, _single_region(pool), pool) == []


def test_no_regions_means_empty_day():
    assert allocate_day(1, [], []) == []
