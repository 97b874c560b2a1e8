from datetime import date

import pytest

from src.tripzone.models.domain import Candidate, Category, Coordinate, DailyItinerary, TimeBlock
from src.tripzone.services.summary import build_summary


def _place(cid: str, category: Category) -> Candidate:
    return Candidate(
        candidate_id=cid,
        name=cid,
        category=category,
        coordinate=Coordinate(37.5, 127.0),
        time_block=TimeBlock.LUNCH,
    )


def test_summary_totals():
    itineraries = {
        1: DailyItinerary(1, date(2025, 5, 1), ("Jongno", "Jung"), (_place("a", Category.RESTAURANT),
                                                                   _place("b", Category.CAFE)), 3.5),
        2: DailyItinerary(2, date(2025, 5, 2), ("Jung",), (_place("c", Category.RESTAURANT),), 1.5),
    }

    summary = build_summary(itineraries, review_applied=True)

    assert summary.total_days == 2
    assert summary.total_places == 3
    assert summary.total_regions == 2
    assert summary.average_regions_per_day == pytest.approx(1.0)
    assert summary.category_distribution == {"restaurant": 2, "cafe": 1}
    assert summary.estimated_total_distance_km == pytest.approx(5.0)
    assert summary.review_applied


def test_summary_of_nothing():
    summary = build_summary({})
    assert summary.total_days == 0
    assert summary.average_regions_per_day == 0.0
    assert summary.category_distribution == {}
    assert not summary.review_applied
