"""Aggregate statistics over a finished itinerary."""

from __future__ import annotations

from collections import Counter
from typing import Mapping

from ..models.domain import DailyItinerary, TravelSummary


def build_summary(itineraries: Mapping[int, DailyItinerary], *, review_applied: bool = False) -> TravelSummary:
    total_days = len(itineraries)
    regions: set[str] = set()
    categories: Counter[str] = Counter()
    total_places = 0
    total_distance = 0.0

    for day in sorted(itineraries):
        itinerary = itineraries[day]
        regions.update(itinerary.regions)
        total_places += len(itinerary.places)
        total_distance += itinerary.total_distance_km
        categories.update(place.category.value for place in itinerary.places)

    return TravelSummary(
        total_days=total_days,
        total_places=total_places,
        total_regions=len(regions),
        average_regions_per_day=len(regions) / total_days if total_days else 0.0,
        category_distribution=dict(categories),
        estimated_total_distance_km=total_distance,
        review_applied=review_applied,
    )
