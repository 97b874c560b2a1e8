"""Heuristics that decide whether a draft is worth sending for review."""

from __future__ import annotations

from typing import List, Mapping

from ...config import Settings, settings
from ...models.domain import DailyItinerary, TimeBlock


def needs_review(itineraries: Mapping[int, DailyItinerary], config: Settings | None = None) -> List[str]:
    config = config or settings
    reasons: List[str] = []
    for day in sorted(itineraries):
        itinerary = itineraries[day]
        if itinerary.total_distance_km > config.review_distance_warning_km:
            reasons.append(
                f"Day {day}: travel distance {itinerary.total_distance_km:.1f} km exceeds "
                f"{config.review_distance_warning_km:g} km"
            )
        if not itinerary.places_in_block(TimeBlock.LUNCH):
            reasons.append(f"Day {day}: no lunch scheduled")
        if not itinerary.places_in_block(TimeBlock.DINNER):
            reasons.append(f"Day {day}: no dinner scheduled")
        count = len(itinerary.places)
        if count < config.min_places_per_day:
            reasons.append(f"Day {day}: only {count} places scheduled")
        elif count > config.max_places_per_day:
            reasons.append(f"Day {day}: {count} places scheduled, more than {config.max_places_per_day}")
    return reasons
