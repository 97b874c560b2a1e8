"""Order a day's scheduled places and compute its travel distance.

Time-block order is authoritative; distance only decides the order of places
that share a block (the one nearest the previous stop goes first).
"""

from __future__ import annotations

from datetime import date
from typing import Sequence

from ...config import Settings, settings
from ...models.domain import Candidate, DailyItinerary, RestBreak, RouteLeg, TimeBlock
from ..geospatial import categorize_distance, distance_km, nearest_of, total_path_distance, travel_minutes


def _clock(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


def order_places(places: Sequence[Candidate]) -> list[Candidate]:
    ordered: list[Candidate] = []
    previous: Candidate | None = None
    for block in TimeBlock:
        group = [place for place in places if place.time_block == block]
        while group:
            if previous is None:
                chosen = group[0]
            else:
                chosen = nearest_of(previous.coordinate, group, key=lambda place: place.coordinate)
            group.remove(chosen)
            ordered.append(chosen)
            previous = chosen
    ordered.extend(place for place in places if place.time_block is None)
    return ordered


def build_legs(
    places: Sequence[Candidate],
    *,
    transport_mode: str | None = None,
    config: Settings | None = None,
) -> list[RouteLeg]:
    config = config or settings
    speed = config.speed_for(transport_mode)
    legs: list[RouteLeg] = []
    previous: Candidate | None = None
    # Overlapping blocks (cafe inside the afternoon) start once the previous stop ends.
    clock = 0

    for sequence, place in enumerate(places, start=1):
        step = distance_km(previous.coordinate, place.coordinate) if previous else 0.0
        block_start = place.time_block.start_hour * 60 if place.time_block else 0
        start = max(block_start, clock)
        clock = start + config.default_activity_minutes
        legs.append(
            RouteLeg(
                sequence=sequence,
                candidate_id=place.candidate_id,
                time_block=place.time_block,
                start_time=_clock(start),
                distance_from_prev_km=step,
                travel_minutes=travel_minutes(step, speed),
                tier=categorize_distance(step) if previous else None,
            )
        )
        previous = place
    return legs


def assemble_day(
    day_number: int,
    day_date: date,
    regions: Sequence[str],
    places: Sequence[Candidate],
    *,
    breaks: Sequence[RestBreak] = (),
    transport_mode: str | None = None,
    config: Settings | None = None,
) -> DailyItinerary:
    ordered = order_places(places)
    return DailyItinerary(
        day_number=day_number,
        date=day_date,
        regions=tuple(regions),
        places=tuple(ordered),
        total_distance_km=total_path_distance([place.coordinate for place in ordered]),
        legs=tuple(build_legs(ordered, transport_mode=transport_mode, config=config)),
        breaks=tuple(breaks),
    )


def reassemble(
    itinerary: DailyItinerary,
    *,
    places: Sequence[Candidate] | None = None,
    breaks: Sequence[RestBreak] | None = None,
    transport_mode: str | None = None,
    config: Settings | None = None,
) -> DailyItinerary:
    """Derive a new day value from an existing one, optionally with new places or breaks."""

    return assemble_day(
        itinerary.day_number,
        itinerary.date,
        itinerary.regions,
        itinerary.places if places is None else places,
        breaks=itinerary.breaks if breaks is None else breaks,
        transport_mode=transport_mode,
        config=config,
    )
