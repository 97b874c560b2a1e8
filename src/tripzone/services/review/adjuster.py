"""Apply structured adjustment suggestions to draft itineraries."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional

from ...config import Settings, settings
from ...models.domain import AdjustmentKind, AdjustmentSuggestion, Candidate, DailyItinerary, RestBreak
from ..allocation.service import BLOCK_SLOTS
from ..routing import reassemble

DEFAULT_BREAK_MINUTES = 30


def _index_of(places: List[Candidate], reference: Optional[str]) -> Optional[int]:
    if not reference:
        return None
    for index, place in enumerate(places):
        if place.matches(reference):
            return index
    return None


class _Workspace:
    """Mutable scratch copy of the drafts; the inputs are never touched."""

    def __init__(self, drafts: Mapping[int, DailyItinerary], config: Settings):
        self.config = config
        self.places: Dict[int, List[Candidate]] = {day: list(it.places) for day, it in drafts.items()}
        self.breaks: Dict[int, List[RestBreak]] = {day: list(it.breaks) for day, it in drafts.items()}
        self.touched: set[int] = set()

    def move(self, suggestion: AdjustmentSuggestion) -> bool:
        source = self.places[suggestion.day]
        index = _index_of(source, suggestion.place)
        target_day = suggestion.target_day
        if index is None or target_day is None or target_day not in self.places or target_day == suggestion.day:
            return False
        place = source[index]
        target = self.places[target_day]
        block_limit = min(BLOCK_SLOTS[place.time_block], self.config.max_places_per_block) if place.time_block else 0
        if sum(1 for other in target if other.time_block == place.time_block) >= block_limit:
            logging.warning(f"Day {target_day} {place.time_block} is full; cannot move '{place.name}'")
            return False
        del source[index]
        target.append(replace(place, day=target_day))
        self.touched.update({suggestion.day, target_day})
        return True

    def remove(self, suggestion: AdjustmentSuggestion) -> bool:
        places = self.places[suggestion.day]
        index = _index_of(places, suggestion.place)
        if index is None:
            return False
        removed = places.pop(index)
        self.breaks[suggestion.day] = [
            rest for rest in self.breaks[suggestion.day] if rest.after_candidate_id != removed.candidate_id
        ]
        self.touched.add(suggestion.day)
        return True

    def swap(self, suggestion: AdjustmentSuggestion) -> bool:
        places = self.places[suggestion.day]
        first = _index_of(places, suggestion.place)
        second = _index_of(places, suggestion.swap_with)
        if first is None or second is None or first == second:
            return False
        a, b = places[first], places[second]
        places[first] = replace(b, time_block=a.time_block)
        places[second] = replace(a, time_block=b.time_block)
        self.touched.add(suggestion.day)
        return True

    def add_break(self, suggestion: AdjustmentSuggestion) -> bool:
        places = self.places[suggestion.day]
        if suggestion.place:
            index = _index_of(places, suggestion.place)
            if index is None:
                return False
        else:
            index = len(places) - 1 if places else None
        after = places[index] if index is not None else None
        duration = suggestion.duration_minutes or DEFAULT_BREAK_MINUTES
        if duration <= 0:
            return False
        self.breaks[suggestion.day].append(
            RestBreak(
                after_candidate_id=after.candidate_id if after else None,
                time_block=after.time_block if after else None,
                duration_minutes=duration,
                note=suggestion.action,
            )
        )
        self.touched.add(suggestion.day)
        return True


def apply_adjustments(
    drafts: Mapping[int, DailyItinerary],
    suggestions: Iterable[AdjustmentSuggestion],
    *,
    transport_mode: str | None = None,
    config: Settings | None = None,
) -> dict[int, DailyItinerary]:
    """Return new itineraries with the applicable suggestions applied in order.

    Suggestions naming an unknown day or place, or that would overfill a block,
    are logged and skipped. Days nothing touched are returned as-is.
    """

    workspace = _Workspace(drafts, config or settings)
    handlers = {
        AdjustmentKind.MOVE: workspace.move,
        AdjustmentKind.REMOVE: workspace.remove,
        AdjustmentKind.SWAP: workspace.swap,
        AdjustmentKind.ADD_BREAK: workspace.add_break,
    }

    applied = 0
    for suggestion in suggestions:
        if suggestion.day not in workspace.places:
            logging.warning(f"Ignoring {suggestion.kind.value} suggestion for unknown day {suggestion.day}")
            continue
        if handlers[suggestion.kind](suggestion):
            applied += 1
        else:
            logging.warning(
                f"Ignoring {suggestion.kind.value} suggestion on day {suggestion.day} for '{suggestion.place}'"
            )

    logging.info(f"Applied {applied} adjustments; re-deriving days {sorted(workspace.touched)}")
    result: dict[int, DailyItinerary] = {}
    for day in sorted(drafts):
        if day in workspace.touched:
            result[day] = reassemble(
                drafts[day],
                places=workspace.places[day],
                breaks=workspace.breaks[day],
                transport_mode=transport_mode,
                config=workspace.config,
            )
        else:
            result[day] = drafts[day]
    return result
