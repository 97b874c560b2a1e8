"""Conversions between planner values and API schemas, plus CSV export."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict
from typing import Iterable, Mapping, Sequence

from ...models.domain import (
    AdjustmentSuggestion,
    Candidate,
    Coordinate,
    DailyItinerary,
    RegionProfile,
    RestBreak,
    RouteLeg,
    TravelSummary,
)
from ...schemas.planning import (
    AdjustResponse,
    CandidateModel,
    CoordinateModel,
    DailyItineraryModel,
    PlanMetadataModel,
    PlanResponse,
    RegionProfileModel,
    RestBreakModel,
    RouteLegModel,
    ScheduledPlaceModel,
    TravelSummaryModel,
)
from ..review.parsing import SuggestionPayload
from ..planner.models import PlanMetadata, PlanningResult


def candidate_from_model(model: CandidateModel) -> Candidate:
    data = model.model_dump(exclude={"latitude", "longitude"})
    return Candidate(coordinate=Coordinate(latitude=model.latitude, longitude=model.longitude), **data)


def coordinate_from_model(model: CoordinateModel | None) -> Coordinate | None:
    if model is None:
        return None
    return Coordinate(latitude=model.latitude, longitude=model.longitude)


def suggestions_from_models(models: Iterable[SuggestionPayload]) -> list[AdjustmentSuggestion]:
    return [model.to_domain() for model in models]


def _place_model(place: Candidate) -> ScheduledPlaceModel:
    data = asdict(place)
    data.pop("coordinate")
    return ScheduledPlaceModel(latitude=place.latitude, longitude=place.longitude, **data)


def itinerary_to_model(itinerary: DailyItinerary) -> DailyItineraryModel:
    return DailyItineraryModel(
        day_number=itinerary.day_number,
        date=itinerary.date,
        regions=list(itinerary.regions),
        places=[_place_model(place) for place in itinerary.places],
        total_distance_km=itinerary.total_distance_km,
        legs=[RouteLegModel(**asdict(leg)) for leg in itinerary.legs],
        breaks=[RestBreakModel(**asdict(rest)) for rest in itinerary.breaks],
    )


def itinerary_from_model(model: DailyItineraryModel) -> DailyItinerary:
    places = tuple(
        Candidate(
            coordinate=Coordinate(latitude=place.latitude, longitude=place.longitude),
            **place.model_dump(exclude={"latitude", "longitude"}),
        )
        for place in model.places
    )
    return DailyItinerary(
        day_number=model.day_number,
        date=model.date,
        regions=tuple(model.regions),
        places=places,
        total_distance_km=model.total_distance_km,
        legs=tuple(RouteLeg(**leg.model_dump()) for leg in model.legs),
        breaks=tuple(RestBreak(**rest.model_dump()) for rest in model.breaks),
    )


def summary_to_model(summary: TravelSummary) -> TravelSummaryModel:
    return TravelSummaryModel(**asdict(summary))


def _region_model(region: RegionProfile) -> RegionProfileModel:
    return RegionProfileModel(
        region_id=region.region_id,
        name=region.name,
        center=CoordinateModel(latitude=region.center.latitude, longitude=region.center.longitude),
        member_count=region.member_count,
        average_rating=region.average_rating,
        diversity_score=region.diversity_score,
        rank_score=region.rank_score,
        radius_km=region.radius_km,
        within_radius_cap=region.within_radius_cap,
        hull=[list(point) for point in region.hull],
    )


def metadata_to_model(metadata: PlanMetadata) -> PlanMetadataModel:
    return PlanMetadataModel(
        trip_days=metadata.trip_days,
        cluster_count=metadata.cluster_count,
        iterations=metadata.iterations,
        converged=metadata.converged,
        excluded_ids=list(metadata.excluded_ids),
        review_reasons=list(metadata.review_reasons),
        regions=[_region_model(region) for region in metadata.regions],
    )


def planning_result_to_response(result: PlanningResult) -> PlanResponse:
    return PlanResponse(
        days=[itinerary_to_model(result.itineraries[day]) for day in sorted(result.itineraries)],
        summary=summary_to_model(result.summary),
        metadata=metadata_to_model(result.metadata),
    )


def adjusted_to_response(itineraries: Mapping[int, DailyItinerary], summary: TravelSummary) -> AdjustResponse:
    return AdjustResponse(
        days=[itinerary_to_model(itineraries[day]) for day in sorted(itineraries)],
        summary=summary_to_model(summary),
    )


def itineraries_to_csv(itineraries: Mapping[int, DailyItinerary] | Sequence[DailyItinerary]) -> str:
    """One row per scheduled stop, in day then visiting order."""

    days = [itineraries[day] for day in sorted(itineraries)] if isinstance(itineraries, Mapping) else list(itineraries)
    buffer = io.StringIO()
    fieldnames = [
        "day",
        "date",
        "sequence",
        "time_block",
        "start_time",
        "candidate_id",
        "name",
        "category",
        "latitude",
        "longitude",
        "distance_from_prev_km",
        "travel_minutes",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for itinerary in days:
        legs = {leg.candidate_id: leg for leg in itinerary.legs}
        for sequence, place in enumerate(itinerary.places, start=1):
            leg = legs.get(place.candidate_id)
            writer.writerow(
                {
                    "day": itinerary.day_number,
                    "date": itinerary.date.isoformat(),
                    "sequence": sequence,
                    "time_block": place.time_block.value if place.time_block else "",
                    "start_time": leg.start_time if leg else "",
                    "candidate_id": place.candidate_id,
                    "name": place.name,
                    "category": place.category.value,
                    "latitude": place.latitude,
                    "longitude": place.longitude,
                    "distance_from_prev_km": round(leg.distance_from_prev_km, 3) if leg else "",
                    "travel_minutes": leg.travel_minutes if leg else "",
                }
            )
    return buffer.getvalue()
