"""Itinerary planning request/response schemas."""

from __future__ import annotations

from datetime import date as Date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Category, DistanceTier, TimeBlock
from ..services.review.parsing import SuggestionPayload


class CoordinateModel(BaseModel):
    latitude: float
    longitude: float


class CandidateModel(BaseModel):
    candidate_id: str = Field(..., description="Identifier assigned by the upstream collector.")
    name: str
    category: Category
    latitude: float
    longitude: float
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    operating_hours: Optional[str] = None
    price_level: Optional[str] = None
    is_trendy: bool = False
    address: Optional[str] = Field(default=None, description="Used to derive a region label when none is supplied.")


class ScheduledPlaceModel(CandidateModel):
    day: Optional[int] = None
    time_block: Optional[TimeBlock] = None


class RouteLegModel(BaseModel):
    sequence: int
    candidate_id: str
    time_block: Optional[TimeBlock]
    start_time: str
    distance_from_prev_km: float
    travel_minutes: int
    tier: Optional[DistanceTier] = None


class RestBreakModel(BaseModel):
    after_candidate_id: Optional[str] = None
    time_block: Optional[TimeBlock] = None
    duration_minutes: int = Field(..., ge=1)
    note: Optional[str] = None


class DailyItineraryModel(BaseModel):
    day_number: int = Field(..., ge=1)
    date: Date
    regions: List[str] = Field(default_factory=list)
    places: List[ScheduledPlaceModel] = Field(default_factory=list)
    total_distance_km: float = 0.0
    legs: List[RouteLegModel] = Field(default_factory=list)
    breaks: List[RestBreakModel] = Field(default_factory=list)


class TravelSummaryModel(BaseModel):
    total_days: int
    total_places: int
    total_regions: int
    average_regions_per_day: float
    category_distribution: Dict[str, int]
    estimated_total_distance_km: float
    review_applied: bool


class RegionProfileModel(BaseModel):
    region_id: int
    name: str
    center: CoordinateModel
    member_count: int
    average_rating: float
    diversity_score: float
    rank_score: float
    radius_km: float
    within_radius_cap: bool
    hull: List[List[float]] = Field(default_factory=list, description="Closed [lat, lon] ring for map overlays.")


class PlanMetadataModel(BaseModel):
    trip_days: int
    cluster_count: int
    iterations: int
    converged: bool
    excluded_ids: List[str] = Field(default_factory=list)
    review_reasons: List[str] = Field(default_factory=list)
    regions: List[RegionProfileModel] = Field(default_factory=list)


class PlanRequest(BaseModel):
    candidates: List[CandidateModel] = Field(default_factory=list)
    trip_days: int = Field(default=1, description="Clamped to the configured trip length range.")
    target_regions: Optional[int] = Field(default=None, ge=1)
    auto_region_count: bool = Field(default=False, description="Pick the region count with the elbow heuristic.")
    anchor: Optional[CoordinateModel] = None
    start_date: Optional[Date] = None
    region_names: Optional[Dict[int, str]] = Field(default=None, description="Region labels keyed by cluster id.")
    transport_mode: Optional[str] = None
    suggestions: Optional[List[SuggestionPayload]] = Field(
        default=None,
        description="Review suggestions to apply to the draft before finalizing.",
    )


class PlanResponse(BaseModel):
    days: List[DailyItineraryModel]
    summary: TravelSummaryModel
    metadata: PlanMetadataModel


class AdjustRequest(BaseModel):
    days: List[DailyItineraryModel]
    suggestions: List[SuggestionPayload] = Field(default_factory=list)
    transport_mode: Optional[str] = None


class AdjustResponse(BaseModel):
    days: List[DailyItineraryModel]
    summary: TravelSummaryModel

