"""Planner request and result containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Mapping, Optional, Tuple

from ...models.domain import Coordinate, DailyItinerary, RegionProfile, TravelSummary


@dataclass(slots=True)
class PlanningRequest:
    """Request descriptor handed in alongside the candidate pool.

    ``target_regions`` wins over ``auto_region_count``; with neither the region
    count is ``trip_days * regions_per_day``.
    """

    trip_days: Optional[int] = None
    target_regions: Optional[int] = None
    auto_region_count: bool = False
    anchor: Optional[Coordinate] = None
    start_date: Optional[date] = None
    region_names: Optional[Mapping[int, str]] = None
    transport_mode: Optional[str] = None
    force_review: bool = False


@dataclass(slots=True)
class PlanMetadata:
    trip_days: int
    cluster_count: int
    iterations: int
    converged: bool
    excluded_ids: Tuple[str, ...] = ()
    regions: Tuple[RegionProfile, ...] = ()
    review_reasons: Tuple[str, ...] = ()


@dataclass(slots=True)
class DraftPlan:
    itineraries: Dict[int, DailyItinerary]
    metadata: PlanMetadata
    transport_mode: Optional[str] = None


@dataclass(slots=True)
class PlanningResult:
    itineraries: Dict[int, DailyItinerary]
    summary: TravelSummary
    metadata: PlanMetadata
    ignored_review: Optional[str] = field(default=None)
