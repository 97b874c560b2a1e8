"""Itinerary planning pipeline."""

from .models import DraftPlan, PlanMetadata, PlanningRequest, PlanningResult
from .service import draft_itinerary, finalize_itinerary, plan_itinerary

__all__ = [
    "DraftPlan",
    "PlanMetadata",
    "PlanningRequest",
    "PlanningResult",
    "draft_itinerary",
    "finalize_itinerary",
    "plan_itinerary",
]
