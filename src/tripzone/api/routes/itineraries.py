"""Itinerary planning endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import Response

from ...schemas.planning import AdjustRequest, AdjustResponse, PlanRequest, PlanResponse
from ...services.outputs.formatter import (
    adjusted_to_response,
    candidate_from_model,
    coordinate_from_model,
    itineraries_to_csv,
    itinerary_from_model,
    planning_result_to_response,
    suggestions_from_models,
)
from ...services.planner import PlanningRequest, PlanningResult, draft_itinerary, finalize_itinerary
from ...services.review import apply_adjustments
from ...services.summary import build_summary

router = APIRouter(prefix="/itineraries", tags=["itineraries"])


def _run_plan(payload: PlanRequest) -> PlanningResult:
    candidates = [candidate_from_model(candidate) for candidate in payload.candidates]
    request = PlanningRequest(
        trip_days=payload.trip_days,
        target_regions=payload.target_regions,
        auto_region_count=payload.auto_region_count,
        anchor=coordinate_from_model(payload.anchor),
        start_date=payload.start_date,
        region_names=payload.region_names,
        transport_mode=payload.transport_mode,
    )
    draft = draft_itinerary(candidates, request)
    suggestions = suggestions_from_models(payload.suggestions) if payload.suggestions is not None else None
    return finalize_itinerary(draft, suggestions)


@router.post("/plan", response_model=PlanResponse, status_code=status.HTTP_200_OK)
def plan(payload: PlanRequest) -> PlanResponse:
    try:
        return planning_result_to_response(_run_plan(payload))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/plan/csv", status_code=status.HTTP_200_OK)
def plan_csv(payload: PlanRequest) -> Response:
    """Plan and return the schedule as one CSV row per stop."""
    try:
        result = _run_plan(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return Response(content=itineraries_to_csv(result.itineraries), media_type="text/csv")


@router.post("/adjust", response_model=AdjustResponse, status_code=status.HTTP_200_OK)
def adjust(payload: AdjustRequest) -> AdjustResponse:
    """Apply review suggestions to a previously returned itinerary."""
    drafts = {}
    for day in payload.days:
        if day.day_number in drafts:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Day {day.day_number} appears more than once",
            )
        drafts[day.day_number] = itinerary_from_model(day)

    logging.info(f"Adjusting {len(drafts)} days with {len(payload.suggestions)} suggestions")
    itineraries = apply_adjustments(
        drafts,
        suggestions_from_models(payload.suggestions),
        transport_mode=payload.transport_mode,
    )
    return adjusted_to_response(itineraries, build_summary(itineraries, review_applied=True))
