"""High-level orchestration for itinerary planning requests.

Planning is two-phase: ``draft_itinerary`` runs the pure pipeline (cluster,
profile, allocate, assemble) and ``finalize_itinerary`` applies any review
suggestions and builds the summary. ``plan_itinerary`` chains both and only
consults a review source when the draft trips one of the review heuristics.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from ...config import Settings, settings
from ...models.domain import AdjustmentSuggestion, Candidate, DailyItinerary, RegionProfile
from ..allocation import allocate_day, assign_regions_to_days, clamp_trip_days
from ..clustering import cluster_candidates, suggest_cluster_count, truncate_cluster
from ..regions import profile_regions
from ..review import ReviewSource, apply_adjustments, needs_review
from ..routing import assemble_day
from ..scoring import PlaceScorer
from ..summary import build_summary
from .models import DraftPlan, PlanMetadata, PlanningRequest, PlanningResult


def _region_count(pool: Sequence[Candidate], trip_days: int, request: PlanningRequest, config: Settings) -> int:
    if request.target_regions is not None and request.target_regions > 0:
        return request.target_regions
    if request.target_regions is not None:
        logging.warning(f"Ignoring non-positive target region count {request.target_regions}")
    if request.auto_region_count:
        return suggest_cluster_count(pool, trip_days, config=config)
    return trip_days * config.regions_per_day


def _plan_days(
    pool: Sequence[Candidate],
    by_day: Dict[int, List[RegionProfile]],
    request: PlanningRequest,
    start: date,
    scorer: PlaceScorer,
    config: Settings,
) -> Dict[int, DailyItinerary]:
    def plan_day(day: int) -> DailyItinerary:
        regions = by_day[day]
        places = allocate_day(day, regions, pool, anchor=request.anchor, scorer=scorer, config=config)
        return assemble_day(
            day,
            start + timedelta(days=day - 1),
            [region.name for region in regions],
            places,
            transport_mode=request.transport_mode,
            config=config,
        )

    results: Dict[int, DailyItinerary] = {}
    with ThreadPoolExecutor(max_workers=config.day_workers) as executor:
        future_to_day = {executor.submit(plan_day, day): day for day in by_day}
        for future in as_completed(future_to_day):
            results[future_to_day[future]] = future.result()
    return {day: results[day] for day in sorted(results)}


def draft_itinerary(
    candidates: Sequence[Candidate],
    request: PlanningRequest,
    *,
    config: Settings | None = None,
) -> DraftPlan:
    config = config or settings
    pool = list(candidates)
    trip_days = clamp_trip_days(request.trip_days, config)
    start = request.start_date or date.today()
    scorer = PlaceScorer(config)

    k = _region_count(pool, trip_days, request, config)
    logging.info(f"Planning {trip_days} days from {len(pool)} candidates with {k} regions")
    clustering = cluster_candidates(pool, k, max_iterations=config.max_iterations)
    clusters = [truncate_cluster(cluster, pool, scorer=scorer, config=config) for cluster in clustering.clusters]
    regions = profile_regions(clusters, pool, names=request.region_names, config=config)
    by_day = assign_regions_to_days(regions, trip_days)

    itineraries = _plan_days(pool, by_day, request, start, scorer, config)
    reasons = needs_review(itineraries, config)
    metadata = PlanMetadata(
        trip_days=trip_days,
        cluster_count=len(clustering.clusters),
        iterations=clustering.iterations,
        converged=clustering.converged,
        excluded_ids=clustering.excluded_ids,
        regions=tuple(regions),
        review_reasons=tuple(reasons),
    )
    return DraftPlan(itineraries=itineraries, metadata=metadata, transport_mode=request.transport_mode)


def finalize_itinerary(
    draft: DraftPlan,
    suggestions: Optional[Iterable[AdjustmentSuggestion]] = None,
    *,
    config: Settings | None = None,
) -> PlanningResult:
    if suggestions is None:
        itineraries = dict(draft.itineraries)
        review_applied = False
    else:
        itineraries = apply_adjustments(
            draft.itineraries,
            suggestions,
            transport_mode=draft.transport_mode,
            config=config,
        )
        review_applied = True
    summary = build_summary(itineraries, review_applied=review_applied)
    logging.info(
        f"Finalized itinerary: {summary.total_places} places over {summary.total_days} days, "
        f"{summary.estimated_total_distance_km:.1f} km"
    )
    return PlanningResult(itineraries=itineraries, summary=summary, metadata=draft.metadata)


def plan_itinerary(
    candidates: Sequence[Candidate],
    request: PlanningRequest,
    review_source: ReviewSource | None = None,
    *,
    config: Settings | None = None,
) -> PlanningResult:
    draft = draft_itinerary(candidates, request, config=config)
    reasons = draft.metadata.review_reasons
    if review_source is None or not (reasons or request.force_review):
        return finalize_itinerary(draft, config=config)

    try:
        suggestions = list(review_source.suggest(draft.itineraries, reasons))
    except Exception as exc:
        logging.warning(f"Review source failed, keeping the draft itinerary: {exc}")
        result = finalize_itinerary(draft, config=config)
        result.ignored_review = str(exc)
        return result
    return finalize_itinerary(draft, suggestions, config=config)
