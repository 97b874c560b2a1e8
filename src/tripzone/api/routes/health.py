"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ... import __version__
from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/config", status_code=status.HTTP_200_OK)
def health_config() -> dict:
    """Report the active planning limits."""
    return {
        "version": __version__,
        "trip_days": [settings.min_trip_days, settings.max_trip_days],
        "max_places_per_block": settings.max_places_per_block,
        "places_per_region": settings.places_per_region,
        "max_iterations": settings.max_iterations,
    }
