"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Optional, Sequence, TypeVar

from ..config import settings
from ..models.domain import Coordinate, DistanceTier

EARTH_RADIUS_KM = 6371.0

T = TypeVar("T")


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def centroid(points: Sequence[Coordinate]) -> Coordinate:
    """Arithmetic mean of latitudes and longitudes. Callers must not pass an empty set."""

    if not points:
        raise ValueError("centroid of an empty point set is undefined")
    lat = sum(p.latitude for p in points) / len(points)
    lon = sum(p.longitude for p in points) / len(points)
    return Coordinate(latitude=lat, longitude=lon)


def total_path_distance(points: Sequence[Coordinate]) -> float:
    """Sum of consecutive leg distances; 0 for fewer than two points."""

    return sum(distance_km(points[i], points[i + 1]) for i in range(len(points) - 1))


def nearest_of(point: Coordinate, candidates: Sequence[T], key=None) -> Optional[T]:
    """Return the candidate closest to ``point``; the first one wins on ties.

    ``key`` maps a candidate to its Coordinate when candidates are not coordinates.
    """

    best: Optional[T] = None
    best_distance = math.inf
    for candidate in candidates:
        coordinate = key(candidate) if key else candidate
        dist = distance_km(point, coordinate)
        if dist < best_distance:
            best = candidate
            best_distance = dist
    return best


def is_valid_coordinate(latitude: float | None, longitude: float | None) -> bool:
    if latitude is None or longitude is None:
        return False
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    return -90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0


def categorize_distance(km: float) -> DistanceTier:
    if km <= settings.walking_distance_km:
        return DistanceTier.WALKABLE
    if km <= settings.near_distance_km:
        return DistanceTier.NEAR
    return DistanceTier.FAR


def travel_minutes(km: float, speed_kmh: float) -> int:
    """Whole minutes needed to cover ``km`` at ``speed_kmh``."""

    if km <= 0 or speed_kmh <= 0:
        return 0
    return math.ceil(km / speed_kmh * 60)
