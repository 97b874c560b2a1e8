"""Domain models for candidates, regions and itineraries."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class Category(str, Enum):
    ATTRACTION = "attraction"
    RESTAURANT = "restaurant"
    CAFE = "cafe"
    SHOPPING = "shopping"
    ACTIVITY = "activity"
    CULTURE = "culture"
    NATURE = "nature"
    THEME_PARK = "theme-park"
    NIGHT_VIEW = "night-view"
    LODGING = "lodging"


class TimeBlock(str, Enum):
    """Named segments of a travel day, declared in chronological order."""

    BREAKFAST = "breakfast"
    MORNING_ACTIVITY = "morning_activity"
    LUNCH = "lunch"
    CAFE = "cafe"
    AFTERNOON_ACTIVITY = "afternoon_activity"
    DINNER = "dinner"
    EVENING_ACTIVITY = "evening_activity"

    @property
    def start_hour(self) -> int:
        return _BLOCK_HOURS[self][0]

    @property
    def end_hour(self) -> int:
        return _BLOCK_HOURS[self][1]

    @property
    def order(self) -> int:
        return list(TimeBlock).index(self)


# The cafe block sits inside the afternoon window and is only filled when a cafe is at hand.
_BLOCK_HOURS: dict[TimeBlock, tuple[int, int]] = {
    TimeBlock.BREAKFAST: (7, 9),
    TimeBlock.MORNING_ACTIVITY: (9, 12),
    TimeBlock.LUNCH: (12, 14),
    TimeBlock.CAFE: (14, 16),
    TimeBlock.AFTERNOON_ACTIVITY: (14, 18),
    TimeBlock.DINNER: (18, 20),
    TimeBlock.EVENING_ACTIVITY: (20, 22),
}


class DistanceTier(str, Enum):
    WALKABLE = "walkable"
    NEAR = "near"
    FAR = "far"


class AdjustmentKind(str, Enum):
    MOVE = "MOVE"
    REMOVE = "REMOVE"
    SWAP = "SWAP"
    ADD_BREAK = "ADD_BREAK"


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class Candidate:
    """A point of interest supplied by the upstream collector.

    ``day`` and ``time_block`` are only set on copies produced by the allocator.
    """

    candidate_id: str
    name: str
    category: Category
    coordinate: Coordinate
    rating: float = 0.0
    review_count: int = 0
    operating_hours: Optional[str] = None
    price_level: Optional[str] = None
    is_trendy: bool = False
    address: Optional[str] = None
    day: Optional[int] = None
    time_block: Optional[TimeBlock] = None

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    def matches(self, reference: str) -> bool:
        return reference in (self.candidate_id, self.name)


@dataclass(frozen=True, slots=True)
class Cluster:
    """Centroid plus indices into the candidate pool."""

    cluster_id: int
    centroid: Coordinate
    member_indices: tuple[int, ...] = ()

    @property
    def size(self) -> int:
        return len(self.member_indices)


@dataclass(frozen=True, slots=True)
class ClusteringResult:
    clusters: tuple[Cluster, ...]
    iterations: int
    converged: bool
    excluded_ids: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RegionProfile:
    region_id: int
    name: str
    center: Coordinate
    member_count: int
    average_rating: float
    diversity_score: float
    rank_score: float
    member_indices: tuple[int, ...]
    radius_km: float = 0.0
    within_radius_cap: bool = True
    hull: tuple[tuple[float, float], ...] = ()


@dataclass(frozen=True, slots=True)
class RouteLeg:
    sequence: int
    candidate_id: str
    time_block: Optional[TimeBlock]
    start_time: str
    distance_from_prev_km: float
    travel_minutes: int
    tier: Optional[DistanceTier]


@dataclass(frozen=True, slots=True)
class RestBreak:
    after_candidate_id: Optional[str]
    time_block: Optional[TimeBlock]
    duration_minutes: int
    note: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DailyItinerary:
    day_number: int
    date: date
    regions: tuple[str, ...]
    places: tuple[Candidate, ...]
    total_distance_km: float = 0.0
    legs: tuple[RouteLeg, ...] = ()
    breaks: tuple[RestBreak, ...] = ()

    def places_in_block(self, block: TimeBlock) -> list[Candidate]:
        return [place for place in self.places if place.time_block == block]

    def find(self, reference: str) -> Optional[Candidate]:
        return next((place for place in self.places if place.matches(reference)), None)


@dataclass(frozen=True, slots=True)
class TravelSummary:
    total_days: int
    total_places: int
    total_regions: int
    average_regions_per_day: float
    category_distribution: dict[str, int] = field(default_factory=dict)
    estimated_total_distance_km: float = 0.0
    review_applied: bool = False


@dataclass(frozen=True, slots=True)
class AdjustmentSuggestion:
    day: int
    kind: AdjustmentKind
    place: Optional[str] = None
    target_day: Optional[int] = None
    swap_with: Optional[str] = None
    duration_minutes: Optional[int] = None
    action: Optional[str] = None
