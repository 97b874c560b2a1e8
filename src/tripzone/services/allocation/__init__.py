"""Day allocation services."""

from .matching import BLOCK_CATEGORY_PRIORITY, block_priority
from .service import allocate_day, assign_regions_to_days, clamp_trip_days

__all__ = [
    "BLOCK_CATEGORY_PRIORITY",
    "block_priority",
    "allocate_day",
    "assign_regions_to_days",
    "clamp_trip_days",
]
