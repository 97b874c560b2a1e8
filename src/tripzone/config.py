"""Application configuration and optimization parameters."""

from typing import Any

import json
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TRIPZONE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Tripzone Itinerary API"
    api_prefix: str = "/api"
    log_level: str = "INFO"
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=("http://localhost:5173", "http://127.0.0.1:5173"),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Distance tiers (km)
    walking_distance_km: float = Field(default=2.0, gt=0.0)
    near_distance_km: float = Field(default=5.0, gt=0.0)
    far_distance_km: float = Field(default=10.0, gt=0.0)
    max_cluster_radius_km: float = Field(default=5.0, gt=0.0)

    # Place ranking weights
    distance_weight: float = Field(default=0.4, ge=0.0)
    review_weight: float = Field(default=0.3, ge=0.0)
    rating_weight: float = Field(default=0.3, ge=0.0)

    # Region ranking weights
    region_base_weight: float = Field(default=0.6, ge=0.0)
    region_diversity_weight: float = Field(default=0.4, ge=0.0)

    review_threshold: int = Field(default=1000, ge=1, description="Review volume that earns a full review factor.")
    review_log_base: float = Field(default=3.0, gt=1.0)
    max_rating: float = Field(default=5.0, gt=0.0)

    # Capacities
    max_places_per_block: int = Field(default=2, ge=1)
    candidates_per_category: int = Field(default=10, ge=1)
    places_per_region: int = Field(default=10, ge=1)
    min_trip_days: int = Field(default=1, ge=1)
    max_trip_days: int = Field(default=3, ge=1)
    regions_per_day: int = Field(default=2, ge=1)

    # Clustering
    max_iterations: int = Field(default=50, ge=1)
    elbow_threshold: float = Field(default=0.2, gt=0.0, lt=1.0)

    # Scheduling
    default_activity_minutes: int = Field(default=90, ge=1)
    car_speed_kmh: float = Field(default=30.0, gt=0.0)
    public_transport_speed_kmh: float = Field(default=20.0, gt=0.0)
    walking_speed_kmh: float = Field(default=4.0, gt=0.0)
    default_speed_kmh: float = Field(default=25.0, gt=0.0)

    # Review triggers
    review_distance_warning_km: float = Field(default=20.0, gt=0.0)
    min_places_per_day: int = Field(default=4, ge=0)
    max_places_per_day: int = Field(default=10, ge=1)

    day_workers: int = Field(default=3, ge=1, description="Worker threads used to build days in parallel.")

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @model_validator(mode="after")
    def _check_ordering(self) -> "Settings":
        if not self.walking_distance_km <= self.near_distance_km <= self.far_distance_km:
            raise ValueError("distance tiers must satisfy walking <= near <= far")
        if self.min_trip_days > self.max_trip_days:
            raise ValueError("min_trip_days must be <= max_trip_days")
        if self.min_places_per_day > self.max_places_per_day:
            raise ValueError("min_places_per_day must be <= max_places_per_day")
        if self.distance_weight + self.review_weight + self.rating_weight <= 0:
            raise ValueError("place score weights must not all be zero")
        return self

    def speed_for(self, transport_mode: str | None) -> float:
        """Average speed (km/h) for a transport mode name."""
        match (transport_mode or "").lower():
            case "car" | "driving":
                return self.car_speed_kmh
            case "public" | "public_transport" | "transit":
                return self.public_transport_speed_kmh
            case "walking" | "walk":
                return self.walking_speed_kmh
            case _:
                return self.default_speed_kmh


settings = Settings()
