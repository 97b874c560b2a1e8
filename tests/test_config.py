import pytest
from pydantic import ValidationError

from src.tripzone.config import Settings


def test_defaults():
    config = Settings()
    assert config.max_places_per_block == 2
    assert (config.min_trip_days, config.max_trip_days) == (1, 3)
    assert config.distance_weight + config.review_weight + config.rating_weight == pytest.approx(1.0)


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_places_per_block": -1},
        {"places_per_region": 0},
        {"min_trip_days": 3, "max_trip_days": 1},
        {"walking_distance_km": 6.0},
        {"distance_weight": 0.0, "review_weight": 0.0, "rating_weight": 0.0},
    ],
)
def test_invalid_configuration_fails_fast(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TRIPZONE_MAX_ITERATIONS", "7")
    monkeypatch.setenv("TRIPZONE_FRONTEND_ALLOWED_ORIGINS", '["https://a.example", "https://b.example"]')

    config = Settings()

    assert config.max_iterations == 7
    assert config.frontend_allowed_origins == ("https://a.example", "https://b.example")


@pytest.mark.parametrize(
    "mode, speed",
    [("car", 30.0), ("transit", 20.0), ("WALKING", 4.0), (None, 25.0), ("bicycle", 25.0)],
)
def test_speed_for(mode, speed):
    assert Settings().speed_for(mode) == speed
