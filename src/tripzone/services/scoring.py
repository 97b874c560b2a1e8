"""Weighted desirability score for candidate places."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from ..config import Settings, settings
from ..models.domain import Candidate, Coordinate
from .geospatial import distance_km


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


@dataclass(slots=True)
class ScoredCandidate:
    index: int
    candidate: Candidate
    score: float


class PlaceScorer:
    """Score = distance closeness + review volume + rating, weighted by settings.

    Distance is measured to an anchor (previous stop or region center) and
    normalized against the far-distance tier.
    """

    def __init__(self, config: Settings | None = None) -> None:
        self.config = config or settings

    def distance_factor(self, candidate: Candidate, anchor: Coordinate | None) -> float:
        if anchor is None:
            return 1.0
        normalized = _clamp(distance_km(candidate.coordinate, anchor) / self.config.far_distance_km)
        return 1.0 - normalized

    def review_factor(self, review_count: int | None) -> float:
        if not review_count or review_count <= 0:
            return 0.0
        base = self.config.review_log_base
        return _clamp(math.log(review_count + 1, base) / math.log(self.config.review_threshold + 1, base))

    def rating_factor(self, rating: float | None) -> float:
        if not rating or rating <= 0:
            return 0.0
        return _clamp(rating / self.config.max_rating)

    def score(self, candidate: Candidate, anchor: Coordinate | None = None) -> float:
        return (
            self.config.distance_weight * self.distance_factor(candidate, anchor)
            + self.config.review_weight * self.review_factor(candidate.review_count)
            + self.config.rating_weight * self.rating_factor(candidate.rating)
        )

    @staticmethod
    def sort_key(entry: ScoredCandidate) -> tuple[float, float, int, int]:
        """Higher score, then higher rating, then more reviews, then pool order."""
        return (
            -entry.score,
            -(entry.candidate.rating or 0.0),
            -(entry.candidate.review_count or 0),
            entry.index,
        )

    def rank(
        self,
        pool: Sequence[Candidate],
        indices: Sequence[int],
        anchor: Coordinate | None = None,
        weights: dict[int, float] | None = None,
    ) -> list[ScoredCandidate]:
        """Rank pool members (by pool index), optionally scaling each score by a weight."""

        scored = []
        for index in indices:
            candidate = pool[index]
            value = self.score(candidate, anchor)
            if weights is not None:
                value *= weights.get(index, 0.0)
            scored.append(ScoredCandidate(index=index, candidate=candidate, score=value))
        return sorted(scored, key=self.sort_key)
