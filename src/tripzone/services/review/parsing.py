"""Structured review replies.

The external reviewer answers with a JSON object, sometimes wrapped in prose:

    {"needsAdjustment": true, "reason": "...",
     "suggestions": [{"day": 1, "type": "MOVE", "place": "...", "targetDay": 2}]}
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...models.domain import AdjustmentKind, AdjustmentSuggestion, DailyItinerary


class ReviewSource(Protocol):
    def suggest(
        self,
        itineraries: Mapping[int, DailyItinerary],
        reasons: Sequence[str],
    ) -> Sequence[AdjustmentSuggestion]:
        ...


class SuggestionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    day: int = Field(..., ge=1)
    type: AdjustmentKind
    place: Optional[str] = None
    target_day: Optional[int] = Field(default=None, alias="targetDay")
    swap_with: Optional[str] = Field(default=None, alias="swapWith")
    duration_minutes: Optional[int] = Field(default=None, alias="durationMinutes", gt=0)
    action: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalise_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def to_domain(self) -> AdjustmentSuggestion:
        return AdjustmentSuggestion(
            day=self.day,
            kind=self.type,
            place=self.place,
            target_day=self.target_day,
            swap_with=self.swap_with,
            duration_minutes=self.duration_minutes,
            action=self.action,
        )


class ReviewPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    needs_adjustment: bool = Field(default=False, alias="needsAdjustment")
    reason: Optional[str] = None
    suggestions: List[Any] = Field(default_factory=list)


def parse_review_response(text: str | None) -> List[AdjustmentSuggestion]:
    """Extract suggestions from a reply; anything unparsable yields an empty list."""

    if not text:
        return []
    start, end = text.find("{"), text.rfind("}")
    if start < 0 or end <= start:
        logging.warning("Review reply contains no JSON object")
        return []

    try:
        payload = ReviewPayload.model_validate_json(text[start : end + 1])
    except ValidationError as exc:
        logging.warning(f"Could not parse review reply: {exc.error_count()} errors")
        return []
    if not payload.needs_adjustment:
        return []

    suggestions: List[AdjustmentSuggestion] = []
    for raw in payload.suggestions:
        try:
            suggestions.append(SuggestionPayload.model_validate(raw).to_domain())
        except ValidationError:
            logging.warning(f"Skipping malformed review suggestion: {raw!r}")
    logging.info(f"Review reply parsed: {len(suggestions)} suggestions ({payload.reason})")
    return suggestions
