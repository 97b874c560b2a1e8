"""Draft review: triggers, reply parsing and adjustment application."""

from .adjuster import apply_adjustments
from .parsing import ReviewSource, parse_review_response
from .triggers import needs_review

__all__ = ["apply_adjustments", "needs_review", "parse_review_response", "ReviewSource"]
