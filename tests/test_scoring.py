import pytest

from src.tripzone.models.domain import Candidate, Category, Coordinate
from src.tripzone.services.scoring import PlaceScorer, ScoredCandidate

ANCHOR = Coordinate(37.5665, 126.9780)


def _candidate(cid: str, lat: float = 37.5665, lon: float = 126.9780, rating: float = 4.0,
               reviews: int = 100) -> Candidate:
    return Candidate(
        candidate_id=cid,
        name=f"Place {cid}",
        category=Category.ATTRACTION,
        coordinate=Coordinate(lat, lon),
        rating=rating,
        review_count=reviews,
    )


def test_perfect_candidate_at_anchor_scores_one():
    scorer = PlaceScorer()
    assert scorer.score(_candidate("P", rating=5.0, reviews=1000), ANCHOR) == pytest.approx(1.0)


def test_review_factor_saturates():
    scorer = PlaceScorer()
    assert scorer.review_factor(0) == 0.0
    assert scorer.review_factor(2000) == 1.0
    assert 0 < scorer.review_factor(100) < 1


def test_distance_factor_bottoms_out_beyond_far_tier():
    scorer = PlaceScorer()
    far = _candidate("F", lat=37.7, lon=127.2)
    assert scorer.distance_factor(far, ANCHOR) == 0.0
    assert scorer.distance_factor(far, None) == 1.0


def test_rank_orders_by_score_then_pool_order():
    scorer = PlaceScorer()
    pool = [
        _candidate("near", rating=4.0),
        _candidate("twin", rating=4.0),
        _candidate("far", lat=37.6, rating=4.0),
        _candidate("best", rating=5.0, reviews=1000),
    ]

    ranked = scorer.rank(pool, range(len(pool)), anchor=ANCHOR)

    assert [entry.candidate.candidate_id for entry in ranked] == ["best", "near", "twin", "far"]


def test_rank_weights_scale_scores():
    scorer = PlaceScorer()
    pool = [_candidate("a", rating=5.0), _candidate("b", rating=3.0)]

    ranked = scorer.rank(pool, [0, 1], anchor=ANCHOR, weights={0: 0.1, 1: 1.0})

    assert ranked[0].candidate.candidate_id == "b"
    assert ranked[1].score == pytest.approx(0.1 * scorer.score(pool[0], ANCHOR))


def test_equal_scores_break_ties_on_rating_then_reviews_then_index():
    entries = [
        ScoredCandidate(0, _candidate("later", rating=4.0, reviews=100), 0.5),
        ScoredCandidate(1, _candidate("popular", rating=4.0, reviews=900), 0.5),
        ScoredCandidate(2, _candidate("top-rated", rating=4.8, reviews=10), 0.5),
        ScoredCandidate(3, _candidate("twin", rating=4.0, reviews=100), 0.5),
        ScoredCandidate(4, _candidate("winner", rating=1.0, reviews=1), 0.9),
    ]

    ordered = sorted(reversed(entries), key=PlaceScorer.sort_key)

    assert [entry.candidate.candidate_id for entry in ordered] == ["winner", "top-rated", "popular", "later", "twin"]
