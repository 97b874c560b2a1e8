import pytest

from src.tripzone.config import Settings
from src.tripzone.models.domain import Candidate, Category, Coordinate
from src.tripzone.services.clustering import cluster_candidates, suggest_cluster_count, truncate_cluster
from src.tripzone.services.geospatial import centroid

CENTERS = {
    "S": (37.5665, 126.9780),  # Seoul
    "I": (37.4563, 126.7052),  # Incheon
    "W": (37.2636, 127.0286),  # Suwon
}


def _candidate(cid: str, lat: float, lon: float, category: Category = Category.ATTRACTION, rating: float = 4.0,
               reviews: int = 100) -> Candidate:
    return Candidate(
        candidate_id=cid,
        name=f"Place {cid}",
        category=category,
        coordinate=Coordinate(lat, lon),
        rating=rating,
        review_count=reviews,
    )


def _three_groups() -> list[Candidate]:
    pool = []
    for key, (lat, lon) in CENTERS.items():
        for i, (dlat, dlon) in enumerate([(0.0, 0.0), (0.002, 0.001), (-0.001, 0.002)]):
            pool.append(_candidate(f"{key}{i}", lat + dlat, lon + dlon))
    return pool


def _partition(result, pool) -> set[frozenset[str]]:
    return {frozenset(pool[i].candidate_id for i in cluster.member_indices) for cluster in result.clusters}


EXPECTED = {
    frozenset({"S0", "S1", "S2"}),
    frozenset({"I0", "I1", "I2"}),
    frozenset({"W0", "W1", "W2"}),
}


@pytest.mark.parametrize("order", ["as_is", "reversed", "interleaved"])
def test_three_tight_groups_are_recovered_for_any_input_order(order):
    pool = _three_groups()
    if order == "reversed":
        pool = list(reversed(pool))
    elif order == "interleaved":
        pool = [pool[i] for i in (0, 3, 6, 1, 4, 7, 2, 5, 8)]

    result = cluster_candidates(pool, 3)

    assert result.converged
    assert len(result.clusters) == 3
    assert _partition(result, pool) == EXPECTED


def test_clustering_is_deterministic():
    pool = _three_groups()
    assert cluster_candidates(pool, 2) == cluster_candidates(pool, 2)


def test_centroids_are_member_means():
    pool = _three_groups()
    result = cluster_candidates(pool, 3)
    for cluster in result.clusters:
        expected = centroid([pool[i].coordinate for i in cluster.member_indices])
        assert cluster.centroid.latitude == pytest.approx(expected.latitude)
        assert cluster.centroid.longitude == pytest.approx(expected.longitude)


def test_iteration_cap_is_respected():
    pool = _three_groups()
    result = cluster_candidates(pool, 3, max_iterations=1)
    assert result.iterations == 1
    assert not result.converged


def test_malformed_coordinates_are_excluded():
    pool = _three_groups() + [_candidate("BAD", 95.0, 127.0)]
    result = cluster_candidates(pool, 3)

    assert result.excluded_ids == ("BAD",)
    members = {i for cluster in result.clusters for i in cluster.member_indices}
    assert len(pool) - 1 not in members
    assert len(members) == 9


def test_cluster_count_is_clamped_to_valid_candidates():
    pool = _three_groups()[:2]
    result = cluster_candidates(pool, 5)
    assert len(result.clusters) == 2


def test_non_positive_cluster_count_raises():
    with pytest.raises(ValueError):
        cluster_candidates(_three_groups(), 0)


@pytest.mark.parametrize("iterations", [0, -3])
def test_non_positive_iteration_cap_raises(iterations):
    with pytest.raises(ValueError):
        cluster_candidates(_three_groups(), 3, max_iterations=iterations)


def test_empty_pool_yields_no_clusters():
    result = cluster_candidates([], 3)
    assert result.clusters == ()
    assert result.converged


def test_truncate_cluster_applies_category_cap():
    lat, lon = CENTERS["S"]
    pool = [
        _candidate(f"R{i}", lat + 0.0005 * i, lon, Category.RESTAURANT, rating=3.0 + 0.1 * i)
        for i in range(6)
    ] + [_candidate("A0", lat, lon + 0.001, Category.ATTRACTION)]
    result = cluster_candidates(pool, 1)
    config = Settings(candidates_per_category=3)

    truncated = truncate_cluster(result.clusters[0], pool, config=config)

    kept = [pool[i] for i in truncated.member_indices]
    assert sum(1 for c in kept if c.category == Category.RESTAURANT) == 3
    assert any(c.candidate_id == "A0" for c in kept)
    expected = centroid([c.coordinate for c in kept])
    assert truncated.centroid.latitude == pytest.approx(expected.latitude)


def test_truncate_cluster_applies_region_cap():
    lat, lon = CENTERS["I"]
    pool = [_candidate(f"P{i}", lat + 0.0003 * i, lon) for i in range(15)]
    result = cluster_candidates(pool, 1)

    truncated = truncate_cluster(result.clusters[0], pool, config=Settings(candidates_per_category=20))

    assert truncated.size == 10


def test_suggest_cluster_count_finds_three_groups():
    assert suggest_cluster_count(_three_groups(), 2) == 3


def test_suggest_cluster_count_on_empty_pool():
    assert suggest_cluster_count([], 2) == 1
