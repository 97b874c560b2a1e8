"""Geographic K-Means clustering of candidate places.

Lloyd iterations over great-circle distances with deterministic seeding:

- seeds are picked by farthest-point sampling starting from the first valid
  candidate, so identical input always produces identical clusters;
- each candidate joins the cluster with the nearest centroid (first cluster
  wins on ties);
- centroids are replaced by the arithmetic mean of their members, and an
  empty cluster keeps its previous centroid;
- iteration stops once no assignment changes or the iteration cap is hit.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

import numpy as np
from sklearn.metrics.pairwise import haversine_distances

from ...config import Settings, settings
from ...models.domain import Candidate, Cluster, ClusteringResult, Coordinate
from ..geospatial import EARTH_RADIUS_KM, is_valid_coordinate
from ..scoring import PlaceScorer


def _distance_matrix(points: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """Pairwise great-circle distances (km) between (lat, lon) degree arrays."""
    return haversine_distances(np.radians(points), np.radians(centers)) * EARTH_RADIUS_KM


def _valid_points(pool: Sequence[Candidate]) -> tuple[list[int], list[str]]:
    valid: list[int] = []
    excluded: list[str] = []
    for index, candidate in enumerate(pool):
        if is_valid_coordinate(candidate.latitude, candidate.longitude):
            valid.append(index)
        else:
            excluded.append(candidate.candidate_id)
    if excluded:
        logging.warning(f"Excluding {len(excluded)} candidates with malformed coordinates: {excluded}")
    return valid, excluded


def _seed_indices(points: np.ndarray, k: int) -> list[int]:
    """Farthest-point seeding: each new seed maximizes its distance to the chosen ones."""

    seeds = [0]
    min_dist = _distance_matrix(points, points[[0]])[:, 0]
    while len(seeds) < k:
        candidate = int(np.argmax(min_dist))
        if min_dist[candidate] <= 0.0:
            # Every remaining point coincides with a seed; fall back to input order.
            candidate = next(i for i in range(len(points)) if i not in seeds)
        seeds.append(candidate)
        min_dist = np.minimum(min_dist, _distance_matrix(points, points[[candidate]])[:, 0])
    return seeds


def _recompute_centers(points: np.ndarray, labels: np.ndarray, centers: np.ndarray) -> np.ndarray:
    updated = []
    for cluster_id in range(len(centers)):
        mask = labels == cluster_id
        updated.append(points[mask].mean(axis=0) if mask.any() else centers[cluster_id])
    return np.array(updated)


def cluster_candidates(
    pool: Sequence[Candidate],
    k: int,
    *,
    max_iterations: int | None = None,
) -> ClusteringResult:
    """Partition the pool into at most ``k`` geographic clusters."""

    if k < 1:
        raise ValueError("k must be >= 1")
    if max_iterations is None:
        max_iterations = settings.max_iterations
    if max_iterations < 1:
        raise ValueError("max_iterations must be >= 1")

    valid, excluded = _valid_points(pool)
    if not valid:
        return ClusteringResult(clusters=(), iterations=0, converged=True, excluded_ids=tuple(excluded))

    k = min(k, len(valid))
    points = np.array([[pool[i].latitude, pool[i].longitude] for i in valid], dtype=float)
    centers = points[_seed_indices(points, k)]
    labels = np.full(len(points), -1)

    converged = False
    iterations = 0
    for iterations in range(1, max_iterations + 1):
        new_labels = np.argmin(_distance_matrix(points, centers), axis=1)
        if np.array_equal(new_labels, labels):
            converged = True
            break
        labels = new_labels
        centers = _recompute_centers(points, labels, centers)

    if not converged:
        logging.warning(f"K-Means did not converge within {max_iterations} iterations; keeping last assignment")
    logging.info(f"Clustered {len(valid)} candidates into {k} clusters in {iterations} iterations")

    clusters = tuple(
        Cluster(
            cluster_id=cluster_id,
            centroid=Coordinate(latitude=float(centers[cluster_id][0]), longitude=float(centers[cluster_id][1])),
            member_indices=tuple(valid[i] for i in np.flatnonzero(labels == cluster_id)),
        )
        for cluster_id in range(k)
    )
    return ClusteringResult(
        clusters=clusters,
        iterations=iterations,
        converged=converged,
        excluded_ids=tuple(excluded),
    )


def truncate_cluster(
    cluster: Cluster,
    pool: Sequence[Candidate],
    *,
    scorer: PlaceScorer | None = None,
    config: Settings | None = None,
) -> Cluster:
    """Keep the top-scoring members within the per-category and per-region caps.

    Dropped members stay in the pool; they are only left out of this run.
    """

    config = config or settings
    if not cluster.member_indices:
        return cluster
    scorer = scorer or PlaceScorer(config)

    kept: list[int] = []
    per_category: Counter = Counter()
    for entry in scorer.rank(pool, cluster.member_indices, anchor=cluster.centroid):
        category = entry.candidate.category
        if per_category[category] >= config.candidates_per_category:
            continue
        per_category[category] += 1
        kept.append(entry.index)
        if len(kept) >= config.places_per_region:
            break

    if len(kept) == cluster.size:
        return cluster

    members = tuple(sorted(kept))
    center = np.array([[pool[i].latitude, pool[i].longitude] for i in members]).mean(axis=0)
    logging.info(f"Cluster {cluster.cluster_id}: kept {len(members)} of {cluster.size} members")
    return Cluster(
        cluster_id=cluster.cluster_id,
        centroid=Coordinate(latitude=float(center[0]), longitude=float(center[1])),
        member_indices=members,
    )


def within_cluster_sum_of_squares(result: ClusteringResult, pool: Sequence[Candidate]) -> float:
    total = 0.0
    for cluster in result.clusters:
        if not cluster.member_indices:
            continue
        points = np.array([[pool[i].latitude, pool[i].longitude] for i in cluster.member_indices])
        center = np.array([[cluster.centroid.latitude, cluster.centroid.longitude]])
        total += float((_distance_matrix(points, center) ** 2).sum())
    return total


def suggest_cluster_count(pool: Sequence[Candidate], trip_days: int, *, config: Settings | None = None) -> int:
    """Elbow heuristic: try k in [days, 2*days] and stop where WCSS flattens.

    The result is capped at ``1.5 * trip_days`` and at the number of valid candidates.
    """

    config = config or settings
    valid, _ = _valid_points(pool)
    if not valid:
        return 1

    ks = [k for k in range(trip_days, trip_days * 2 + 1) if k <= len(valid)]
    if not ks:
        return len(valid)

    wcss = [within_cluster_sum_of_squares(cluster_candidates(pool, k), pool) for k in ks]
    optimal = ks[-1]
    for i in range(1, len(wcss)):
        previous = wcss[i - 1]
        decrease = (previous - wcss[i]) / previous if previous > 0 else 0.0
        if decrease < config.elbow_threshold:
            optimal = ks[i - 1]
            break

    optimal = min(optimal, int(trip_days * 1.5), len(valid))
    logging.info(f"Elbow heuristic picked {optimal} clusters for {trip_days} days (WCSS={wcss})")
    return max(1, optimal)
