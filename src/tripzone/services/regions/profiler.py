"""Turn converged clusters into named, ranked region profiles."""

from __future__ import annotations

from collections import Counter
from typing import Mapping, Sequence

from shapely.geometry import MultiPoint, Point, Polygon

from ...config import Settings, settings
from ...models.domain import Candidate, Cluster, RegionProfile
from ..geospatial import distance_km


def _region_name(
    cluster: Cluster,
    members: Sequence[Candidate],
    position: int,
    names: Mapping[int, str] | None,
) -> str:
    if names and names.get(cluster.cluster_id):
        return names[cluster.cluster_id]
    tokens = Counter(
        member.address.split()[0]
        for member in members
        if member.address and member.address.strip()
    )
    if tokens:
        # most_common keeps first-seen order on equal counts
        return tokens.most_common(1)[0][0]
    return f"Region {position}"


def _hull_overlay(members: Sequence[Candidate]) -> tuple[tuple[float, float], ...]:
    """Closed ring of (lat, lon) around the members; empty when they are collinear or fewer than 3."""

    if len(members) < 3:
        return ()
    hull = MultiPoint([Point(m.longitude, m.latitude) for m in members]).convex_hull
    if not isinstance(hull, Polygon) or hull.is_empty:
        return ()
    return tuple((float(lat), float(lon)) for lon, lat in hull.exterior.coords)


def profile_regions(
    clusters: Sequence[Cluster],
    pool: Sequence[Candidate],
    *,
    names: Mapping[int, str] | None = None,
    config: Settings | None = None,
) -> list[RegionProfile]:
    """Profile non-empty clusters and sort them by rank score.

    Rank score = base weight * (average rating / max rating)
    + diversity weight * (unique categories in region / unique categories in pool).
    Equal scores keep cluster insertion order.
    """

    config = config or settings
    pool_categories = {candidate.category for candidate in pool}
    profiles: list[RegionProfile] = []

    position = 0
    seen_names: Counter[str] = Counter()
    for cluster in clusters:
        if not cluster.member_indices:
            continue
        position += 1
        members = [pool[i] for i in cluster.member_indices]

        ratings = [m.rating for m in members if m.rating]
        average_rating = sum(ratings) / len(ratings) if ratings else 0.0
        diversity = len({m.category for m in members}) / len(pool_categories) if pool_categories else 0.0
        rank_score = (
            config.region_base_weight * min(1.0, average_rating / config.max_rating)
            + config.region_diversity_weight * diversity
        )
        radius = max(distance_km(cluster.centroid, m.coordinate) for m in members)
        name = _region_name(cluster, members, position, names)
        seen_names[name] += 1
        if seen_names[name] > 1:
            # regions are keyed by name downstream
            name = f"{name} {seen_names[name]}"

        profiles.append(
            RegionProfile(
                region_id=cluster.cluster_id,
                name=name,
                center=cluster.centroid,
                member_count=cluster.size,
                average_rating=average_rating,
                diversity_score=diversity,
                rank_score=rank_score,
                member_indices=cluster.member_indices,
                radius_km=radius,
                within_radius_cap=radius <= config.max_cluster_radius_km,
                hull=_hull_overlay(members),
            )
        )

    return sorted(profiles, key=lambda profile: -profile.rank_score)
