"""Geographic clustering services."""

from .kmeans import cluster_candidates, suggest_cluster_count, truncate_cluster

__all__ = [
    "cluster_candidates",
    "suggest_cluster_count",
    "truncate_cluster",
]
