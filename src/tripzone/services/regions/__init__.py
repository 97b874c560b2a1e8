"""Region profiling services."""

from .profiler import profile_regions

__all__ = ["profile_regions"]
