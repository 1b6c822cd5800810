"""Mathematical utilities for project-level aggregation."""

from .statistics import get_median, percentify

__all__ = ["get_median", "percentify"]
