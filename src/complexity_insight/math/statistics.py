"""Descriptive statistics used by the project-level structure scores."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def get_median(values: Sequence[float]) -> float:
    """Median of ``values``: the middle element, or the mean of the two central ones.

    The input is not modified. Returns 0.0 for an empty sequence.
    """
    if len(values) == 0:
        return 0.0
    return float(np.median(np.asarray(values, dtype=float)))


def percentify(value: float, limit: float) -> float:
    """Express ``value`` as a percentage of ``limit``; 0 when ``limit`` is 0."""
    if limit == 0:
        return 0.0
    return value / limit * 100

