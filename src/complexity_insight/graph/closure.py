"""Transitive closure and structural scores over the adjacency matrix.

Visibility (reachability) is computed with Floyd-Warshall on a distance
matrix in O(N^3), rather than by raising the adjacency matrix to successive
powers in O(N^4).

    change cost = finite entries of the closure (diagonal included) / N^2
    core        = modules with fan-in >= median AND fan-out >= median
    core size   = |core| / N

Reference: MacCormack, Rusnak & Baldwin, "Exploring the Structure of
Complex Software Designs" (2006).
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..logging_config import get_logger
from ..math.statistics import get_median, percentify

logger = get_logger(__name__)


def adjacency_to_distance(adjacency: Sequence[Sequence[int]]) -> np.ndarray:
    """Distance matrix: 1 on the diagonal and for each edge, +inf elsewhere."""
    n = len(adjacency)
    distance = np.full((n, n), np.inf)
    if n == 0:
        return distance
    edges = np.asarray(adjacency, dtype=float) != 0
    distance[edges] = 1.0
    np.fill_diagonal(distance, 1.0)
    return distance


def floyd_warshall(distance: np.ndarray) -> np.ndarray:
    """All-pairs shortest paths; relaxes through each intermediate k in turn."""
    result = distance.copy()
    for k in range(result.shape[0]):
        np.minimum(result, result[:, k, np.newaxis] + result[np.newaxis, k, :], out=result)
    return result


def visibility_matrix(adjacency: Sequence[Sequence[int]]) -> tuple[list[list[int]], float]:
    """Compute the visibility matrix and change cost.

    Returns:
        (visibility, change_cost) where visibility[i][j] == 1 iff j is
        reachable from i (i != j), and change_cost is a percentage
    """
    closure = floyd_warshall(adjacency_to_distance(adjacency))
    n = closure.shape[0]

    reachable = np.isfinite(closure)
    finite_count = int(reachable.sum())

    visibility = reachable.astype(int)
    np.fill_diagonal(visibility, 0)

    return visibility.tolist(), percentify(finite_count, n * n)


def core_size(visibility: Sequence[Sequence[int]], first_order_density: float) -> float:
    """Percentage of modules whose fan-in and fan-out both reach the median.

    With no edges at all there is no meaningful core, so 0 is returned.
    """
    if first_order_density == 0:
        return 0.0

    matrix = np.asarray(visibility, dtype=int)
    n = matrix.shape[0]
    # Row sums are fan-in, column sums fan-out
    fan_in = matrix.sum(axis=1)
    fan_out = matrix.sum(axis=0)

    fan_in_boundary = get_median(fan_in.tolist())
    fan_out_boundary = get_median(fan_out.tolist())

    in_core = int(np.count_nonzero((fan_in >= fan_in_boundary) & (fan_out >= fan_out_boundary)))
    return percentify(in_core, n)


def close_and_score(
    adjacency: Sequence[Sequence[int]], first_order_density: float
) -> tuple[list[list[int]], float, float]:
    """Compute (visibility matrix, change cost, core size) for an adjacency matrix."""
    visibility, change_cost = visibility_matrix(adjacency)
    size = core_size(visibility, first_order_density)
    logger.debug(f"Closure: change cost={change_cost:.2f}%, core size={size:.2f}%")
    return visibility, change_cost, size
