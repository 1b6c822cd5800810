"""Project structure: dependency adjacency, transitive closure, core size."""

from .adjacency import build_adjacency, check_dependency, path_sort_key, sort_reports
from .closure import close_and_score, core_size, floyd_warshall, visibility_matrix

__all__ = [
    "build_adjacency",
    "check_dependency",
    "close_and_score",
    "core_size",
    "floyd_warshall",
    "path_sort_key",
    "sort_reports",
    "visibility_matrix",
]
