"""Dependency adjacency matrix construction from module reports.

Edges are directed: ``matrix[x][y] == 1`` means module x depends on module y.
Matrix indices follow the path sort below, never input order.
"""

from __future__ import annotations

import os
from typing import Any, Sequence

from ..logging_config import get_logger
from ..math.statistics import percentify
from ..models import ModuleReport
from ..walker import read_field

logger = get_logger(__name__)

# Dependency kind whose paths are only resolvable when explicitly relative;
# bare specifiers of this kind name external packages.
MODULE_RELATIVE_TYPE = "CommonJS"


def path_sort_key(path: str) -> tuple[int, str]:
    """Order paths by segment depth (shallower first), then lexicographically."""
    return len(path.split(os.sep)), path


def sort_reports(reports: Sequence[ModuleReport]) -> list[ModuleReport]:
    """Stable sort of module reports by ``path_sort_key``."""
    return sorted(reports, key=lambda report: path_sort_key(report.path))


def build_adjacency(reports: Sequence[ModuleReport]) -> tuple[list[list[int]], float]:
    """Build the N x N adjacency matrix and its first-order density.

    Args:
        reports: Module reports with ``path`` set, in any order

    Returns:
        (matrix, density) where density is the percentage of 1-entries; row
        and column indices follow ``sort_reports(reports)``
    """
    reports = sort_reports(reports)
    n = len(reports)
    matrix = [[0] * n for _ in range(n)]
    edges = 0

    for x, source in enumerate(reports):
        for y, target in enumerate(reports):
            if x != y and depends_on(source, target):
                matrix[x][y] = 1
                edges += 1

    density = percentify(edges, n * n)
    logger.debug(f"Adjacency matrix: {n} modules, {edges} edges, density={density:.2f}%")
    return matrix, density


def depends_on(source: ModuleReport, target: ModuleReport) -> bool:
    """True if any dependency declared by ``source`` resolves to ``target``."""
    return any(
        check_dependency(source.path, dependency, target.path)
        for dependency in source.dependencies
    )


def check_dependency(source_path: str, dependency: Any, target_path: str) -> bool:
    """Resolve one dependency record of ``source_path`` against ``target_path``."""
    declared = read_field(dependency, "path")
    if not isinstance(declared, str):
        return False

    if read_field(dependency, "type") == MODULE_RELATIVE_TYPE:
        if not is_relative_specifier(declared):
            return False

    return resolve_dependency_path(source_path, declared, target_path) == target_path


def is_relative_specifier(declared: str) -> bool:
    """True for paths starting with ``./`` or ``../``."""
    return declared.startswith("." + os.sep) or declared.startswith(".." + os.sep)


def resolve_dependency_path(source_path: str, declared: str, target_path: str) -> str:
    """Resolve ``declared`` relative to the directory of ``source_path``.

    An extensionless declaration borrows the extension of ``target_path``.
    """
    if os.path.splitext(declared)[1] == "":
        declared += os.path.splitext(target_path)[1]
    return os.path.abspath(os.path.join(os.path.dirname(source_path), declared))
