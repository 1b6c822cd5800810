"""Project-level analysis: parallel module fan-out, then aggregation.

Module analyses share no mutable state and run on a thread pool. The
first failure aborts the whole project; there is no partial report.
Aggregation re-sorts reports by path before building any matrix, so
completion order never affects the result.
"""

from __future__ import annotations

import os
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, Mapping, Sequence, Union

from .config import AnalysisSettings, OptionsLike, resolve_options
from .exceptions import ComplexityInsightError, InvalidInputError
from .graph.adjacency import build_adjacency, sort_reports
from .graph.closure import close_and_score
from .logging_config import get_logger
from .metrics.module import analyze_module
from .models import ModuleReport, ProjectModule, ProjectReport

logger = get_logger(__name__)

# Default worker count: use CPU count, capped at 8
_DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)

_AVERAGED = ("loc", "cyclomatic", "effort", "params", "maintainability")


def analyze_project(
    modules: Sequence[Any], walker: Any, options: OptionsLike = None
) -> ProjectReport:
    """Analyze every module of a project and aggregate the results.

    Args:
        modules: ProjectModule values or mappings with ``path`` and ``tree``
        walker: Walker used for every module
        options: ProjectOptions, a mapping of options/setting flags, or None

    Returns:
        ProjectReport; only ``reports`` is populated with ``skip_calculation``

    Raises:
        InvalidInputError: If the module list or a module path is malformed
        ComplexityInsightError: The first module failure, prefixed with its path
    """
    resolved = resolve_options(options)

    if not isinstance(modules, (list, tuple)):
        raise InvalidInputError("Invalid modules", details={"modules_type": type(modules).__name__})
    entries = [_as_project_module(module) for module in modules]

    reports = _analyze_all(entries, walker, resolved.settings, resolved.workers)
    result = ProjectReport(reports=reports)

    if resolved.skip_calculation:
        return result

    return recompute_project_aggregates(result, resolved.no_core_size)


def _as_project_module(module: Any) -> ProjectModule:
    if isinstance(module, ProjectModule):
        path, tree = module.path, module.tree
    elif isinstance(module, Mapping):
        path = module.get("path")
        tree = module.get("tree", module.get("ast"))
    else:
        raise InvalidInputError("Invalid module", details={"module_type": type(module).__name__})

    if not isinstance(path, str) or path == "":
        raise InvalidInputError("Invalid path").attribute_to(repr(path))

    return ProjectModule(path=path, tree=tree)


def _analyze_one(module: ProjectModule, walker: Any, settings: AnalysisSettings) -> ModuleReport:
    try:
        report = analyze_module(module.tree, walker, settings)
    except ComplexityInsightError as e:
        e.attribute_to(module.path)
        raise
    report.path = module.path
    return report


def _analyze_all(
    modules: list[ProjectModule], walker: Any, settings: AnalysisSettings, workers: Union[int, None]
) -> list[ModuleReport]:
    if not modules:
        return []

    max_workers = min(workers or _DEFAULT_WORKERS, len(modules))
    logger.debug(f"Analyzing {len(modules)} modules with {max_workers} workers")

    executor = ThreadPoolExecutor(max_workers=max_workers)
    try:
        futures: list[Future] = [
            executor.submit(_analyze_one, module, walker, settings) for module in modules
        ]
        done, not_done = wait(futures, return_when=FIRST_EXCEPTION)

        for future in futures:
            if future in done and future.exception() is not None:
                for pending in not_done:
                    pending.cancel()
                error = future.exception()
                logger.debug(f"Module analysis failed: {error}")
                raise error

        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=True, cancel_futures=True)


def recompute_project_aggregates(
    report: Union[ProjectReport, Mapping[str, Any]], no_core_size: bool = False
) -> ProjectReport:
    """Build matrices, structure scores and averages over existing module reports.

    Accepts a ProjectReport (e.g. one produced with ``skip_calculation``) or a
    mapping with a ``reports`` list of ModuleReport values. Returns a new
    ProjectReport whose reports are in path-sorted order.
    """
    if isinstance(report, ProjectReport):
        reports = report.reports
    elif isinstance(report, Mapping):
        reports = report.get("reports")
    else:
        raise InvalidInputError(
            "Invalid project report", details={"report_type": type(report).__name__}
        )

    if not isinstance(reports, (list, tuple)):
        raise InvalidInputError("Invalid reports")
    for module_report in reports:
        if not isinstance(module_report, ModuleReport) or not isinstance(module_report.path, str):
            raise InvalidInputError("Invalid module report: expected ModuleReport with a path")

    result = ProjectReport(reports=sort_reports(reports))
    result.adjacency_matrix, result.first_order_density = build_adjacency(result.reports)

    if not no_core_size:
        result.visibility_matrix, result.change_cost, result.core_size = close_and_score(
            result.adjacency_matrix, result.first_order_density
        )

    _calculate_averages(result)
    return result


def _calculate_averages(result: ProjectReport) -> None:
    divisor = len(result.reports) or 1
    for key in _AVERAGED:
        total = 0.0
        for module_report in result.reports:
            total += getattr(module_report, key)
        setattr(result, key, total / divisor)
