"""Single-module analysis: traversal, then the derivation pass.

    MI = 171 - 3.42 ln(E) - 0.23 ln(CC) - 16.2 ln(LLOC)

with E, CC and LLOC averaged across the module's functions (or taken from
the module aggregate when it has none). MI is capped at 171; the ``newmi``
setting rescales it to 0-100.

Reference: Oman & Hagemeister, "Metrics for assessing a software system's
maintainability" (1992).
"""

from __future__ import annotations

import math
from typing import Any

from ..config import AnalysisSettings, SettingsLike, resolve_settings
from ..exceptions import (
    ComplexityInsightError,
    InvalidInputError,
    InvariantViolationError,
    TraversalError,
)
from ..logging_config import get_logger
from ..models import FunctionReport, ModuleReport
from ..walker import read_field
from .builder import ReportBuilder
from .halstead import derive_halstead

logger = get_logger(__name__)

MI_CEILING = 171.0

_AVERAGED = ("loc", "cyclomatic", "effort", "params")


def analyze_module(tree: Any, walker: Any, settings: SettingsLike = None) -> ModuleReport:
    """Compute the complexity report for one already-parsed tree.

    Args:
        tree: Root node of the module's syntax tree (mapping or object)
        walker: Object with a ``walk(tree, settings, callbacks)`` method
        settings: AnalysisSettings, a mapping of setting flags, or None for defaults

    Returns:
        Fully derived ModuleReport

    Raises:
        InvalidInputError: If the tree or walker is malformed
        TraversalError: If the walker or a syntax rule raises
        InvariantViolationError: If the averaged cyclomatic complexity is zero
    """
    _validate(tree, walker)
    resolved = resolve_settings(settings)

    builder = ReportBuilder(read_field(tree, "loc"))
    try:
        walker.walk(tree, resolved, builder.callbacks())
        calculate_metrics(builder.report, resolved)
    except ComplexityInsightError:
        raise
    except Exception as e:
        raise TraversalError(e) from e

    report = builder.report
    logger.debug(
        f"Analyzed module: {len(report.functions)} functions, "
        f"{len(report.dependencies)} dependencies, maintainability={report.maintainability}"
    )
    return report


def _validate(tree: Any, walker: Any) -> None:
    if tree is None or isinstance(tree, (str, bytes, int, float, list, tuple)):
        raise InvalidInputError("Invalid syntax tree", details={"tree_type": type(tree).__name__})
    if walker is None:
        raise InvalidInputError("Invalid walker")
    if not callable(getattr(walker, "walk", None)):
        raise InvalidInputError(
            "Invalid walker.walk method", details={"walker_type": type(walker).__name__}
        )


def calculate_metrics(report: ModuleReport, settings: AnalysisSettings) -> ModuleReport:
    """Derive densities, Halstead measures, averages and maintainability in place."""
    sums = dict.fromkeys(_AVERAGED, 0.0)
    count = len(report.functions)

    for function_report in report.functions:
        _derive_function(function_report)
        _accumulate(sums, function_report)

    _derive_function(report.aggregate)
    if count == 0:
        # A module with no functions is its own sole sample
        _accumulate(sums, report.aggregate)
        count = 1

    averages = {key: total / count for key, total in sums.items()}

    report.maintainability = maintainability_index(
        averages["effort"], averages["cyclomatic"], averages["loc"], settings.newmi
    )
    report.loc = averages["loc"]
    report.cyclomatic = averages["cyclomatic"]
    report.effort = averages["effort"]
    report.params = averages["params"]
    return report


def _derive_function(function_report: FunctionReport) -> None:
    function_report.cyclomatic_density = cyclomatic_density(
        function_report.cyclomatic, function_report.sloc.logical
    )
    derive_halstead(function_report.halstead)


def _accumulate(sums: dict[str, float], function_report: FunctionReport) -> None:
    sums["loc"] += function_report.sloc.logical
    sums["cyclomatic"] += function_report.cyclomatic
    sums["effort"] += function_report.halstead.effort
    sums["params"] += function_report.params


def cyclomatic_density(cyclomatic: float, logical_lines: float) -> float:
    """Branches per hundred logical lines; inf (or nan) with no logical lines."""
    if logical_lines == 0:
        return math.nan if cyclomatic == 0 else math.copysign(math.inf, cyclomatic)
    return cyclomatic / logical_lines * 100


def _ln(value: float) -> float:
    """Natural log with IEEE edge values instead of exceptions."""
    if value == 0:
        return -math.inf
    if value < 0 or math.isnan(value):
        return math.nan
    return math.log(value)


def maintainability_index(
    average_effort: float, average_cyclomatic: float, average_loc: float, newmi: bool = False
) -> float:
    """Compute the maintainability index from averaged function statistics.

    Raises:
        InvariantViolationError: If ``average_cyclomatic`` is zero
    """
    if average_cyclomatic == 0:
        raise InvariantViolationError("encountered function with cyclomatic complexity zero")

    mi = (
        MI_CEILING
        - 3.42 * _ln(average_effort)
        - 0.23 * _ln(average_cyclomatic)
        - 16.2 * _ln(average_loc)
    )
    if mi > MI_CEILING:
        mi = MI_CEILING

    if newmi:
        mi = max(0.0, mi * 100 / MI_CEILING)

    return mi
