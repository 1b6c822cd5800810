"""Scope-stack bookkeeping for one module traversal.

The walker opens and closes function scopes while it visits nodes. Each
visited node's contributions go to the innermost open scope and always to
the module aggregate; with no scope open they land on the aggregate only.
Open scopes are tracked as indices into ``report.functions`` rather than
references, so the builder is the single owner of every FunctionReport.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from ..models import Dependency, FunctionReport, ModuleReport, Sloc
from ..walker import TraversalCallbacks, read_field
from .halstead import METRICS, record


def location_lines(location: Any) -> Optional[tuple[int, int]]:
    """Extract ``(start_line, end_line)`` from a location, or None if absent.

    Accepts ``SourceLocation``, ``{"start": {"line": ..}, "end": {"line": ..}}``
    mappings, and objects exposing ``start.line`` / ``end.line``.
    """
    if location is None:
        return None

    start_line = getattr(location, "start_line", None)
    end_line = getattr(location, "end_line", None)
    if start_line is not None and end_line is not None:
        return start_line, end_line

    start = read_field(location, "start")
    end = read_field(location, "end")
    if start is None or end is None:
        return None
    start_line = read_field(start, "line")
    end_line = read_field(end, "line")
    if start_line is None or end_line is None:
        return None
    return start_line, end_line


def new_function_report(name: Optional[str], location: Any, params: int) -> FunctionReport:
    """Create an empty FunctionReport, seeded with line extents when known."""
    report = FunctionReport(name=name, params=params)
    lines = location_lines(location)
    if lines is not None:
        start_line, end_line = lines
        report.line = start_line
        report.sloc = Sloc(physical=end_line - start_line + 1)
    return report


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and not (isinstance(value, float) and math.isnan(value))
    )


class ReportBuilder:
    """Builds a ModuleReport from walker callbacks.

    Usage:
        builder = ReportBuilder(tree_location)
        walker.walk(tree, settings, builder.callbacks())
        report = builder.report
    """

    def __init__(self, location: Any = None) -> None:
        self.report = ModuleReport(aggregate=new_function_report(None, location, 0))
        self._scope_stack: list[int] = []
        # One-shot flag handed to syntax rules' dependency functions. Only the
        # first node whose rule reports dependencies sees True; multiple
        # dependency-introducing constructs per tree are not distinguished.
        self._clear_dependencies = True

    @property
    def current(self) -> Optional[FunctionReport]:
        """The innermost open scope, or None at module level."""
        if not self._scope_stack:
            return None
        return self.report.functions[self._scope_stack[-1]]

    @property
    def depth(self) -> int:
        return len(self._scope_stack)

    def callbacks(self) -> TraversalCallbacks:
        return TraversalCallbacks(
            process_node=self.process_node,
            create_scope=self.create_scope,
            pop_scope=self.pop_scope,
        )

    def create_scope(self, name: Optional[str], location: Any, parameter_count: int) -> None:
        function_report = new_function_report(name, location, parameter_count)
        self.report.functions.append(function_report)
        self.report.aggregate.params += parameter_count
        self._scope_stack.append(len(self.report.functions) - 1)

    def pop_scope(self) -> None:
        if self._scope_stack:
            self._scope_stack.pop()

    def process_node(self, node: Any, syntax: Any) -> None:
        self._process_lloc(node, syntax)
        self._process_cyclomatic(node, syntax)
        for metric in METRICS:
            self._process_halstead(node, syntax, metric)
        if self._process_dependencies(node, syntax):
            self._clear_dependencies = False

    # ── Per-node contributions ─────────────────────────────────────

    def _targets(self) -> list[FunctionReport]:
        current = self.current
        if current is None:
            return [self.report.aggregate]
        return [current, self.report.aggregate]

    @staticmethod
    def _amount(node: Any, syntax: Any, name: str) -> Optional[Any]:
        amount = read_field(syntax, name)
        if _is_number(amount):
            return amount
        if callable(amount):
            return amount(node)
        return None

    def _process_lloc(self, node: Any, syntax: Any) -> None:
        amount = self._amount(node, syntax, "lloc")
        if amount is None:
            return
        for target in self._targets():
            target.sloc.logical += amount

    def _process_cyclomatic(self, node: Any, syntax: Any) -> None:
        amount = self._amount(node, syntax, "cyclomatic")
        if amount is None:
            return
        for target in self._targets():
            target.cyclomatic += amount

    def _process_halstead(self, node: Any, syntax: Any, metric: str) -> None:
        tokens = read_field(syntax, metric)
        if not isinstance(tokens, (list, tuple)):
            return

        for token in tokens:
            identifier = read_field(token, "identifier")
            if callable(identifier):
                identifier = identifier(node)

            token_filter = read_field(token, "filter")
            if callable(token_filter) and token_filter(node) is not True:
                continue

            for target in self._targets():
                record(target, metric, identifier)

    def _process_dependencies(self, node: Any, syntax: Any) -> bool:
        """Collect the node's dependencies; True if its rule reports any at all."""
        dependencies_fn = read_field(syntax, "dependencies")
        if not callable(dependencies_fn):
            return False

        dependencies = dependencies_fn(node, self._clear_dependencies)
        if isinstance(dependencies, (Mapping, Dependency)):
            self.report.dependencies.append(dependencies)
        elif isinstance(dependencies, (list, tuple)):
            self.report.dependencies.extend(dependencies)

        return True
