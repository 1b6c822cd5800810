"""Public API for Complexity Insight.

Example:
    >>> from complexity_insight import analyze
    >>>
    >>> # One module
    >>> report = analyze(tree, walker)
    >>>
    >>> # A project: a list of {"path": ..., "tree": ...}
    >>> project = analyze(modules, walker, {"noCoreSize": True})
"""

from __future__ import annotations

from typing import Any, Union

from .metrics.module import analyze_module
from .models import ModuleReport, ProjectReport
from .project import analyze_project


def analyze(
    tree_or_modules: Any, walker: Any, options: Any = None
) -> Union[ModuleReport, ProjectReport]:
    """Analyze a single tree, or a project when given a list of modules.

    A list or tuple is treated as project modules and ``options`` as project
    options; anything else is one module tree and ``options`` its settings.
    """
    if isinstance(tree_or_modules, (list, tuple)):
        return analyze_project(tree_or_modules, walker, options)
    return analyze_module(tree_or_modules, walker, options)
