"""
Complexity Insight - complexity metrics for pre-parsed syntax trees

Computes logical lines, cyclomatic complexity, Halstead measures and the
maintainability index per module, then project structure: dependency
adjacency, visibility (transitive closure), change cost and core size.
Parsing and grammar knowledge stay in the caller-supplied walker.
"""

__version__ = "0.1.0"

from .api import analyze
from .config import AnalysisSettings, ProjectOptions, load_config
from .metrics.module import analyze_module
from .models import (
    Dependency,
    FunctionReport,
    ModuleReport,
    ProjectModule,
    ProjectReport,
    SourceLocation,
)
from .project import analyze_project, recompute_project_aggregates
from .walker import HalsteadToken, SyntaxRule, TraversalCallbacks, Walker

__all__ = [
    "analyze",  # Main entry point (module or project)
    "analyze_module",
    "analyze_project",
    "recompute_project_aggregates",
    "load_config",
    "AnalysisSettings",
    "ProjectOptions",
    "Dependency",
    "FunctionReport",
    "ModuleReport",
    "ProjectModule",
    "ProjectReport",
    "SourceLocation",
    "HalsteadToken",
    "SyntaxRule",
    "TraversalCallbacks",
    "Walker",
]
