"""Per-module metrics: Halstead accounting, scope bookkeeping, derivation."""

from .builder import ReportBuilder
from .halstead import derive_halstead, record
from .module import analyze_module, calculate_metrics, maintainability_index

__all__ = [
    "ReportBuilder",
    "analyze_module",
    "calculate_metrics",
    "derive_halstead",
    "maintainability_index",
    "record",
]
