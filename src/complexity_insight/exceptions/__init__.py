"""Exception hierarchy for Complexity Insight."""

from .analysis import (
    AnalysisError,
    InvalidInputError,
    InvariantViolationError,
    TraversalError,
)
from .base import ComplexityInsightError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "ComplexityInsightError",
    "AnalysisError",
    "InvalidInputError",
    "TraversalError",
    "InvariantViolationError",
    "ConfigurationError",
    "InvalidConfigError",
]
