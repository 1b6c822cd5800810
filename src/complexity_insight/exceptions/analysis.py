"""Analysis-related exceptions: bad input, traversal failures, broken invariants."""

from typing import Dict, Optional

from .base import ComplexityInsightError


class AnalysisError(ComplexityInsightError):
    """Base class for analysis-related errors."""
    pass


class InvalidInputError(AnalysisError):
    """Raised before traversal when the tree, walker or module list is malformed."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message, details=details)


class TraversalError(AnalysisError):
    """Raised when the walker, a syntax rule or the derivation pass fails."""

    def __init__(self, cause: BaseException, details: Optional[Dict[str, str]] = None):
        message = str(cause) or type(cause).__name__
        super().__init__(
            message,
            details={"error_type": type(cause).__name__, **(details or {})},
        )
        self.cause = cause


class InvariantViolationError(AnalysisError):
    """Raised when derived metrics hit a state the counters should make impossible.

    This signals a logic bug rather than bad input and is never retried.
    """

    def __init__(self, reason: str):
        super().__init__(f"Invariant violated: {reason}", details={"reason": reason})
        self.reason = reason
