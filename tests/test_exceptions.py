"""Tests for the complexity_insight exception hierarchy."""

from complexity_insight.exceptions import (
    AnalysisError,
    ComplexityInsightError,
    InvalidConfigError,
    InvalidInputError,
    InvariantViolationError,
    TraversalError,
)


class TestHierarchy:
    def test_analysis_errors(self):
        for cls in (InvalidInputError, TraversalError, InvariantViolationError):
            assert issubclass(cls, AnalysisError)
            assert issubclass(cls, ComplexityInsightError)

    def test_details_in_str(self):
        error = InvalidConfigError("workers", 0, "must be at least 1")
        assert str(error) == (
            "Invalid configuration for workers: 0 (key=workers, value=0, reason=must be at least 1)"
        )


class TestTraversalError:
    def test_wraps_cause(self):
        cause = ValueError("bad node")
        error = TraversalError(cause)
        assert error.cause is cause
        assert error.message == "bad node"
        assert error.details["error_type"] == "ValueError"

    def test_empty_message_uses_type_name(self):
        assert TraversalError(KeyError()).message == "KeyError"


class TestAttributeTo:
    def test_prefixes_message(self):
        error = InvalidInputError("Invalid syntax tree").attribute_to("/p/a.js")
        assert error.message == "/p/a.js: Invalid syntax tree"
        assert error.args == ("/p/a.js: Invalid syntax tree",)
        assert error.details == {"module": "/p/a.js"}

    def test_returns_same_instance(self):
        error = InvariantViolationError("zero")
        assert error.attribute_to("/p/b.js") is error
