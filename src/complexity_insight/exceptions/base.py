"""Base exception for Complexity Insight."""

from typing import Dict, Optional


class ComplexityInsightError(Exception):
    """Base exception for all Complexity Insight errors."""

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def attribute_to(self, path: str) -> "ComplexityInsightError":
        """Prefix the message with the module ``path`` that raised it.

        Errors are created fresh per analysis call, so this mutates in place
        and returns ``self`` for re-raising.
        """
        self.message = f"{path}: {self.message}"
        self.details["module"] = str(path)
        self.args = (self.message,)
        return self
