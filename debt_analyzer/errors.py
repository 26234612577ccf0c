"""Structured error types for the request boundary.

Two tiers reach callers: invalid requests (client errors, status 400) and
internal failures (status 500). Both serialize to ``{"error": message}``.
Configuration problems are reported by the CLI before any analysis runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of analyzer errors."""

    VALIDATION = "validation"  # Malformed request
    CONFIGURATION = "configuration"  # Invalid config file or values
    INTERNAL = "internal"  # Unexpected failure during analysis


@dataclass
class AnalyzerError(Exception):
    """Base class for structured analyzer errors.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        status_code: Status reported at the request boundary.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    status_code: int = 500

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Response payload: only the message is exposed."""
        return {"error": self.message}

    def format(self, use_color: bool = True) -> str:
        """Format the error for terminal display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format(use_color=False)


class InvalidRequestError(AnalyzerError):
    """Request body is not an object with a string ``code`` field."""

    def __init__(
        self,
        message: str = "Invalid input: code must be a string",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            category=ErrorCategory.VALIDATION,
            message=message,
            suggestion='Send a JSON object of the form {"code": "<source>"}',
            details=details,
            status_code=400,
        )


class InternalAnalysisError(AnalyzerError):
    """Unexpected failure that escaped the per-component recoveries."""

    def __init__(self, original_error: BaseException | str):
        detail = str(original_error)
        super().__init__(
            category=ErrorCategory.INTERNAL,
            message=f"Internal server error: {detail}",
            details={"exception_type": type(original_error).__name__}
            if isinstance(original_error, BaseException)
            else None,
            status_code=500,
        )


class ConfigurationError(AnalyzerError):
    """Error in a configuration file or configured values."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        merged = dict(details or {})
        if config_file:
            merged["config_file"] = config_file
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion
            or "Check your configuration file syntax and values",
            details=merged or None,
            status_code=500,
        )
