"""Unit tests for debt_analyzer.errors module."""

from debt_analyzer.errors import (
    AnalyzerError,
    ConfigurationError,
    ErrorCategory,
    InternalAnalysisError,
    InvalidRequestError,
)


class TestInvalidRequestError:
    """Tests for client errors."""

    def test_defaults(self):
        error = InvalidRequestError()
        assert error.category == ErrorCategory.VALIDATION
        assert error.status_code == 400
        assert error.to_dict() == {"error": "Invalid input: code must be a string"}

    def test_is_analyzer_error(self):
        assert isinstance(InvalidRequestError(), AnalyzerError)


class TestInternalAnalysisError:
    """Tests for internal failures."""

    def test_wraps_exception(self):
        error = InternalAnalysisError(ValueError("bad state"))
        assert error.status_code == 500
        assert error.to_dict() == {"error": "Internal server error: bad state"}
        assert error.details == {"exception_type": "ValueError"}


class TestFormat:
    """Tests for terminal formatting."""

    def test_format_without_color(self):
        error = ConfigurationError("Broken config", config_file="debt.config.json")
        text = error.format(use_color=False)
        assert text.startswith("Error: Broken config")
        assert "Suggestion:" in text
        assert "config_file: debt.config.json" in text
        assert str(error) == text

    def test_format_with_color(self):
        assert "\033[91m" in InvalidRequestError().format(use_color=True)
