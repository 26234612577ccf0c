"""Unit tests for debt_analyzer.models module."""

import dataclasses
from decimal import Decimal

import pytest

from debt_analyzer.models import (
    LOW_DEBT_ASSESSMENT,
    AnalysisResult,
    CodeSmell,
    format_ratio,
    round_half_up,
)
from debt_analyzer.service import DebtAnalyzer

RESPONSE_KEYS = {
    "cyclomaticComplexity",
    "duplicationRatio",
    "linesOfCode",
    "codeSmells",
    "smellsCount",
    "technicalDebtRatio",
    "assessment",
}


class TestCodeSmell:
    """Tests for CodeSmell records."""

    def test_detected_by_default(self):
        assert CodeSmell("Couplers", "Feature Envy", "desc").detected is True

    def test_immutable(self):
        smell = CodeSmell("Couplers", "Feature Envy", "desc")
        with pytest.raises(dataclasses.FrozenInstanceError):
            smell.name = "other"

    def test_to_dict(self):
        assert CodeSmell("Dispensables", "Comments", "desc").to_dict() == {
            "category": "Dispensables",
            "name": "Comments",
            "description": "desc",
            "detected": True,
        }


class TestAnalysisResult:
    """Tests for the response shape."""

    def test_to_dict_formats_ratios(self):
        result = AnalysisResult(
            cyclomatic_complexity=3,
            duplication_ratio=0.25,
            lines_of_code=8,
            code_smells={"Couplers": [CodeSmell("Couplers", "Feature Envy", "d")]},
            smells_count=1,
            technical_debt_ratio=0.9,
            assessment=LOW_DEBT_ASSESSMENT,
        )
        data = result.to_dict()
        assert set(data) == RESPONSE_KEYS
        assert data["duplicationRatio"] == "0.25"
        assert data["technicalDebtRatio"] == "0.90"
        assert data["cyclomaticComplexity"] == 3
        assert data["codeSmells"]["Couplers"][0]["name"] == "Feature Envy"

    def test_defaults_keep_every_key(self):
        data = AnalysisResult(cyclomatic_complexity=1, duplication_ratio=0.0, lines_of_code=1).to_dict()
        assert set(data) == RESPONSE_KEYS
        assert data["codeSmells"] == {}
        assert data["smellsCount"] == 0

    def test_ratio_ties_round_up(self):
        result = AnalysisResult(
            cyclomatic_complexity=1,
            duplication_ratio=0.125,
            lines_of_code=8,
            technical_debt_ratio=0.625,
        )
        data = result.to_dict()
        assert data["duplicationRatio"] == "0.13"
        assert data["technicalDebtRatio"] == "0.63"

    def test_eight_lines_seven_distinct(self):
        data = DebtAnalyzer().analyze("a\nb\nc\nd\ne\nf\ng\na").to_dict()
        assert data["linesOfCode"] == 8
        assert data["duplicationRatio"] == "0.13"


class TestRatioRounding:
    """Tests for half-up ratio rounding."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.125, "0.13"), (0.625, "0.63"), (0.124, "0.12"), (0.0, "0.00"), (1.0, "1.00")],
    )
    def test_format_ratio(self, value, expected):
        assert format_ratio(value, 2) == expected

    def test_rounds_stored_binary_value(self):
        # 1.005 is stored just below the tie
        assert round_half_up(1.005, 2) == Decimal("1.00")

    def test_precision(self):
        assert format_ratio(0.5, 0) == "1"
        assert format_ratio(0.71428, 3) == "0.714"
