"""Unit tests for debt_analyzer.service module."""

import json

import pytest

from debt_analyzer.models import HIGH_DEBT_ASSESSMENT, LOW_DEBT_ASSESSMENT, CodeSmell
from debt_analyzer.rules.base import BaseRule, RuleContext
from debt_analyzer.rules.config import AnalyzerConfig, PerformanceConfig
from debt_analyzer.service import DebtAnalyzer, analyze_code, handle_request

RESPONSE_KEYS = {
    "cyclomaticComplexity",
    "duplicationRatio",
    "linesOfCode",
    "codeSmells",
    "smellsCount",
    "technicalDebtRatio",
    "assessment",
}

# Triggers Switch Statements and Feature Envy, nothing else.
SMELLY_SOURCE = "switch (x) {}\n" + "\n".join(["api.call();"] * 6)

SAMPLE_PROGRAM = """class Shapes {
  // area helpers
  function area(kind, w, h, r, unit) {
    switch (kind) {
      case 'square': return w * w;
      case 'rect': return w * h;
    }
    return r > 0 ? 3.14 * r * r : 0;
  }
}
"""


class ExplodingRule(BaseRule):
    """Rule that raises on every scan."""

    @property
    def rule_id(self) -> str:
        return "TEST.EXPLODE"

    @property
    def name(self) -> str:
        return "Explode"

    @property
    def category(self) -> str:
        return "Test"

    @property
    def order(self) -> int:
        return 0

    def scan(self, context: RuleContext) -> list[CodeSmell]:
        raise RuntimeError("kaboom")


class TestAnalyze:
    """Tests for the analysis pipeline."""

    def test_empty_input(self, analyzer):
        result = analyzer.analyze("")
        assert result.lines_of_code == 1
        assert result.cyclomatic_complexity == 1
        assert result.duplication_ratio == 0.0
        assert result.smells_count == 0
        assert result.technical_debt_ratio == 0.97
        assert result.assessment == LOW_DEBT_ASSESSMENT

    def test_complexity_example(self, analyzer):
        result = analyzer.analyze("if (a) { return 1; } else if (b) { return 2; }")
        assert result.cyclomatic_complexity == 5

    def test_identical_lines(self, analyzer):
        result = analyzer.analyze("x\nx\nx\nx")
        assert result.duplication_ratio == pytest.approx(0.75)

    def test_smells_grouped_in_canonical_order(self, analyzer):
        result = analyzer.analyze(SMELLY_SOURCE)
        assert list(result.code_smells) == ["Object-Orientation Abusers", "Couplers"]
        assert result.smells_count == 2
        assert result.code_smells["Couplers"][0].description == (
            "Class makes too many calls to api"
        )

    def test_smelly_source_scores_high_debt(self, analyzer):
        data = analyzer.analyze(SMELLY_SOURCE).to_dict()
        assert data["duplicationRatio"] == "0.71"
        assert data["technicalDebtRatio"] == "0.68"
        assert data["assessment"] == HIGH_DEBT_ASSESSMENT

    def test_parallel_matches_sequential(self, analyzer):
        sequential = analyzer.analyze(SAMPLE_PROGRAM, parallel=False).to_dict()
        parallel = analyzer.analyze(SAMPLE_PROGRAM, parallel=True).to_dict()
        assert parallel == sequential

    def test_deterministic(self, analyzer):
        assert analyzer.analyze(SAMPLE_PROGRAM) == analyzer.analyze(SAMPLE_PROGRAM)

    def test_sample_program(self, analyzer):
        result = analyzer.analyze(SAMPLE_PROGRAM)
        names = [s.name for smells in result.code_smells.values() for s in smells]
        assert "Long Parameter List" in names
        assert "Switch Statements" in names

    def test_failing_rule_does_not_abort(self, analyzer):
        analyzer.engine.register(ExplodingRule())
        result = analyzer.analyze(SMELLY_SOURCE)
        assert result.smells_count == 2
        assert analyzer.diagnostics.get_count("rule_failures") == 1

    def test_preprocessor_failure_uses_raw_text(self, analyzer, monkeypatch):
        def broken_clean(text):
            raise RuntimeError("regex exploded")

        monkeypatch.setattr("debt_analyzer.service.clean", broken_clean)
        result = analyzer.analyze("if (a) {}")
        assert result.cyclomatic_complexity == 2
        assert analyzer.diagnostics.get_count("preprocess_failures") == 1

    def test_brace_scanner(self):
        body = "".join("  if (x) {\n    y();\n  }\n" for _ in range(8))
        source = f"function f() {{\n{body}}}"
        regex_result = DebtAnalyzer().analyze(source)
        brace_result = DebtAnalyzer(AnalyzerConfig(structure_scanner="brace")).analyze(source)
        assert "Bloaters" not in regex_result.code_smells
        assert [s.name for s in brace_result.code_smells["Bloaters"]] == ["Long Method"]

    def test_analyze_code(self):
        assert analyze_code("").smells_count == 0


class TestHandleRequest:
    """Tests for the request boundary."""

    def test_success_has_every_key(self, analyzer):
        status, payload = analyzer.handle_request({"code": ""})
        assert status == 200
        assert set(payload) == RESPONSE_KEYS
        assert payload["duplicationRatio"] == "0.00"
        assert payload["codeSmells"] == {}
        assert analyzer.diagnostics.get_count("requests_ok") == 1

    def test_json_text_body(self, analyzer):
        status, payload = analyzer.handle_request(json.dumps({"code": "x"}))
        assert status == 200
        assert payload["linesOfCode"] == 1

    def test_extra_keys_ignored(self, analyzer):
        status, _ = analyzer.handle_request({"code": "x", "language": "java"})
        assert status == 200

    @pytest.mark.parametrize(
        "body",
        [{}, {"code": 1}, {"code": None}, {"code": ["a"]}, {"source": "x"}],
    )
    def test_invalid_code_field(self, analyzer, body):
        status, payload = analyzer.handle_request(body)
        assert status == 400
        assert payload == {"error": "Invalid input: code must be a string"}
        assert analyzer.diagnostics.get_count("requests_invalid") == 1

    @pytest.mark.parametrize("body", ["{not json", "[1, 2]", None, 42])
    def test_body_not_an_object(self, analyzer, body):
        status, payload = analyzer.handle_request(body)
        assert status == 400
        assert payload == {"error": "Invalid input: request body must be a JSON object"}

    def test_input_size_limit(self):
        config = AnalyzerConfig(performance=PerformanceConfig(max_input_chars=5))
        status, payload = DebtAnalyzer(config).handle_request({"code": "abcdefg"})
        assert status == 400
        assert "exceeds 5 characters" in payload["error"]

    def test_internal_failure(self, analyzer, monkeypatch):
        def broken_run(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(analyzer.engine, "run", broken_run)
        status, payload = analyzer.handle_request({"code": "x"})
        assert status == 500
        assert payload == {"error": "Internal server error: boom"}
        assert analyzer.diagnostics.get_count("requests_failed") == 1

    def test_module_level_handle_request(self):
        status, payload = handle_request({"code": "x"})
        assert status == 200
        assert payload["assessment"] == LOW_DEBT_ASSESSMENT
