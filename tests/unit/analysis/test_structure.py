"""Unit tests for debt_analyzer.analysis.structure module."""

import pytest

from debt_analyzer.analysis.structure import (
    BraceDepthStructureScanner,
    RegexStructureScanner,
    get_scanner,
)
from debt_analyzer.errors import ConfigurationError

NESTED_FUNCTION = "function f() {\n if (x) {\n  y();\n }\n z();\n}"


class TestRegexStructureScanner:
    """Tests for the lazy regular-expression scanner."""

    @pytest.fixture
    def scanner(self):
        return RegexStructureScanner()

    def test_finds_function(self, scanner):
        blocks = scanner.find_methods("function add(a, b) {\n  return a + b;\n}")
        assert len(blocks) == 1
        assert blocks[0].name == "add"
        assert blocks[0].parameters == "a, b"
        assert blocks[0].parameter_count == 2
        assert blocks[0].line_count == 3

    def test_body_ends_at_first_closing_brace(self, scanner):
        blocks = scanner.find_methods(NESTED_FUNCTION)
        assert blocks[0].line_count == 4

    def test_empty_parameters(self, scanner):
        block = scanner.find_methods("function f() {}")[0]
        assert block.parameters == ""
        assert block.parameter_count == 1

    def test_no_braces_finds_nothing(self, scanner):
        assert scanner.find_methods("def foo(x):\n    return x") == []
        assert scanner.find_classes("class A:\n    pass") == []

    def test_finds_class(self, scanner):
        blocks = scanner.find_classes("class A {\n}")
        assert [b.name for b in blocks] == ["A"]
        assert blocks[0].kind == "class"
        assert blocks[0].line_count == 2


class TestBraceDepthStructureScanner:
    """Tests for the bracket-depth scanner."""

    @pytest.fixture
    def scanner(self):
        return BraceDepthStructureScanner()

    def test_body_ends_at_matching_brace(self, scanner):
        blocks = scanner.find_methods(NESTED_FUNCTION)
        assert blocks[0].line_count == 6

    def test_braces_in_literals_ignored(self, scanner):
        blocks = scanner.find_methods('function f() {\n var s = "}";\n}')
        assert blocks[0].line_count == 3

    def test_unbalanced_block_skipped(self, scanner):
        assert scanner.find_classes("class A {\n  x = 1;\n") == []


class TestGetScanner:
    """Tests for the scanner factory."""

    def test_default_is_regex(self):
        assert isinstance(get_scanner(), RegexStructureScanner)

    def test_brace(self):
        assert isinstance(get_scanner("brace"), BraceDepthStructureScanner)

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError):
            get_scanner("tree-sitter")
