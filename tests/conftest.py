"""
Shared fixtures for the debt analyzer test suite.

Provides:
- Isolation from the user's global config directory
- Log handler cleanup between tests
- A default analyzer and context factory
"""

import logging

import pytest

from debt_analyzer.analyzer_logging import ROOT_LOGGER_NAME
from debt_analyzer.rules.base import RuleContext
from debt_analyzer.rules.config import AnalyzerConfig, AnalyzerConfigLoader
from debt_analyzer.service import DebtAnalyzer


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path, monkeypatch):
    """Point the global config directory at an empty temp directory."""
    global_dir = tmp_path / "global-config"
    monkeypatch.setattr(AnalyzerConfigLoader, "GLOBAL_CONFIG_DIR", global_dir)
    return global_dir


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture()
def analyzer() -> DebtAnalyzer:
    """Analyzer with default configuration."""
    return DebtAnalyzer()


@pytest.fixture()
def make_context():
    """Factory building a RuleContext from raw source."""

    def _make(raw: str, config: AnalyzerConfig | None = None) -> RuleContext:
        return RuleContext.from_source(raw, config=config)

    return _make
