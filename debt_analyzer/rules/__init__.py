"""
Code smell rules.

Rules live in one directory per smell category and are discovered
automatically; see ``discovery.RuleDiscovery``.
"""

from .base import CATEGORY_ORDER, BaseRule, RuleContext
from .config import (
    AnalyzerConfig,
    AnalyzerConfigLoader,
    PerformanceConfig,
    RuleConfig,
    ScoringConfig,
    ThresholdConfig,
)
from .discovery import RuleDiscovery, discover_rules
from .engine import RuleEngine, RuleEngineResult, RuleError, create_rule_engine

__all__ = [
    "CATEGORY_ORDER",
    "AnalyzerConfig",
    "AnalyzerConfigLoader",
    "BaseRule",
    "PerformanceConfig",
    "RuleConfig",
    "RuleContext",
    "RuleDiscovery",
    "RuleEngine",
    "RuleEngineResult",
    "RuleError",
    "ScoringConfig",
    "ThresholdConfig",
    "create_rule_engine",
    "discover_rules",
]
