"""
Rule engine coordinator for executing smell rules.

The engine is an ordered registry of rules. Rules run sequentially or in
a ThreadPoolExecutor; either way results are merged in registration
order, so category grouping never depends on completion order.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..models import CodeSmell
from .base import BaseRule, RuleContext
from .config import AnalyzerConfig
from .discovery import RuleDiscovery

if TYPE_CHECKING:
    from ..diagnostics import DiagnosticsCollector

logger = logging.getLogger(__name__)


@dataclass
class RuleError:
    """Error that occurred during rule execution."""

    rule_id: str
    error_message: str
    exception_type: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rule_id": self.rule_id,
            "error_message": self.error_message,
            "exception_type": self.exception_type,
        }


@dataclass
class RuleExecutionResult:
    """Result of executing a single rule."""

    rule_id: str
    smells: list[CodeSmell] = field(default_factory=list)
    execution_time_ms: float = 0.0
    error: RuleError | None = None

    @property
    def success(self) -> bool:
        """Check if the rule executed successfully."""
        return self.error is None


@dataclass
class RuleEngineResult:
    """Result of rule engine execution."""

    smells: list[CodeSmell] = field(default_factory=list)
    errors: list[RuleError] = field(default_factory=list)
    execution_time_ms: float = 0.0
    rules_executed: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "smells": [s.to_dict() for s in self.smells],
            "errors": [e.to_dict() for e in self.errors],
            "execution_time_ms": self.execution_time_ms,
            "rules_executed": self.rules_executed,
        }


class RuleEngine:
    """Ordered registry and executor of smell rules.

    Example usage:
        engine = RuleEngine()
        engine.load_rules()  # Auto-discover rules

        context = RuleContext.from_source(code)
        result = engine.run(context)
        for smell in result.smells:
            print(smell.category, smell.name)
    """

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        diagnostics: "DiagnosticsCollector | None" = None,
    ):
        """Initialize the rule engine.

        Args:
            config: Optional pre-loaded configuration
            diagnostics: Optional collector counting rule failures
        """
        self.config = config or AnalyzerConfig()
        self.diagnostics = diagnostics
        self._rules: dict[str, BaseRule] = {}

    def load_rules(self, discovery: RuleDiscovery | None = None) -> int:
        """Load rules using discovery, in canonical order.

        Args:
            discovery: Optional RuleDiscovery instance

        Returns:
            Number of rules loaded
        """
        if discovery is None:
            discovery = RuleDiscovery()

        loaded = 0
        for rule_id, rule_class in discovery.discover_all().items():
            try:
                rule = rule_class()
            except Exception as e:
                logger.warning(f"Could not instantiate rule {rule_id}: {e}")
                continue
            if self.register(rule):
                loaded += 1

        logger.debug(f"Loaded {loaded} rules")
        return loaded

    def register(self, rule: BaseRule) -> bool:
        """Register a rule at the end of the execution order.

        Args:
            rule: Rule instance to register

        Returns:
            True if registered, False if disabled in config
        """
        rule_id = rule.rule_id

        if not self.config.is_rule_enabled(rule_id, rule.category):
            logger.debug(f"Rule {rule_id} is disabled in config, skipping")
            return False

        self._rules[rule_id] = rule
        logger.debug(f"Registered rule: {rule_id}")
        return True

    def unregister(self, rule_id: str) -> bool:
        """Unregister a rule from the engine.

        Args:
            rule_id: Rule identifier to unregister

        Returns:
            True if rule was found and removed, False otherwise
        """
        return self._rules.pop(rule_id, None) is not None

    def get_rule(self, rule_id: str) -> BaseRule | None:
        """Get a rule by its ID."""
        return self._rules.get(rule_id)

    def get_rules_by_category(self, category: str) -> list[BaseRule]:
        """Get registered rules for a category, in execution order."""
        return [r for r in self._rules.values() if r.category == category]

    def get_all_rules(self) -> list[BaseRule]:
        """Get all registered rules, in execution order."""
        return list(self._rules.values())

    def run(
        self,
        context: RuleContext,
        rule_ids: list[str] | None = None,
        categories: list[str] | None = None,
        parallel: bool | None = None,
    ) -> RuleEngineResult:
        """Run rules and collect smells.

        Args:
            context: RuleContext with raw and clean text
            rule_ids: Optional list of specific rule IDs to run
            categories: Optional list of categories to run
            parallel: Override parallel execution (None = use config)

        Returns:
            RuleEngineResult with smells in registration order
        """
        start_time = time.time()

        rules = self.get_all_rules()
        if rule_ids:
            rules = [r for r in rules if r.rule_id in rule_ids]
        if categories:
            rules = [r for r in rules if r.category in categories]

        use_parallel = (
            parallel if parallel is not None else self.config.performance.parallel_execution
        )

        if use_parallel and len(rules) > 1:
            results = self._execute_rules_parallel(rules, context)
        else:
            results = [self._execute_rule(rule, context) for rule in rules]

        smells, errors, rules_executed = self._merge(results)

        return RuleEngineResult(
            smells=smells,
            errors=errors,
            execution_time_ms=(time.time() - start_time) * 1000,
            rules_executed=rules_executed,
        )

    def _merge(
        self, results: list[RuleExecutionResult]
    ) -> tuple[list[CodeSmell], list[RuleError], int]:
        """Merge per-rule results in the order given.

        A failed rule contributes no smells. Without ``continue_on_error``
        merging stops at the first failure.
        """
        smells: list[CodeSmell] = []
        errors: list[RuleError] = []
        rules_executed = 0

        for result in results:
            rules_executed += 1
            if result.error:
                errors.append(result.error)
                if self.diagnostics is not None:
                    self.diagnostics.increment("rule_failures")
                if not self.config.continue_on_error:
                    break
            else:
                smells.extend(result.smells)

        return smells, errors, rules_executed

    def _execute_rules_parallel(
        self,
        rules: list[BaseRule],
        context: RuleContext,
    ) -> list[RuleExecutionResult]:
        """Execute rules in a ThreadPoolExecutor.

        Results are collected keyed by rule and returned in the order of
        ``rules``, whatever order they completed in.

        Args:
            rules: Rules to execute, in canonical order.
            context: RuleContext for rule execution.

        Returns:
            One RuleExecutionResult per rule, in the order of ``rules``.
        """
        max_workers = min(
            self.config.performance.max_parallel_workers,
            len(rules),
        )
        timeout_seconds = self.config.performance.parallel_rule_timeout_ms / 1000.0

        # Warm the shared block caches before fanning out
        _ = (context.lines, context.methods, context.classes)

        results: list[RuleExecutionResult] = []
        with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
            futures = {
                rule.rule_id: executor.submit(self._execute_rule, rule, context)
                for rule in rules
            }

            for rule in rules:
                future = futures[rule.rule_id]
                try:
                    results.append(future.result(timeout=timeout_seconds))
                except TimeoutError:
                    future.cancel()
                    logger.warning(f"Rule {rule.rule_id} timed out in parallel execution")
                    results.append(
                        RuleExecutionResult(
                            rule_id=rule.rule_id,
                            error=RuleError(
                                rule_id=rule.rule_id,
                                error_message=f"Rule timed out after {timeout_seconds}s",
                                exception_type="TimeoutError",
                            ),
                        )
                    )

        return results

    def _execute_rule(
        self, rule: BaseRule, context: RuleContext
    ) -> RuleExecutionResult:
        """Execute a single rule, converting exceptions into a RuleError.

        Args:
            rule: Rule to execute
            context: RuleContext

        Returns:
            RuleExecutionResult with smells or error
        """
        start_time = time.time()

        try:
            smells = rule.scan(context)
            return RuleExecutionResult(
                rule_id=rule.rule_id,
                smells=list(smells),
                execution_time_ms=(time.time() - start_time) * 1000,
            )

        except Exception as e:
            logger.warning(
                f"Rule {rule.rule_id} failed: {e}",
                exc_info=True,
                extra={"rule_id": rule.rule_id},
            )
            return RuleExecutionResult(
                rule_id=rule.rule_id,
                execution_time_ms=(time.time() - start_time) * 1000,
                error=RuleError(
                    rule_id=rule.rule_id,
                    error_message=str(e),
                    exception_type=type(e).__name__,
                ),
            )


def create_rule_engine(
    config: AnalyzerConfig | None = None,
    diagnostics: "DiagnosticsCollector | None" = None,
    auto_load: bool = True,
) -> RuleEngine:
    """Factory function to create and configure a rule engine.

    Args:
        config: Optional pre-loaded configuration
        diagnostics: Optional collector counting rule failures
        auto_load: Whether to auto-load rules

    Returns:
        Configured RuleEngine instance
    """
    engine = RuleEngine(config=config, diagnostics=diagnostics)

    if auto_load:
        engine.load_rules()

    return engine
