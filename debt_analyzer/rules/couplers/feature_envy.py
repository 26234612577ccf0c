"""
Feature envy detection rule.

Counts ``receiver.method(`` calls per receiver identifier. A receiver
called more often than the threshold suggests logic that belongs with
that receiver instead.
"""

import re
from collections import Counter

from ...models import CodeSmell
from ..base import COUPLERS, BaseRule, RuleContext

METHOD_CALL_RE = re.compile(r"\b(\w+)\.\w+\(")


class FeatureEnvyRule(BaseRule):
    """Detect receivers that are called too often."""

    @property
    def rule_id(self) -> str:
        return "COUPLERS.FEATURE_ENVY"

    @property
    def name(self) -> str:
        return "Feature Envy"

    @property
    def category(self) -> str:
        return COUPLERS

    @property
    def order(self) -> int:
        return 10

    def scan(self, context: RuleContext) -> list[CodeSmell]:
        """One smell per receiver over the call threshold.

        Receivers are reported in the order they first appear.

        Args:
            context: RuleContext with raw text

        Returns:
            List of smells naming each offending receiver
        """
        max_calls = self.threshold(context, "feature_envy_calls")
        counts = Counter(
            match.group(1) for match in METHOD_CALL_RE.finditer(context.raw)
        )
        return [
            self._create_smell(f"Class makes too many calls to {receiver}")
            for receiver, count in counts.items()
            if count > max_calls
        ]
