"""
Long method detection rule.

Flags every lexically matched method whose body spans more lines than
the configured threshold.
"""

from ...models import CodeSmell
from ..base import BLOATERS, BaseRule, RuleContext


class LongMethodRule(BaseRule):
    """Detect methods that have grown too long."""

    @property
    def rule_id(self) -> str:
        return "BLOATERS.LONG_METHOD"

    @property
    def name(self) -> str:
        return "Long Method"

    @property
    def category(self) -> str:
        return BLOATERS

    @property
    def order(self) -> int:
        return 10

    @property
    def description(self) -> str:
        return (
            "Detects function or method bodies spanning more lines than the "
            "long_method_lines threshold. Long methods are harder to read "
            "and usually do more than one thing."
        )

    def scan(self, context: RuleContext) -> list[CodeSmell]:
        """One smell per method over the line threshold.

        Args:
            context: RuleContext with raw text and matched methods

        Returns:
            List of smells, one per long method
        """
        max_lines = self.threshold(context, "long_method_lines")
        return [
            self._create_smell(f"Method has more than {max_lines} lines of code")
            for method in context.methods
            if method.line_count > max_lines
        ]
