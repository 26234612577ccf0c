"""
Large class detection rule.

Flags lexically matched class bodies that span more lines than the
configured threshold. How far a class body extends depends on the
structure scanner in use.
"""

from ...models import CodeSmell
from ..base import BLOATERS, BaseRule, RuleContext


class LargeClassRule(BaseRule):
    """Detect classes that have grown too large."""

    @property
    def rule_id(self) -> str:
        return "BLOATERS.LARGE_CLASS"

    @property
    def name(self) -> str:
        return "Large Class"

    @property
    def category(self) -> str:
        return BLOATERS

    @property
    def order(self) -> int:
        return 30

    @property
    def description(self) -> str:
        return (
            "Detects class bodies spanning more lines than the "
            "large_class_lines threshold."
        )

    def scan(self, context: RuleContext) -> list[CodeSmell]:
        """One smell per class over the line threshold.

        Args:
            context: RuleContext with raw text and matched classes

        Returns:
            List of smells, one per large class
        """
        max_lines = self.threshold(context, "large_class_lines")
        return [
            self._create_smell(f"Class has more than {max_lines} lines of code")
            for class_block in context.classes
            if class_block.line_count > max_lines
        ]
