"""
Excessive comments detection rule.

Compares the number of comment spans with the number of lines. Spans are
counted on the raw text, one per ``//`` comment and one per block comment
however many lines it covers.
"""

from ...analysis.preprocessor import count_comments
from ...models import CodeSmell
from ..base import DISPENSABLES, BaseRule, RuleContext


class CommentsRule(BaseRule):
    """Detect a high ratio of comments to code."""

    @property
    def rule_id(self) -> str:
        return "DISPENSABLES.COMMENTS"

    @property
    def name(self) -> str:
        return "Comments"

    @property
    def category(self) -> str:
        return DISPENSABLES

    @property
    def order(self) -> int:
        return 10

    def scan(self, context: RuleContext) -> list[CodeSmell]:
        """Report once if comment spans exceed the configured share of lines.

        Args:
            context: RuleContext with raw text

        Returns:
            A single smell, or an empty list
        """
        ratio = self.threshold(context, "comment_ratio")
        if count_comments(context.raw) > len(context.lines) * ratio:
            return [self._create_smell("High ratio of comments to code")]
        return []
