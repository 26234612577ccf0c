"""Parallel inheritance hierarchies detection rule."""

import re

from ...models import CodeSmell
from ..base import CHANGE_PREVENTERS, BaseRule, RuleContext

EXTENDS_RE = re.compile(r"\bextends\b")


class ParallelInheritanceRule(BaseRule):
    """Detect sources with several classes and many ``extends`` clauses.

    Both limits are exclusive: more than one matched class and more than
    two ``extends`` occurrences by default.
    """

    @property
    def rule_id(self) -> str:
        return "CHANGE_PREVENTERS.PARALLEL_INHERITANCE"

    @property
    def name(self) -> str:
        return "Parallel Inheritance Hierarchies"

    @property
    def category(self) -> str:
        return CHANGE_PREVENTERS

    @property
    def order(self) -> int:
        return 10

    def scan(self, context: RuleContext) -> list[CodeSmell]:
        min_classes = self.threshold(context, "parallel_inheritance_min_classes")
        if len(context.classes) <= min_classes:
            return []

        min_extends = self.threshold(context, "parallel_inheritance_min_extends")
        if len(EXTENDS_RE.findall(context.raw)) <= min_extends:
            return []

        return [self._create_smell("Multiple inheritance hierarchies detected")]
