"""Switch statement detection rule."""

import re

from ...models import CodeSmell
from ..base import OO_ABUSERS, BaseRule, RuleContext

SWITCH_RE = re.compile(r"\bswitch\s*\(")


class SwitchStatementsRule(BaseRule):
    """Detect switch statements that could be replaced by polymorphism.

    Scans the clean text, so ``switch (`` inside a string or a comment
    does not count. At most one smell is reported per input.
    """

    @property
    def rule_id(self) -> str:
        return "OO_ABUSERS.SWITCH_STATEMENTS"

    @property
    def name(self) -> str:
        return "Switch Statements"

    @property
    def category(self) -> str:
        return OO_ABUSERS

    @property
    def order(self) -> int:
        return 10

    def scan(self, context: RuleContext) -> list[CodeSmell]:
        if SWITCH_RE.search(context.clean) is None:
            return []
        return [
            self._create_smell("Switch statements found. Consider using polymorphism")
        ]
