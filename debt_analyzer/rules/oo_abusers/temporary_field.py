"""
Temporary field detection rule.

A field declaration (``[visibility] type identifier;``) whose identifier
barely appears anywhere else suggests state that is only set in special
cases.
"""

import re

from ...models import CodeSmell
from ..base import OO_ABUSERS, BaseRule, RuleContext

FIELD_RE = re.compile(r"\b(?:private|protected|public)?\s+\w+\s+\w+\s*;")


class TemporaryFieldRule(BaseRule):
    """Detect fields used in very few places."""

    @property
    def rule_id(self) -> str:
        return "OO_ABUSERS.TEMPORARY_FIELD"

    @property
    def name(self) -> str:
        return "Temporary Field"

    @property
    def category(self) -> str:
        return OO_ABUSERS

    @property
    def order(self) -> int:
        return 20

    @property
    def description(self) -> str:
        return (
            "Detects field declarations whose identifier occurs fewer than "
            "temporary_field_min_uses times in the whole source, declaration "
            "included."
        )

    def scan(self, context: RuleContext) -> list[CodeSmell]:
        """One smell per rarely used field declaration.

        Occurrences are plain substring matches in the raw text, so an
        identifier embedded in a longer one also counts.

        Args:
            context: RuleContext with raw text

        Returns:
            List of smells, one per matching declaration
        """
        min_uses = self.threshold(context, "temporary_field_min_uses")
        smells = []

        for match in FIELD_RE.finditer(context.raw):
            field_name = self._field_name(match.group(0))
            if not field_name:
                continue
            uses = len(re.findall(re.escape(field_name), context.raw))
            if uses < min_uses:
                smells.append(self._create_smell("Field is used in very few places"))

        return smells

    @staticmethod
    def _field_name(declaration: str) -> str:
        """Identifier of a declaration: its last token without ``;``."""
        tokens = declaration.split()
        if not tokens:
            return ""
        return tokens[-1].replace(";", "")
