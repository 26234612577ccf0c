"""
Duplicate code detection rule.

Slides a window of consecutive lines over the raw text and reports when
a long enough window occurs more than once. The scan stops at the first
duplicated window, so at most one smell is emitted per input.

The scan is quadratic in the number of lines; callers analyzing very
large inputs should cap input size (see ``PerformanceConfig.max_input_chars``).
"""

from ...models import CodeSmell
from ..base import DISPENSABLES, BaseRule, RuleContext


class DuplicateCodeRule(BaseRule):
    """Detect repeated multi-line blocks."""

    @property
    def rule_id(self) -> str:
        return "DISPENSABLES.DUPLICATE_CODE"

    @property
    def name(self) -> str:
        return "Duplicate Code"

    @property
    def category(self) -> str:
        return DISPENSABLES

    @property
    def order(self) -> int:
        return 20

    @property
    def description(self) -> str:
        return (
            "Detects a block of duplicate_window_lines consecutive lines, "
            "longer than duplicate_min_chars characters once joined, that "
            "appears verbatim elsewhere in the source."
        )

    def scan(self, context: RuleContext) -> list[CodeSmell]:
        window = self.threshold(context, "duplicate_window_lines")
        min_chars = self.threshold(context, "duplicate_min_chars")
        lines = context.lines
        raw = context.raw

        # The final window position is not examined.
        for i in range(len(lines) - window):
            chunk = "\n".join(lines[i : i + window])
            if len(chunk) > min_chars and raw.find(chunk) != raw.rfind(chunk):
                return [self._create_smell("Similar code blocks found")]
        return []
