"""Long parameter list detection rule."""

from ...models import CodeSmell
from ..base import BLOATERS, BaseRule, RuleContext


class LongParameterListRule(BaseRule):
    """Detect methods declaring too many parameters."""

    @property
    def rule_id(self) -> str:
        return "BLOATERS.LONG_PARAMETER_LIST"

    @property
    def name(self) -> str:
        return "Long Parameter List"

    @property
    def category(self) -> str:
        return BLOATERS

    @property
    def order(self) -> int:
        return 20

    def scan(self, context: RuleContext) -> list[CodeSmell]:
        # An empty parameter list splits into one segment and never triggers.
        max_params = self.threshold(context, "long_parameter_count")
        return [
            self._create_smell(f"Method has more than {max_params} parameters")
            for method in context.methods
            if method.parameter_count > max_params
        ]
