"""
Base classes and types for the code smell rules.

Each rule scans for exactly one smell pattern and shares no state with
other rules, so rules can be enabled, disabled, tested and run in
parallel independently.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..analysis.duplication import split_lines
from ..analysis.preprocessor import clean
from ..analysis.structure import CodeBlock, RegexStructureScanner, StructureScanner
from ..models import CodeSmell

if TYPE_CHECKING:
    from .config import AnalyzerConfig

BLOATERS = "Bloaters"
OO_ABUSERS = "Object-Orientation Abusers"
CHANGE_PREVENTERS = "Change Preventers"
DISPENSABLES = "Dispensables"
COUPLERS = "Couplers"

# Canonical category order; determines grouping order in responses.
CATEGORY_ORDER = [BLOATERS, OO_ABUSERS, CHANGE_PREVENTERS, DISPENSABLES, COUPLERS]


@dataclass
class RuleContext:
    """Context passed to rules for evaluation.

    ``raw`` is the original text (line structure, comment counting);
    ``clean`` has literals and comments stripped (structural keywords).
    Block lookups are computed once per context and shared by rules.
    """

    raw: str
    clean: str
    config: "AnalyzerConfig | None" = field(default=None, repr=False)
    scanner: StructureScanner = field(default_factory=RegexStructureScanner, repr=False)

    _lines: list[str] | None = field(default=None, repr=False)
    _methods: list[CodeBlock] | None = field(default=None, repr=False)
    _classes: list[CodeBlock] | None = field(default=None, repr=False)

    @property
    def lines(self) -> list[str]:
        """Raw text split on newlines (blank lines kept)."""
        if self._lines is None:
            self._lines = split_lines(self.raw)
        return self._lines

    @property
    def methods(self) -> list[CodeBlock]:
        """Lexically matched methods in the raw text."""
        if self._methods is None:
            self._methods = self.scanner.find_methods(self.raw)
        return self._methods

    @property
    def classes(self) -> list[CodeBlock]:
        """Lexically matched classes in the raw text."""
        if self._classes is None:
            self._classes = self.scanner.find_classes(self.raw)
        return self._classes

    @classmethod
    def from_source(
        cls,
        raw: str,
        config: "AnalyzerConfig | None" = None,
        scanner: StructureScanner | None = None,
    ) -> "RuleContext":
        """Create a context from raw text, cleaning it on the way."""
        return cls(
            raw=raw,
            clean=clean(raw),
            config=config,
            scanner=scanner or RegexStructureScanner(),
        )


class BaseRule(ABC):
    """Abstract base class for all smell rules."""

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule identifier (e.g., 'BLOATERS.LONG_METHOD')."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Smell name reported in results."""

    @property
    @abstractmethod
    def category(self) -> str:
        """Smell category reported in results (one of CATEGORY_ORDER)."""

    @property
    @abstractmethod
    def order(self) -> int:
        """Position of the rule within its category."""

    @property
    def description(self) -> str:
        """Detailed description of what this rule checks."""
        return f"Rule {self.rule_id}: {self.name}"

    @property
    def sort_key(self) -> tuple[int, int]:
        """Canonical execution position: (category position, order)."""
        try:
            position = CATEGORY_ORDER.index(self.category)
        except ValueError:
            position = len(CATEGORY_ORDER)
        return position, self.order

    @abstractmethod
    def scan(self, context: RuleContext) -> list[CodeSmell]:
        """Scan the context and return detected smells.

        Args:
            context: RuleContext with raw and clean text.

        Returns:
            List of CodeSmell records, empty if nothing was detected.
        """

    def threshold(self, context: RuleContext, name: str) -> Any:
        """Resolve a threshold for this rule.

        A per-rule parameter override wins over the shared
        ThresholdConfig field of the same name.

        Args:
            context: RuleContext carrying the configuration
            name: ThresholdConfig field name

        Returns:
            The configured value
        """
        from .config import ThresholdConfig

        if context.config is None:
            return getattr(ThresholdConfig(), name)
        default = getattr(context.config.thresholds, name)
        return context.config.get_rule_parameter(self.rule_id, name, default)

    def _create_smell(self, description: str) -> CodeSmell:
        """Helper to create a CodeSmell with this rule's category and name."""
        return CodeSmell(
            category=self.category,
            name=self.name,
            description=description,
        )
