"""Result records produced by the analyzer."""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

HIGH_DEBT_ASSESSMENT = "High technical debt detected"
LOW_DEBT_ASSESSMENT = "Low technical debt detected"


def round_half_up(value: float, precision: int) -> Decimal:
    """Round a ratio to ``precision`` places, exact ties rounding up.

    Rounds the exact binary value of the float, so 0.125 becomes 0.13
    while 1.005 (stored just below the tie) becomes 1.00.
    """
    return Decimal(value).quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)


def format_ratio(value: float, precision: int) -> str:
    """Render a ratio with exactly ``precision`` decimal places."""
    return f"{round_half_up(value, precision):f}"


@dataclass(frozen=True)
class CodeSmell:
    """A detected code smell.

    Every emitted record is a positive detection, so ``detected`` is
    always True in practice.
    """

    category: str
    name: str
    description: str
    detected: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category,
            "name": self.name,
            "description": self.description,
            "detected": self.detected,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Complete technical-debt profile for one input.

    Attributes:
        cyclomatic_complexity: Approximate decision-point count (>= 1).
        duplication_ratio: Fraction of non-unique lines in [0, 1].
        lines_of_code: Newline-split line count of the raw input.
        code_smells: Category name -> smells, in detection order.
        smells_count: Total number of smells across categories.
        technical_debt_ratio: Health score in [0, 1], higher is healthier.
        assessment: One of the two fixed assessment labels.
        precision: Decimal places used when serializing ratios.
    """

    cyclomatic_complexity: int
    duplication_ratio: float
    lines_of_code: int
    code_smells: dict[str, list[CodeSmell]] = field(default_factory=dict)
    smells_count: int = 0
    technical_debt_ratio: float = 1.0
    assessment: str = LOW_DEBT_ASSESSMENT
    precision: int = 2

    @property
    def is_high_debt(self) -> bool:
        """Whether the assessment flags high technical debt."""
        return self.assessment == HIGH_DEBT_ASSESSMENT

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON response shape.

        Ratios are serialized as strings fixed to ``precision`` decimal
        places; counts stay integers.
        """
        return {
            "cyclomaticComplexity": self.cyclomatic_complexity,
            "duplicationRatio": format_ratio(self.duplication_ratio, self.precision),
            "linesOfCode": self.lines_of_code,
            "codeSmells": {
                category: [smell.to_dict() for smell in smells]
                for category, smells in self.code_smells.items()
            },
            "smellsCount": self.smells_count,
            "technicalDebtRatio": format_ratio(self.technical_debt_ratio, self.precision),
            "assessment": self.assessment,
        }
