"""
Aggregation of complexity, duplication and smells into a debt profile.

The technical debt ratio is a health score in [0, 1], higher is
healthier. With the default ScoringConfig::

    debt = 0.3 * (10 - min(complexity, 10)) / 10
         + 0.3 * (1 - duplication_ratio)
         + 0.4 * (1 - min(smells_count / 10, 1))

Each term is clamped into [0, 1] before weighting. The ratio is rounded
half-up to ``precision`` places and ratios strictly below
``high_debt_threshold`` are assessed as high debt.
"""

import logging

from .models import (
    HIGH_DEBT_ASSESSMENT,
    LOW_DEBT_ASSESSMENT,
    AnalysisResult,
    CodeSmell,
    round_half_up,
)
from .rules.config import ScoringConfig

logger = logging.getLogger(__name__)


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def group_smells(smells: list[CodeSmell]) -> dict[str, list[CodeSmell]]:
    """Group smells by category, categories in order of first appearance."""
    grouped: dict[str, list[CodeSmell]] = {}
    for smell in smells:
        grouped.setdefault(smell.category, []).append(smell)
    return grouped


def compute_debt_ratio(
    complexity: int,
    duplication_ratio: float,
    smells_count: int,
    scoring: ScoringConfig | None = None,
) -> float:
    """Weighted health score before rounding.

    Args:
        complexity: Cyclomatic complexity estimate.
        duplication_ratio: Fraction of non-unique lines.
        smells_count: Total number of detected smells.
        scoring: Weights and caps; defaults to ScoringConfig().

    Returns:
        Ratio in [0, 1].
    """
    scoring = scoring or ScoringConfig()

    cap = scoring.complexity_cap
    complexity_term = _clamp((cap - min(complexity, cap)) / cap)
    duplication_term = _clamp(1 - duplication_ratio)
    smell_term = _clamp(1 - min(smells_count / scoring.smell_cap, 1))

    ratio = (
        scoring.complexity_weight * complexity_term
        + scoring.duplication_weight * duplication_term
        + scoring.smell_weight * smell_term
    )
    return _clamp(ratio)


def assess(ratio: float, scoring: ScoringConfig | None = None) -> str:
    """Assessment label for a (rounded) debt ratio."""
    scoring = scoring or ScoringConfig()
    if ratio < scoring.high_debt_threshold:
        return HIGH_DEBT_ASSESSMENT
    return LOW_DEBT_ASSESSMENT


def aggregate(
    complexity: int,
    duplication_ratio: float,
    smells: list[CodeSmell],
    lines_of_code: int = 0,
    scoring: ScoringConfig | None = None,
) -> AnalysisResult:
    """Build the final AnalysisResult.

    Args:
        complexity: Cyclomatic complexity estimate.
        duplication_ratio: Fraction of non-unique lines.
        smells: Detected smells, in canonical rule order.
        lines_of_code: Newline-split line count of the input.
        scoring: Scoring policy; defaults to ScoringConfig().

    Returns:
        Immutable AnalysisResult.
    """
    scoring = scoring or ScoringConfig()

    smells_count = len(smells)
    ratio = float(
        round_half_up(
            compute_debt_ratio(complexity, duplication_ratio, smells_count, scoring),
            scoring.precision,
        )
    )
    assessment = assess(ratio, scoring)

    logger.debug(
        f"Debt ratio {ratio} (complexity={complexity}, "
        f"duplication={duplication_ratio:.2f}, smells={smells_count}): {assessment}"
    )

    return AnalysisResult(
        cyclomatic_complexity=complexity,
        duplication_ratio=duplication_ratio,
        lines_of_code=lines_of_code,
        code_smells=group_smells(smells),
        smells_count=smells_count,
        technical_debt_ratio=ratio,
        assessment=assessment,
        precision=scoring.precision,
    )
