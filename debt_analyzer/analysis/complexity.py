"""
Approximate cyclomatic complexity from decision-point tokens.

No control-flow graph is built. Each decision token in the clean text adds
one to a base complexity of 1, which intentionally over-counts compared
with the textbook definition (every ``return`` counts, wherever it sits).
"""

import logging
import re
from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..diagnostics import DiagnosticsCollector

logger = logging.getLogger(__name__)

BASE_COMPLEXITY = 1

# Order matters: ``else if`` must be tried before ``if`` so that the pair is
# consumed as one token and its ``if`` is not counted a second time.
DECISION_PATTERNS = [
    (r"\belse\s+if\b", "else if"),
    (r"\bif\b", "if"),
    (r"\bwhile\b", "while"),
    (r"\bfor\b", "for"),
    (r"\bcase\b", "case"),
    (r"\bcatch\b", "catch"),
    (r"\breturn\b", "return"),
    (r"\?", "ternary"),
    (r"&&", "&&"),
    (r"\|\|", "||"),
]

_DECISION_RE = re.compile(
    "|".join(f"(?P<t{index}>{pattern})" for index, (pattern, _) in enumerate(DECISION_PATTERNS))
)


def count_decision_points(clean_text: str) -> Counter:
    """Count non-overlapping decision tokens by kind.

    Args:
        clean_text: Source text with literals and comments removed.

    Returns:
        Counter mapping token label to occurrences.
    """
    counts: Counter = Counter()
    for match in _DECISION_RE.finditer(clean_text):
        index = int(match.lastgroup[1:])
        counts[DECISION_PATTERNS[index][1]] += 1
    return counts


def estimate_complexity(
    clean_text: str,
    diagnostics: "DiagnosticsCollector | None" = None,
) -> int:
    """Estimate cyclomatic complexity of the clean text.

    Never raises: any failure (including non-string input) yields the base
    complexity of 1 and is logged.

    Args:
        clean_text: Source text with literals and comments removed.
        diagnostics: Optional collector that counts recovered failures.

    Returns:
        Complexity estimate, at least 1.
    """
    try:
        if not isinstance(clean_text, str):
            raise TypeError(f"expected str, got {type(clean_text).__name__}")
        counts = count_decision_points(clean_text)
        complexity = BASE_COMPLEXITY + sum(counts.values())
        logger.debug(f"Calculated complexity {complexity}: {dict(counts)}")
        return complexity
    except Exception as e:
        logger.warning(
            f"Complexity estimation failed, using {BASE_COMPLEXITY}: {e}",
            exc_info=True,
        )
        if diagnostics is not None:
            diagnostics.increment("complexity_failures")
        return BASE_COMPLEXITY
