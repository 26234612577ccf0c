"""Heuristic technical-debt analyzer for raw source text.

Approximates structure with lexical pattern matching (no parser) and
combines complexity, duplication and code-smell signals into a single
health score.
"""

__version__ = "1.0.0"

from .models import AnalysisResult, CodeSmell
from .service import DebtAnalyzer, analyze_code, handle_request

__all__ = [
    "AnalysisResult",
    "CodeSmell",
    "DebtAnalyzer",
    "__version__",
    "analyze_code",
    "handle_request",
]
