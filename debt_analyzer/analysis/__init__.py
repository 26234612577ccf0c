"""Lexical analysis primitives: cleaning, complexity, duplication, structure."""

from .complexity import estimate_complexity
from .duplication import count_lines, estimate_duplication
from .preprocessor import clean
from .structure import (
    BraceDepthStructureScanner,
    CodeBlock,
    RegexStructureScanner,
    StructureScanner,
    get_scanner,
)

__all__ = [
    "BraceDepthStructureScanner",
    "CodeBlock",
    "RegexStructureScanner",
    "StructureScanner",
    "clean",
    "count_lines",
    "estimate_complexity",
    "estimate_duplication",
    "get_scanner",
]
