"""
Literal and comment stripping for lexical analysis.

Structural detectors scan a "clean" copy of the source so that keywords,
operators and braces inside string literals or comments are not counted.
Literals and comments are matched by a single alternation, so a comment
delimiter inside a literal (or a quote inside a comment) is never
reinterpreted: whichever construct starts first wins.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Single- or double-quoted literal on one line. The lookahead/backreference
# pair consumes an optional backslash together with the following character,
# so escaped delimiters do not terminate the literal.
STRING_LITERAL = r"""(["'])(?:(?=(\\?))\2.)*?\1"""
LINE_COMMENT = r"//.*"
BLOCK_COMMENT = r"/\*[\s\S]*?\*/"

LITERAL_OR_COMMENT_RE = re.compile(f"{STRING_LITERAL}|{LINE_COMMENT}|{BLOCK_COMMENT}")
COMMENT_RE = re.compile(f"{LINE_COMMENT}|{BLOCK_COMMENT}")


def _blank_out(match: re.Match) -> str:
    """Replace a literal or comment while keeping token and line boundaries.

    Literals and single-line block comments collapse to a single space so
    that neighbouring characters never fuse into a new token (``'a'/'b'/``
    must not become ``//``). Multi-line block comments keep their newlines
    so line structure survives. ``//`` comments are dropped, since the
    newline ending them is never part of the match.
    """
    text = match.group(0)
    if text.startswith("//"):
        return ""
    newlines = text.count("\n")
    if newlines:
        return "\n" * newlines
    return " "


def clean(text: str) -> str:
    """Strip string/character literals and comments from source text.

    Unterminated literals are left in place. The function never raises for
    string input; anything else yields an empty string.

    Args:
        text: Raw source text.

    Returns:
        Text with literals and comments removed.
    """
    if not isinstance(text, str):
        logger.warning(f"Cannot clean non-string input of type {type(text).__name__}")
        return ""
    return LITERAL_OR_COMMENT_RE.sub(_blank_out, text)


def count_comments(text: str) -> int:
    """Count ``//`` and ``/* */`` comment spans in the raw text."""
    return sum(1 for _ in COMMENT_RE.finditer(text))
