"""Line-level duplication ratio."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..diagnostics import DiagnosticsCollector

logger = logging.getLogger(__name__)


def split_lines(raw: str) -> list[str]:
    """Split on newlines, keeping blank lines (empty input is one line)."""
    return raw.split("\n")


def count_lines(raw: str) -> int:
    """Number of newline-separated lines in the raw text."""
    return len(split_lines(raw))


def estimate_duplication(
    raw: str,
    normalize_whitespace: bool = False,
    diagnostics: "DiagnosticsCollector | None" = None,
) -> float:
    """Fraction of lines that are not unique.

    ``1 - distinct / total``. Lines are compared verbatim unless
    ``normalize_whitespace`` is set, in which case leading and trailing
    whitespace is stripped first (two lines differing only in indentation
    then count as duplicates).

    Args:
        raw: Raw source text.
        normalize_whitespace: Strip each line before comparison.
        diagnostics: Optional collector that counts recovered failures.

    Returns:
        Ratio in [0, 1]; 0 on failure or when there are no lines.
    """
    try:
        lines = split_lines(raw)
        if normalize_whitespace:
            lines = [line.strip() for line in lines]
        if not lines:
            return 0.0
        return 1 - len(set(lines)) / len(lines)
    except Exception as e:
        logger.warning(f"Duplication estimation failed, using 0: {e}", exc_info=True)
        if diagnostics is not None:
            diagnostics.increment("duplication_failures")
        return 0.0
