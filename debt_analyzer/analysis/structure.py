"""
Structure scanning for brace-delimited methods and classes.

Detectors never look for method or class boundaries themselves; they ask a
``StructureScanner``. Two scanners are provided:

- ``RegexStructureScanner`` (default): a lazy regular expression that ends a
  body at the first closing brace after the opening one.
- ``BraceDepthStructureScanner``: the same openings, but the body ends at
  the brace that returns nesting depth to zero. Braces inside literals and
  comments are ignored.

Both degrade to "nothing found" on sources that do not use braces.
"""

import re
from dataclasses import dataclass
from typing import Literal, Protocol

from .preprocessor import LITERAL_OR_COMMENT_RE

BlockKind = Literal["method", "class"]

METHOD_HEADER = r"\b(?:function|def)\s+(\w+)\s*\(([^)]*)\)\s*\{"
CLASS_HEADER = r"\bclass\s+(\w+)\s*\{"

_METHOD_RE = re.compile(METHOD_HEADER + r"[\s\S]*?\}")
_CLASS_RE = re.compile(CLASS_HEADER + r"[\s\S]*?\}")
_METHOD_HEADER_RE = re.compile(METHOD_HEADER)
_CLASS_HEADER_RE = re.compile(CLASS_HEADER)
_BRACE_TOKEN_RE = re.compile(f"{LITERAL_OR_COMMENT_RE.pattern}|[{{}}]")


@dataclass(frozen=True)
class CodeBlock:
    """A lexically matched method or class.

    Attributes:
        kind: ``method`` or ``class``.
        name: Declared identifier.
        text: Matched text from the opening keyword to the closing brace.
        parameters: Raw text between the parameter parentheses ("" if none).
        start: Offset of the match in the raw source.
    """

    kind: BlockKind
    name: str
    text: str
    parameters: str = ""
    start: int = 0

    @property
    def line_count(self) -> int:
        """Number of lines spanned by the matched text."""
        return len(self.text.split("\n"))

    @property
    def parameter_count(self) -> int:
        """Comma-separated segment count of the parameter text.

        An empty parameter list still splits into one segment, which is
        below every sensible threshold and therefore treated as zero
        parameters for detection purposes.
        """
        return len(self.parameters.split(","))


class StructureScanner(Protocol):
    """Capability for locating method and class bodies in raw source."""

    name: str

    def find_methods(self, raw: str) -> list[CodeBlock]:
        """Return method/function blocks in source order."""

    def find_classes(self, raw: str) -> list[CodeBlock]:
        """Return class blocks in source order."""


class RegexStructureScanner:
    """Lazy regular-expression approximation of block boundaries."""

    name = "regex"

    def find_methods(self, raw: str) -> list[CodeBlock]:
        return [
            CodeBlock(
                kind="method",
                name=match.group(1),
                text=match.group(0),
                parameters=match.group(2) or "",
                start=match.start(),
            )
            for match in _METHOD_RE.finditer(raw)
        ]

    def find_classes(self, raw: str) -> list[CodeBlock]:
        return [
            CodeBlock(
                kind="class",
                name=match.group(1),
                text=match.group(0),
                start=match.start(),
            )
            for match in _CLASS_RE.finditer(raw)
        ]


class BraceDepthStructureScanner:
    """Bracket-depth counter for block boundaries.

    Blocks with no matching closing brace are skipped. Scanning resumes
    right after each header, so nested functions are reported as well.
    """

    name = "brace"

    def find_methods(self, raw: str) -> list[CodeBlock]:
        blocks = []
        for match in _METHOD_HEADER_RE.finditer(raw):
            end = self._find_block_end(raw, match.end() - 1)
            if end is None:
                continue
            blocks.append(
                CodeBlock(
                    kind="method",
                    name=match.group(1),
                    text=raw[match.start() : end],
                    parameters=match.group(2) or "",
                    start=match.start(),
                )
            )
        return blocks

    def find_classes(self, raw: str) -> list[CodeBlock]:
        blocks = []
        for match in _CLASS_HEADER_RE.finditer(raw):
            end = self._find_block_end(raw, match.end() - 1)
            if end is None:
                continue
            blocks.append(
                CodeBlock(
                    kind="class",
                    name=match.group(1),
                    text=raw[match.start() : end],
                    start=match.start(),
                )
            )
        return blocks

    def _find_block_end(self, raw: str, open_brace: int) -> int | None:
        """Find the offset just past the brace closing ``open_brace``.

        Args:
            raw: Raw source text.
            open_brace: Offset of the opening ``{``.

        Returns:
            End offset (exclusive), or None if the block is unbalanced.
        """
        depth = 0
        for token in _BRACE_TOKEN_RE.finditer(raw, open_brace):
            text = token.group(0)
            if text == "{":
                depth += 1
            elif text == "}":
                depth -= 1
                if depth == 0:
                    return token.end()
        return None


SCANNERS: dict[str, type] = {
    RegexStructureScanner.name: RegexStructureScanner,
    BraceDepthStructureScanner.name: BraceDepthStructureScanner,
}


def get_scanner(name: str = "regex") -> StructureScanner:
    """Create a structure scanner by name.

    Args:
        name: ``regex`` or ``brace``.

    Returns:
        Scanner instance.

    Raises:
        ConfigurationError: If the name is unknown.
    """
    scanner_class = SCANNERS.get(name)
    if scanner_class is None:
        from ..errors import ConfigurationError

        raise ConfigurationError(
            message=f"Unknown structure scanner: {name}",
            suggestion=f"Use one of: {', '.join(sorted(SCANNERS))}",
            details={"structure_scanner": name},
        )
    return scanner_class()
