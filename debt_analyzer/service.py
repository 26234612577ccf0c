"""
Analysis pipeline and request boundary.

``DebtAnalyzer`` runs the pipeline for one input string:

    raw -> clean -> {complexity, duplication, smell rules} -> aggregate

``handle_request`` wraps it in the ``{"code": ...}`` request contract and
always returns either a complete result or an error payload, never both.
"""

import json
import logging
from typing import Any

from pydantic import BaseModel, StrictStr, ValidationError

from .analysis.complexity import estimate_complexity
from .analysis.duplication import count_lines, estimate_duplication
from .analysis.preprocessor import clean
from .analysis.structure import get_scanner
from .diagnostics import DiagnosticsCollector
from .errors import AnalyzerError, InternalAnalysisError, InvalidRequestError
from .models import AnalysisResult
from .rules.base import RuleContext
from .rules.config import AnalyzerConfig
from .rules.engine import RuleEngine, create_rule_engine
from .scoring import aggregate

logger = logging.getLogger(__name__)


class AnalyzeRequest(BaseModel):
    """Request body: only ``code`` is read, other keys are ignored."""

    code: StrictStr


class DebtAnalyzer:
    """Stateless technical-debt analysis pipeline.

    The analyzer keeps configuration, a loaded rule engine and a
    diagnostics collector. None of them change between calls, so results
    depend only on the input text.
    """

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        engine: RuleEngine | None = None,
        diagnostics: DiagnosticsCollector | None = None,
    ):
        self.config = config or AnalyzerConfig()
        self.config.validate()
        self.diagnostics = diagnostics or DiagnosticsCollector()
        self.engine = engine or create_rule_engine(
            config=self.config, diagnostics=self.diagnostics
        )
        self.scanner = get_scanner(self.config.structure_scanner)

    def analyze(self, code: str, parallel: bool | None = None) -> AnalysisResult:
        """Analyze one source text.

        Args:
            code: Raw source text; may be empty or syntactically invalid.
            parallel: Override parallel rule execution (None = use config).

        Returns:
            Complete AnalysisResult.
        """
        with self.diagnostics.measure("analyze"):
            clean_text = self._preprocess(code)

            complexity = estimate_complexity(clean_text, diagnostics=self.diagnostics)
            duplication_ratio = estimate_duplication(
                code,
                normalize_whitespace=self.config.normalize_whitespace,
                diagnostics=self.diagnostics,
            )

            context = RuleContext(
                raw=code,
                clean=clean_text,
                config=self.config,
                scanner=self.scanner,
            )
            engine_result = self.engine.run(context, parallel=parallel)

            return aggregate(
                complexity,
                duplication_ratio,
                engine_result.smells,
                lines_of_code=count_lines(code),
                scoring=self.config.scoring,
            )

    def _preprocess(self, code: str) -> str:
        """Clean the text, falling back to the raw text on failure."""
        try:
            return clean(code)
        except Exception as e:
            logger.warning(f"Preprocessing failed, using raw text: {e}", exc_info=True)
            self.diagnostics.increment("preprocess_failures")
            return code

    def parse_request(self, body: Any) -> str:
        """Validate a request body and extract the source text.

        Args:
            body: Decoded JSON object, or the JSON text itself.

        Returns:
            The ``code`` field.

        Raises:
            InvalidRequestError: If the body violates the request contract.
        """
        if isinstance(body, (str, bytes, bytearray)):
            try:
                body = json.loads(body)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise InvalidRequestError(
                    "Invalid input: request body must be a JSON object",
                    details={"reason": str(e)},
                ) from e

        if not isinstance(body, dict):
            raise InvalidRequestError(
                "Invalid input: request body must be a JSON object",
            )

        try:
            request = AnalyzeRequest(**body)
        except (ValidationError, TypeError) as e:
            raise InvalidRequestError(details={"reason": str(e)}) from e

        max_chars = self.config.performance.max_input_chars
        if max_chars and len(request.code) > max_chars:
            raise InvalidRequestError(
                f"Invalid input: code exceeds {max_chars} characters",
                details={"length": len(request.code)},
            )

        return request.code

    def handle_request(self, body: Any) -> tuple[int, dict[str, Any]]:
        """Process a request body into a status code and JSON payload.

        Args:
            body: Decoded JSON object, or the JSON text itself.

        Returns:
            ``(200, result)``, ``(400, {"error": ...})`` or
            ``(500, {"error": ...})``.
        """
        try:
            code = self.parse_request(body)
        except InvalidRequestError as e:
            logger.info(f"Rejected request: {e.message}")
            self.diagnostics.increment("requests_invalid")
            return e.status_code, e.to_dict()

        logger.debug(
            "Analyzing request",
            extra={"operation": "analyze", "input_length": len(code)},
        )

        try:
            payload = self.analyze(code).to_dict()
        except Exception as e:
            logger.error(f"Error in analysis: {e}", exc_info=True)
            self.diagnostics.increment("requests_failed")
            error = e if isinstance(e, AnalyzerError) else InternalAnalysisError(e)
            return error.status_code, error.to_dict()

        self.diagnostics.increment("requests_ok")
        return 200, payload


def analyze_code(code: str, config: AnalyzerConfig | None = None) -> AnalysisResult:
    """Analyze one source text with a fresh analyzer."""
    return DebtAnalyzer(config=config).analyze(code)


def handle_request(
    body: Any, config: AnalyzerConfig | None = None
) -> tuple[int, dict[str, Any]]:
    """Handle one request body with a fresh analyzer."""
    return DebtAnalyzer(config=config).handle_request(body)
