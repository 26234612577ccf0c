"""
Configuration system for the debt analyzer.

Scoring weights, smell thresholds and engine settings are explicit
dataclasses with documented defaults, loaded from debt.config.json files
and merged hierarchically.
"""

import json
import logging
import math
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _from_camel_dict(cls: type, data: dict[str, Any]) -> dict[str, Any]:
    """Pick dataclass fields out of a camelCase (or snake_case) mapping."""
    kwargs = {}
    for f in fields(cls):
        camel = _to_camel(f.name)
        if camel in data:
            kwargs[f.name] = data[camel]
        elif f.name in data:
            kwargs[f.name] = data[f.name]
    return kwargs


@dataclass
class ScoringConfig:
    """Technical debt ratio policy.

    The ratio is a health score: each term is clamped into [0, 1] and
    weighted, so with the defaults a clean input scores 1.0.

    Attributes:
        complexity_weight: Weight of the complexity term (default 0.3).
        duplication_weight: Weight of the duplication term (default 0.3).
        smell_weight: Weight of the smell-count term (default 0.4).
        complexity_cap: Complexity at or above which the term is 0.
        smell_cap: Smell count at or above which the term is 0.
        high_debt_threshold: Ratios strictly below this are high debt.
        precision: Decimal places used for ratios in responses.
    """

    complexity_weight: float = 0.3
    duplication_weight: float = 0.3
    smell_weight: float = 0.4
    complexity_cap: int = 10
    smell_cap: int = 10
    high_debt_threshold: float = 0.70
    precision: int = 2

    def validate(self) -> None:
        """Raise ConfigurationError for an inconsistent policy."""
        total = self.complexity_weight + self.duplication_weight + self.smell_weight
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ConfigurationError(
                message=f"Scoring weights must sum to 1.0, got {total}",
                details={
                    "complexityWeight": self.complexity_weight,
                    "duplicationWeight": self.duplication_weight,
                    "smellWeight": self.smell_weight,
                },
            )
        if self.complexity_cap < 1 or self.smell_cap < 1:
            raise ConfigurationError(
                message="complexityCap and smellCap must be at least 1",
            )
        if not 0.0 <= self.high_debt_threshold <= 1.0:
            raise ConfigurationError(
                message=f"highDebtThreshold must be within [0, 1], got {self.high_debt_threshold}",
            )
        if self.precision < 0:
            raise ConfigurationError(message="precision must not be negative")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScoringConfig":
        """Create ScoringConfig from dictionary."""
        return cls(**_from_camel_dict(cls, data))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {_to_camel(k): v for k, v in asdict(self).items()}


@dataclass
class ThresholdConfig:
    """Smell detection thresholds.

    Every comparison is strict ("more than"), except temporary field
    usage which triggers below ``temporary_field_min_uses``.
    """

    long_method_lines: int = 20
    long_parameter_count: int = 4
    large_class_lines: int = 100
    temporary_field_min_uses: int = 3
    parallel_inheritance_min_classes: int = 1
    parallel_inheritance_min_extends: int = 2
    comment_ratio: float = 0.3
    duplicate_window_lines: int = 3
    duplicate_min_chars: int = 50
    feature_envy_calls: int = 5

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ThresholdConfig":
        """Create ThresholdConfig from dictionary."""
        return cls(**_from_camel_dict(cls, data))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {_to_camel(k): v for k, v in asdict(self).items()}


@dataclass
class RuleConfig:
    """Configuration for a single rule."""

    enabled: bool = True
    parameters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleConfig":
        """Create RuleConfig from dictionary."""
        return cls(
            enabled=data.get("enabled", True),
            parameters=data.get("parameters", {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"enabled": self.enabled}
        if self.parameters:
            result["parameters"] = self.parameters
        return result


@dataclass
class PerformanceConfig:
    """Performance configuration for the rule engine."""

    parallel_execution: bool = False
    max_parallel_workers: int = 4
    parallel_rule_timeout_ms: float = 30000.0  # 30 seconds per rule in parallel
    max_input_chars: int = 0  # 0 = unlimited

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PerformanceConfig":
        """Create PerformanceConfig from dictionary."""
        return cls(
            parallel_execution=data.get("parallelExecution", False),
            max_parallel_workers=data.get("maxParallelWorkers", 4),
            parallel_rule_timeout_ms=data.get("parallelRuleTimeoutMs", 30000.0),
            max_input_chars=data.get("maxInputChars", 0),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "parallelExecution": self.parallel_execution,
            "maxParallelWorkers": self.max_parallel_workers,
            "parallelRuleTimeoutMs": self.parallel_rule_timeout_ms,
            "maxInputChars": self.max_input_chars,
        }


@dataclass
class AnalyzerConfig:
    """Top-level analyzer configuration."""

    # None = every category
    enabled_categories: list[str] | None = None
    structure_scanner: str = "regex"
    continue_on_error: bool = True
    normalize_whitespace: bool = False

    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)
    rules: dict[str, RuleConfig] = field(default_factory=dict)

    def is_rule_enabled(self, rule_id: str, category: str | None = None) -> bool:
        """Check if a rule is enabled.

        Args:
            rule_id: The rule identifier
            category: The rule's category (optional)

        Returns:
            True if the rule is enabled, False otherwise
        """
        if (
            category
            and self.enabled_categories is not None
            and category not in self.enabled_categories
        ):
            return False

        if rule_id in self.rules:
            return self.rules[rule_id].enabled

        return True

    def get_rule_config(self, rule_id: str) -> RuleConfig:
        """Get configuration for a specific rule (default if not configured)."""
        return self.rules.get(rule_id, RuleConfig())

    def get_rule_parameter(
        self, rule_id: str, param_name: str, default: Any = None
    ) -> Any:
        """Get a specific parameter override for a rule.

        Args:
            rule_id: The rule identifier
            param_name: The parameter name
            default: Default value if not configured

        Returns:
            The parameter value or default
        """
        return self.get_rule_config(rule_id).parameters.get(param_name, default)

    def validate(self) -> None:
        """Validate nested policies and the scanner name."""
        from ..analysis.structure import SCANNERS

        self.scoring.validate()
        if self.structure_scanner not in SCANNERS:
            raise ConfigurationError(
                message=f"Unknown structure scanner: {self.structure_scanner}",
                suggestion=f"Use one of: {', '.join(sorted(SCANNERS))}",
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalyzerConfig":
        """Create AnalyzerConfig from dictionary."""
        config = cls(
            enabled_categories=data.get("enabledCategories"),
            structure_scanner=data.get("structureScanner", "regex"),
            continue_on_error=data.get("continueOnError", True),
            normalize_whitespace=data.get("normalizeWhitespace", False),
        )

        if "scoring" in data:
            config.scoring = ScoringConfig.from_dict(data["scoring"])

        if "thresholds" in data:
            config.thresholds = ThresholdConfig.from_dict(data["thresholds"])

        if "performance" in data:
            config.performance = PerformanceConfig.from_dict(data["performance"])

        if "rules" in data:
            for rule_id, rule_data in data["rules"].items():
                config.rules[rule_id] = RuleConfig.from_dict(rule_data)

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "enabledCategories": self.enabled_categories,
            "structureScanner": self.structure_scanner,
            "continueOnError": self.continue_on_error,
            "normalizeWhitespace": self.normalize_whitespace,
            "scoring": self.scoring.to_dict(),
            "thresholds": self.thresholds.to_dict(),
            "performance": self.performance.to_dict(),
            "rules": {k: v.to_dict() for k, v in self.rules.items()},
        }

    def merge(self, other: "AnalyzerConfig") -> "AnalyzerConfig":
        """Merge another config into this one (other takes precedence).

        Args:
            other: Configuration to merge in

        Returns:
            New AnalyzerConfig with merged settings
        """
        result = AnalyzerConfig(
            enabled_categories=(
                list(other.enabled_categories)
                if other.enabled_categories is not None
                else self.enabled_categories
            ),
            structure_scanner=other.structure_scanner,
            continue_on_error=other.continue_on_error,
            normalize_whitespace=other.normalize_whitespace,
            scoring=ScoringConfig(**asdict(other.scoring)),
            thresholds=ThresholdConfig(**asdict(other.thresholds)),
            performance=PerformanceConfig(**asdict(other.performance)),
        )

        result.rules = dict(self.rules)
        result.rules.update(other.rules)

        return result


class AnalyzerConfigLoader:
    """Loads analyzer configuration from debt.config.json files."""

    CONFIG_FILENAME = "debt.config.json"
    LOCAL_CONFIG_FILENAME = "debt.config.local.json"
    PROJECT_CONFIG_DIR = ".debt"
    GLOBAL_CONFIG_DIR = Path.home() / ".debt-analyzer"

    def __init__(self, project_path: Path | None = None):
        """Initialize the config loader.

        Args:
            project_path: Path to the project root (defaults to CWD)
        """
        self.project_path = project_path or Path.cwd()

    def load(self, config_file: Path | None = None) -> AnalyzerConfig:
        """Load configuration with hierarchical merging.

        Load order (later overrides earlier):
        1. Built-in defaults
        2. Global config (~/.debt-analyzer/debt.config.json)
        3. Project config (<project>/.debt/debt.config.json)
        4. Local config (<project>/.debt/debt.config.local.json)
        5. Explicit config file, if given

        Args:
            config_file: Optional explicit file applied last.

        Returns:
            Merged AnalyzerConfig
        """
        config = AnalyzerConfig()
        project_dir = self.project_path / self.PROJECT_CONFIG_DIR

        candidates = [
            self.GLOBAL_CONFIG_DIR / self.CONFIG_FILENAME,
            project_dir / self.CONFIG_FILENAME,
            project_dir / self.LOCAL_CONFIG_FILENAME,
        ]
        if config_file is not None:
            candidates.append(Path(config_file))

        for path in candidates:
            if not path.exists():
                continue
            loaded = self._load_file(path)
            if loaded:
                config = config.merge(loaded)

        return config

    def _load_file(self, path: Path) -> AnalyzerConfig | None:
        """Load configuration from a file.

        Args:
            path: Path to the config file

        Returns:
            AnalyzerConfig or None if file couldn't be loaded
        """
        try:
            with open(path) as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            return AnalyzerConfig.from_dict(data)
        except (json.JSONDecodeError, OSError, ValueError, TypeError) as e:
            logger.warning(f"Could not load config from {path}: {e}")
            return None

    def save(self, config: AnalyzerConfig, local: bool = False) -> Path:
        """Save configuration to the project config directory.

        Args:
            config: Configuration to save
            local: If True, save to the local (git-ignored) file

        Returns:
            Path to the saved config file
        """
        filename = self.LOCAL_CONFIG_FILENAME if local else self.CONFIG_FILENAME
        config_path = self.project_path / self.PROJECT_CONFIG_DIR / filename

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            json.dump(config.to_dict(), f, indent=2)

        return config_path
