"""
Rule discovery system for auto-loading rules from category directories.

New rules are added by creating a module in the appropriate category
directory; discovery imports it and orders the rule classes canonically.
"""

import importlib
import inspect
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseRule

logger = logging.getLogger(__name__)


class RuleDiscovery:
    """Auto-discovers rules from the rules directory structure.

    Directory structure:
        debt_analyzer/rules/
        ├── bloaters/
        │   ├── long_method.py
        │   └── large_class.py
        ├── oo_abusers/
        └── ...
    """

    # Directory per category, in canonical category order
    RULE_CATEGORIES = [
        "bloaters",
        "oo_abusers",
        "change_preventers",
        "dispensables",
        "couplers",
    ]

    def __init__(self, rules_base_path: Path | None = None):
        """Initialize the rule discovery system.

        Args:
            rules_base_path: Base path for rules directory.
                           Defaults to the directory containing this file.
        """
        self.rules_base_path = rules_base_path or Path(__file__).parent
        self._discovered_rules: dict[str, type[BaseRule]] = {}
        self._discovery_errors: list[str] = []

    def discover_all(self) -> dict[str, type["BaseRule"]]:
        """Discover all rules from all category directories.

        Returns:
            Dictionary mapping rule_id to rule class, in canonical order
        """
        self._discovered_rules.clear()
        self._discovery_errors.clear()

        found: list[tuple[tuple[int, int], str, type[BaseRule]]] = []
        for directory in self.RULE_CATEGORIES:
            found.extend(self._discover_directory(directory))

        found.sort(key=lambda item: item[0])
        for _, rule_id, rule_class in found:
            self._discovered_rules[rule_id] = rule_class

        if self._discovery_errors:
            logger.warning(
                f"Rule discovery completed with {len(self._discovery_errors)} errors"
            )

        return dict(self._discovered_rules)

    def _discover_directory(
        self, directory: str
    ) -> list[tuple[tuple[int, int], str, type["BaseRule"]]]:
        """Load rule classes from one category directory.

        Args:
            directory: Category directory name

        Returns:
            (sort key, rule_id, class) triples
        """
        category_path = self.rules_base_path / directory
        if not category_path.is_dir():
            logger.debug(f"Category directory not found: {category_path}")
            return []

        found = []
        for module_file in sorted(category_path.glob("*.py")):
            if module_file.name.startswith("_"):
                continue

            try:
                found.extend(self._load_rules_from_module(directory, module_file))
            except Exception as e:
                error_msg = f"Error loading rules from {module_file}: {e}"
                logger.warning(error_msg)
                self._discovery_errors.append(error_msg)
        return found

    def _load_rules_from_module(
        self, directory: str, module_file: Path
    ) -> list[tuple[tuple[int, int], str, type["BaseRule"]]]:
        """Import a module and collect its concrete BaseRule subclasses.

        Args:
            directory: Category directory name
            module_file: Path to the Python module file

        Returns:
            (sort key, rule_id, class) triples
        """
        from .base import BaseRule

        module_name = f"{__package__}.{directory}.{module_file.stem}"
        module = importlib.import_module(module_name)

        found = []
        for name, obj in inspect.getmembers(module, inspect.isclass):
            if not issubclass(obj, BaseRule) or obj is BaseRule:
                continue

            # Must be defined in this module (not imported)
            if obj.__module__ != module_name:
                continue

            if inspect.isabstract(obj):
                continue

            try:
                instance = obj()
                found.append((instance.sort_key, instance.rule_id, obj))
                logger.debug(f"Discovered rule: {instance.rule_id} from {module_file}")
            except Exception as e:
                logger.warning(f"Could not instantiate rule {name} from {module_file}: {e}")
        return found

    @property
    def discovery_errors(self) -> list[str]:
        """Errors encountered during the last discovery."""
        return self._discovery_errors.copy()

    @property
    def discovered_rule_ids(self) -> list[str]:
        """Rule IDs from the last discovery, in canonical order."""
        return list(self._discovered_rules.keys())

    def get_rule_class(self, rule_id: str) -> type["BaseRule"] | None:
        """Get a specific rule class by ID."""
        return self._discovered_rules.get(rule_id)


def discover_rules(rules_path: Path | None = None) -> dict[str, type["BaseRule"]]:
    """Convenience function to discover rules.

    Args:
        rules_path: Base path for rules directory

    Returns:
        Dictionary mapping rule_id to rule class
    """
    return RuleDiscovery(rules_path).discover_all()
