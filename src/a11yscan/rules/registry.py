# src/a11yscan/rules/registry.py
import importlib
import logging
import pkgutil
from typing import Iterator, List, Optional, Tuple

from .core import AccessibilityRule
from ..dom.core import DocumentTree
from ..exceptions import RuleEvaluationError
from ..model import AccessibilityIssue

logger = logging.getLogger(__name__)

CHECKS_PACKAGE = "a11yscan.rules.checks"


class RuleRegistry:
    """
    Immutable, ordered collection of accessibility rules.

    Rules are evaluated in registration order. A registry is assembled once
    (see `default()`) and only read afterwards, so one instance can be shared
    by concurrent scans. Extending it returns a new registry.
    """

    _default: Optional["RuleRegistry"] = None

    def __init__(self, rules=()):
        self._rules: Tuple[AccessibilityRule, ...] = tuple(rules)

    # --- Construction ---

    @classmethod
    def discover(cls, package: str = CHECKS_PACKAGE) -> "RuleRegistry":
        """
        Builds a registry from all modules in `package` exposing a `RULE`.

        Modules that fail to import are logged and skipped. Discovered rules are
        ordered by their `order` attribute, then by name.
        """
        rules: List[AccessibilityRule] = []
        try:
            checks_pkg = importlib.import_module(package)
        except ImportError as e:
            logger.error(f"Could not find rules package '{package}': {e}")
            return cls()

        for _, name, _ in pkgutil.iter_modules(checks_pkg.__path__):
            full_name = f"{package}.{name}"
            try:
                module = importlib.import_module(full_name)
            except Exception as e:
                logger.error(f"Error loading rule module {name}: {e}")
                continue

            rule = getattr(module, "RULE", None)
            if isinstance(rule, AccessibilityRule):
                rules.append(rule)
                logger.debug(f"Rule loaded: {rule.name}")

        rules.sort(key=lambda r: (r.order, r.name))
        return cls(rules)

    @classmethod
    def default(cls) -> "RuleRegistry":
        """Returns the built-in registry, discovering it on first use."""
        if cls._default is None:
            cls._default = cls.discover()
        return cls._default

    def extended(self, *rules: AccessibilityRule) -> "RuleRegistry":
        """Returns a new registry with `rules` appended after the existing ones."""
        return RuleRegistry(self._rules + tuple(rules))

    # --- Introspection ---

    @property
    def rules(self) -> Tuple[AccessibilityRule, ...]:
        return self._rules

    def names(self) -> List[str]:
        return [rule.name for rule in self._rules]

    def issue_types(self) -> List[str]:
        """Returns every issue type the registered rules declare."""
        return sorted({t for rule in self._rules for t in rule.issue_types})

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[AccessibilityRule]:
        return iter(self._rules)

    # --- Evaluation ---

    def evaluate(self, tree: DocumentTree) -> List[AccessibilityIssue]:
        """
        Concatenates every rule's findings in registration order.
        Exceptions raised by a rule propagate to the caller.
        """
        issues: List[AccessibilityIssue] = []
        for rule in self._rules:
            issues.extend(rule.run(tree))
        return issues

    def evaluate_isolated(
            self, tree: DocumentTree
    ) -> Tuple[List[AccessibilityIssue], List[RuleEvaluationError]]:
        """
        Like `evaluate`, but runs each rule inside its own error boundary.

        A failing rule contributes no issues and is returned as a
        RuleEvaluationError; the remaining rules are unaffected.
        """
        issues: List[AccessibilityIssue] = []
        errors: List[RuleEvaluationError] = []
        for rule in self._rules:
            try:
                found = rule.run(tree)
            except Exception as e:
                logger.error("Rule '%s' failed and was skipped: %s", rule.name, e, exc_info=True)
                errors.append(RuleEvaluationError(rule.name, e))
                continue
            issues.extend(found)
        return issues, errors
