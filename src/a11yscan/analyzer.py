# src/a11yscan/analyzer.py
import logging
from typing import Optional

from .dom.builder import DOMBuilder
from .model import AnalysisResult, RuleFailure
from .rules.registry import RuleRegistry
from .scoring import compute_score, total_weight

logger = logging.getLogger(__name__)


class AccessibilityAnalyzer:
    """
    Scans HTML documents against a rule registry and scores the result.

    Each call builds its own document tree and shares no mutable state with
    other calls, so a single analyzer can serve concurrent requests.
    """

    def __init__(self, registry: Optional[RuleRegistry] = None, builder: Optional[DOMBuilder] = None):
        self.registry = registry if registry is not None else RuleRegistry.default()
        self.builder = builder or DOMBuilder()

    def analyze(self, raw_markup: str) -> AnalysisResult:
        """
        Runs the full rule suite on a markup string.

        Args:
            raw_markup (str): Decoded HTML text.

        Returns:
            AnalysisResult: The score, the issues in rule-registration order and
                            the issue count. Rules that raised are listed in
                            `rule_errors` and contribute no issues.

        Raises:
            ParseError: If the markup cannot be turned into a document tree.
        """
        doc = self.builder.parse_doc(raw_markup)

        issues, errors = self.registry.evaluate_isolated(doc.root)

        weight = total_weight(issues)
        score = compute_score(weight)

        logger.debug(
            "Scan finished: %d issues, weight %d, score %d, %d failed rules",
            len(issues), weight, score, len(errors)
        )

        return AnalysisResult(
            score=score,
            issues=issues,
            total_issues=len(issues),
            rule_errors=[
                RuleFailure(
                    rule=err.rule_name,
                    error_type=type(err.cause).__name__,
                    message=str(err.cause)
                )
                for err in errors
            ]
        )
