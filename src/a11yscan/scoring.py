# src/a11yscan/scoring.py
"""
Severity model: the fixed weight of each issue severity and the score
derived from the summed weights of a scan.
"""
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping

MAX_SCORE = 100


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


SEVERITY_WEIGHTS: Mapping[str, int] = MappingProxyType({
    Severity.LOW.value: 1,
    Severity.MEDIUM.value: 3,
    Severity.HIGH.value: 5,
})


def severity_weight(severity: Any) -> int:
    """Returns the weight of a severity level; unknown levels weigh 0."""
    if isinstance(severity, Severity):
        severity = severity.value
    return SEVERITY_WEIGHTS.get(severity, 0)


def total_weight(issues: Iterable[Any]) -> int:
    """Sums the severity weights of the given issues."""
    return sum(severity_weight(issue.severity) for issue in issues)


def compute_score(weight: float) -> int:
    """Deducts the weight from MAX_SCORE, clamped to [0, MAX_SCORE] and rounded."""
    return int(round(max(0, min(MAX_SCORE, MAX_SCORE - weight))))
