# src/a11yscan/model.py
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class AccessibilityIssue(BaseModel):
    """
    Data model representing a single finding of an accessibility rule.

    `type` names the rule category (e.g. 'missing-alt'), `element` holds the
    serialized markup of the offending node when there is one.
    """
    model_config = ConfigDict(frozen=True)

    type: str
    message: str
    severity: Literal["low", "medium", "high"]
    element: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class RuleFailure(BaseModel):
    """Diagnostic record of a rule that raised and was skipped during a scan."""
    model_config = ConfigDict(frozen=True)

    rule: str
    error_type: str
    message: str


class AnalysisResult(BaseModel):
    """
    The complete output of one scan: score, ordered issues and issue count.

    Serializes `total_issues` as 'totalIssues'. `rule_errors` is diagnostic
    only and never part of the serialized envelope.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    score: int = Field(ge=0, le=100)
    issues: List[AccessibilityIssue] = Field(default_factory=list)
    total_issues: int = Field(default=0, ge=0, alias="totalIssues")
    rule_errors: List[RuleFailure] = Field(default_factory=list, exclude=True)

    @model_validator(mode='after')
    def check_issue_count(self):
        """The issue count must always match the issue list."""
        if self.total_issues != len(self.issues):
            raise ValueError(
                f"totalIssues ({self.total_issues}) does not match number of issues ({len(self.issues)})"
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Returns the JSON-ready envelope: {score, issues, totalIssues}."""
        return {
            "score": self.score,
            "issues": [issue.to_dict() for issue in self.issues],
            "totalIssues": self.total_issues,
        }
