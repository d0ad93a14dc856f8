# src/a11yscan/rules/core.py
from typing import Callable, Iterable, List, Optional, Sequence

from ..dom.core import DocumentTree
from ..model import AccessibilityIssue

# A check inspects a whole document tree and returns its findings in document order
RuleCheck = Callable[[DocumentTree], Iterable[AccessibilityIssue]]


def audit_spec(types: List[str]):
    """
    Decorator to declare which issue types a rule check returns.
    Picked up by AccessibilityRule so the registry can list every issue type.
    """
    def decorator(func):
        func.defined_types = types
        return func
    return decorator


class AccessibilityRule:
    """
    A named, pure check over a document tree.

    Rules never mutate the tree and never depend on other rules; `order`
    decides their position when the registry discovers them.
    """

    __slots__ = ("name", "check", "order", "issue_types")

    def __init__(
            self,
            name: str,
            check: RuleCheck,
            order: int = 100,
            issue_types: Optional[Sequence[str]] = None
    ):
        self.name = name
        self.check = check
        self.order = order

        declared = set(issue_types or [])
        declared.update(getattr(check, 'defined_types', []))
        self.issue_types = tuple(sorted(declared))

    def run(self, tree: DocumentTree) -> List[AccessibilityIssue]:
        """Runs the check and materializes its findings."""
        return list(self.check(tree))

    def __repr__(self) -> str:
        return f"AccessibilityRule(name={self.name!r}, order={self.order})"


def issue_for(node: DocumentTree, issue_type: str, message: str, severity: str) -> AccessibilityIssue:
    """Builds an issue pointing at the serialized markup of `node`."""
    return AccessibilityIssue(type=issue_type, message=message, severity=severity, element=node.outer_html)
