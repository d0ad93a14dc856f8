from typing import List

from ..core import AccessibilityRule, audit_spec, issue_for
from ...dom.core import DocumentTree
from ...model import AccessibilityIssue


def is_generic_div(node: DocumentTree) -> bool:
    """A div is generic when it carries content but neither a class nor a role."""
    return (
        not node.classes
        and not node.get_attr("role")
        and node.text_content.strip() != ""
    )


@audit_spec(types=["non-semantic"])
def check_semantic_structure(tree: DocumentTree) -> List[AccessibilityIssue]:
    """Suggests semantic elements for content wrapped in generic divs."""
    return [
        issue_for(div, "non-semantic", "Consider using semantic HTML instead of generic div", "low")
        for div in tree.find_all("div")
        if is_generic_div(div)
    ]


# --- RULE DEFINITION ---
RULE = AccessibilityRule(
    name="Semantic Structure",
    check=check_semantic_structure,
    order=30
)
