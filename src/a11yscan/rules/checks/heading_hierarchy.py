from typing import List

from ..core import AccessibilityRule, audit_spec, issue_for
from ...dom.core import DocumentTree
from ...model import AccessibilityIssue

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


def heading_level(node: DocumentTree) -> int:
    """Determines the hierarchy level from the tag name (e.g., h3 -> 3)."""
    return int(node.tag[1])


@audit_spec(types=["heading-hierarchy"])
def check_heading_hierarchy(tree: DocumentTree) -> List[AccessibilityIssue]:
    """
    Rule: headings must not skip levels going down the document.

    Only document order matters, not nesting. The baseline advances to every
    heading seen, flagged or not, so each heading is measured against the one
    before it: h1 -> h4 -> h6 reports both jumps, while h1 -> h4 -> h5
    reports only the first.
    """
    issues = []
    last_level = 0

    for heading in tree.find_all(*HEADING_TAGS):
        current_level = heading_level(heading)
        if current_level > last_level + 1:
            issues.append(issue_for(
                heading,
                "heading-hierarchy",
                f"Skipped heading level from h{last_level} to h{current_level}",
                "medium"
            ))
        last_level = current_level

    return issues


# --- RULE DEFINITION ---
RULE = AccessibilityRule(
    name="Heading Level Hierarchy",
    check=check_heading_hierarchy,
    order=20
)
