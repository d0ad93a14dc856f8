from typing import List

from ..core import AccessibilityRule, audit_spec, issue_for
from ...dom.core import DocumentTree
from ...model import AccessibilityIssue


@audit_spec(types=["missing-alt"])
def check_missing_alt(tree: DocumentTree) -> List[AccessibilityIssue]:
    """
    Flags every <img> without an alt attribute.
    alt="" marks a decorative image and is compliant, so only absence counts.
    """
    return [
        issue_for(img, "missing-alt", "Image is missing an alt attribute", "high")
        for img in tree.find_all("img")
        if not img.has_attr("alt")
    ]


# --- RULE DEFINITION ---
RULE = AccessibilityRule(
    name="Missing Alt Text",
    check=check_missing_alt,
    order=10
)
