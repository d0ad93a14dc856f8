# src/a11yscan/dom/builder.py
import logging
from typing import Any, Dict

from bs4 import BeautifulSoup, Doctype, Tag

from .core import ElementNode
from .models import HTMLDocument
from ..exceptions import ParseError

logger = logging.getLogger(__name__)

DOCUMENT_TAG = "#document"


def _normalize_attrs(attrs: Dict[str, Any]) -> Dict[str, str]:
    """
    Flattens BeautifulSoup attribute values into plain strings.
    Multi-valued attributes (e.g. class) arrive as lists and are space-joined.
    """
    normalized = {}
    for key, value in attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        normalized[key.lower()] = "" if value is None else str(value)
    return normalized


class DOMBuilder:
    """
    Builder responsible for parsing raw HTML into a structured HTMLDocument model.
    Malformed markup degrades into BeautifulSoup's best-effort tree.
    """

    def __init__(self, features: str = "html.parser"):
        self.features = features

    def parse_doc(self, html: str) -> HTMLDocument:
        """
        Parses raw HTML content into an HTMLDocument.

        Args:
            html (str): The decoded markup text.

        Returns:
            HTMLDocument: The document tree rooted at a synthetic '#document' node.

        Raises:
            ParseError: If the input is not text or the parser gives up on it.
        """
        if not isinstance(html, str):
            raise ParseError(f"Expected markup text, got {type(html).__name__}")

        # Strip a stray BOM, the caller already decoded the bytes
        clean_html = html.replace('\ufeff', '')

        try:
            soup = BeautifulSoup(clean_html, self.features)
        except Exception as e:
            raise ParseError(f"Could not parse markup: {e}") from e

        root = self._build_tree(soup)
        has_doctype = any(isinstance(item, Doctype) for item in soup.contents)
        logger.debug("Parsed document with %d top-level elements", len(root.children))
        return HTMLDocument(root=root, has_doctype=has_doctype)

    def _build_tree(self, soup: BeautifulSoup) -> ElementNode:
        """
        Converts the BeautifulSoup tree into ElementNodes with an explicit stack,
        so unclosed tags nested thousands deep do not hit the recursion limit.
        """
        root = ElementNode(tag=DOCUMENT_TAG, source=soup)
        stack = [(soup, root)]
        while stack:
            tag, node = stack.pop()
            for child in tag.children:
                if not isinstance(child, Tag):
                    continue
                child_node = ElementNode(
                    tag=child.name.lower(),
                    attrs=_normalize_attrs(child.attrs),
                    source=child,
                )
                node.children.append(child_node)
                stack.append((child, child_node))
        return root
