# src/a11yscan/dom/core.py
from typing import Dict, Iterator, List, Optional, Protocol, runtime_checkable

from bs4.element import CData, NavigableString, Script, Stylesheet, Tag, TemplateString

# String types that make up DOM textContent: script/style/template text counts, comments do not
TEXT_TYPES = (NavigableString, CData, Script, Stylesheet, TemplateString)


@runtime_checkable
class DocumentTree(Protocol):
    """
    The narrow capability a rule needs from a parsed document.

    Any tree implementation offering these members can be audited, which keeps
    the rules independent from the markup parser in use.
    """

    tag: str

    def find_all(self, *tags: str) -> List["DocumentTree"]: ...

    def get_attr(self, name: str, default: Optional[str] = None) -> Optional[str]: ...

    def has_attr(self, name: str) -> bool: ...

    @property
    def classes(self) -> List[str]: ...

    @property
    def text_content(self) -> str: ...

    @property
    def outer_html(self) -> str: ...


class ElementNode:
    """
    One element of the parsed document tree.

    Nodes built by DOMBuilder keep a reference to their BeautifulSoup Tag and
    only serialize `text_content` and `outer_html` when a rule asks for them.
    Hand-built nodes pass `text` and `markup` directly.
    """

    __slots__ = ("tag", "attrs", "children", "_text", "_markup", "_source")

    def __init__(
            self,
            tag: str,
            attrs: Optional[Dict[str, str]] = None,
            text: Optional[str] = None,
            markup: Optional[str] = None,
            children: Optional[List['ElementNode']] = None,
            source: Optional[Tag] = None
    ):
        self.tag = tag
        self.attrs: Dict[str, str] = attrs or {}
        self.children: List['ElementNode'] = children if children is not None else []
        self._text = text
        self._markup = markup
        self._source = source

    def iter_descendants(self) -> Iterator['ElementNode']:
        """Yields every descendant element in document (pre-)order."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_all(self, *tags: str) -> List['ElementNode']:
        """Returns all descendants whose tag matches one of `tags` (case-insensitive)."""
        wanted = {t.lower() for t in tags}
        return [node for node in self.iter_descendants() if node.tag.lower() in wanted]

    def get_attr(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.attrs.get(name.lower(), default)

    def has_attr(self, name: str) -> bool:
        return name.lower() in self.attrs

    @property
    def classes(self) -> List[str]:
        return (self.attrs.get('class') or '').split()

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendants, untrimmed."""
        if self._text is None:
            self._text = self._source.get_text(types=TEXT_TYPES) if self._source is not None else ""
        return self._text

    @property
    def outer_html(self) -> str:
        """Serialized markup of the subtree rooted at this node."""
        if self._markup is None:
            self._markup = str(self._source) if self._source is not None else ""
        return self._markup

    def __repr__(self) -> str:
        return f"ElementNode(tag={self.tag!r}, children={len(self.children)})"
