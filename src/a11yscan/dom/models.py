# src/a11yscan/dom/models.py
from pydantic import BaseModel, ConfigDict

from .core import ElementNode


class HTMLDocument(BaseModel):
    """
    Represents a parsed HTML document.

    `root` is a synthetic '#document' node whose children are the top-level
    elements of the markup, so rules can query the whole document through it.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    root: ElementNode
    has_doctype: bool = False
