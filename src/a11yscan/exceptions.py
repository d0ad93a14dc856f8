# src/a11yscan/exceptions.py
from typing import Optional


class A11yScanError(Exception):
    """Base class for all errors raised by the scanning engine."""


class ParseError(A11yScanError):
    """Raised when the submitted markup cannot be turned into a document tree."""


class RuleEvaluationError(A11yScanError):
    """
    Wraps an exception raised by a single rule while it traversed the tree.

    The analyzer records these per rule instead of aborting the scan.
    """

    def __init__(self, rule_name: str, cause: Optional[BaseException] = None):
        self.rule_name = rule_name
        self.cause = cause
        detail = f"{type(cause).__name__}: {cause}" if cause else "unknown error"
        super().__init__(f"Rule '{rule_name}' failed: {detail}")
