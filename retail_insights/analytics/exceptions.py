"""
Report Errors

Every error raised by the query engine derives from ReportError, so callers
can catch the whole family or a single kind.
"""

from typing import Any, Dict, List, Optional


class ReportError(Exception):
    """Base class for reporting errors"""


class InvalidInput(ReportError, ValueError):
    """
    The fact table snapshot was rejected.

    Raised when a row is missing a required dimension or carries a value that
    cannot be parsed as a date or a number. The whole snapshot is rejected;
    no partial snapshot is ever returned.
    """

    def __init__(
        self,
        message: str,
        row_index: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.row_index = row_index
        self.errors = errors or []


class EmptyResultError(ReportError, LookupError):
    """A single-row selection found no eligible rows"""


class ArithmeticOverflow(ReportError, ArithmeticError):
    """A sum or difference cannot be represented exactly in the configured precision"""
