from __future__ import annotations

"""Outline retrieval and navigation exception classes.

Both errors are non-fatal by contract: they are raised by data sources,
caught at the asynchronous boundary by the tree model or the controller,
logged, and otherwise swallowed so the outline panel keeps working.
"""

from typing import Any, Optional


class OutlineError(Exception):
    """Base exception for all outline-related errors."""

    def __init__(self, message: str, document: Optional[str] = None,
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.document = document
        self.cause = cause

    def __str__(self) -> str:
        if self.document:
            return f"[Document: {self.document}] {super().__str__()}"
        return super().__str__()


class OutlineFetchError(OutlineError):
    """Raised when the outline cannot be retrieved.

    This covers unreadable or malformed documents, I/O failures and
    outline structures the source does not support.
    """
    pass


class DestinationResolutionError(OutlineError):
    """Raised when an entry's destination cannot be turned into a location."""

    def __init__(self, message: str, destination: Any = None, document: Optional[str] = None,
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message, document, cause)
        self.destination = destination
