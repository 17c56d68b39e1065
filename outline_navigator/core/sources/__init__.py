"""Outline data sources.

A source wraps one open document and answers two blocking questions: what
is its outline, and where does a given destination point to.
"""

from .interfaces import OutlineSource  # noqa: F401
from .pdf_source import PdfOutlineSource  # noqa: F401

__all__: list[str] = [
    "OutlineSource",
    "PdfOutlineSource",
]
