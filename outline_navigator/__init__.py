"""Top-level package for Outline Navigator.

The business logic (outline model, expansion tracking, data sources) is
GUI-agnostic and lives in :mod:`outline_navigator.core`. The Tk front-end
only depends on the public API re-exported here and on the UI controllers.
"""

from .core.models import Emphasis, OutlineNode, OutlineRow, ResolvedDestination  # re-export for convenience

__all__: list[str] = [
    "Emphasis",
    "OutlineNode",
    "OutlineRow",
    "ResolvedDestination",
]
