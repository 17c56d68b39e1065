from __future__ import annotations

"""Data source interface definitions.

Defines the contract between the outline core and whatever reads the
document. The core never calls these methods on the UI thread; they may
block on I/O.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from outline_navigator.core.models import OutlineNode, ResolvedDestination


class OutlineSource(ABC):
    """Abstract outline provider bound to a single document.

    A new document means a new source object; the core compares sources by
    identity and never reuses one across documents.
    """

    @property
    def display_name(self) -> str:
        """Short human-readable name used in logs and status messages."""
        return type(self).__name__

    @abstractmethod
    def fetch_outline(self) -> Optional[List[OutlineNode]]:
        """Return the outline roots, or ``None`` when the document has none.

        Raises:
            OutlineFetchError: If the document cannot be read or its outline
                cannot be interpreted.
        """

    @abstractmethod
    def resolve_destination(self, destination: Any) -> ResolvedDestination:
        """Turn an entry's opaque destination into a concrete location.

        Raises:
            DestinationResolutionError: If the destination is invalid or
                points outside the document.
        """

    def close(self) -> None:
        """Release any resource held by the source."""
