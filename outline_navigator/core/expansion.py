from __future__ import annotations

"""Expansion state tracking for outline nodes.

The tracker is a plain key set. It knows nothing about the tree it
describes; callers are responsible for only toggling nodes that have
children.
"""

import logging
from typing import FrozenSet, Iterable, Iterator, Set

from outline_navigator.core.models import NodeKey

logger = logging.getLogger(__name__)

__all__ = ["ExpansionState"]


class ExpansionState:
    """Set of node keys currently showing their children."""

    def __init__(self, expanded: Iterable[NodeKey] = ()) -> None:
        self._expanded: Set[NodeKey] = set(expanded)

    def toggle(self, key: NodeKey) -> bool:
        """Flip membership of *key* and return the new membership."""
        if key in self._expanded:
            self._expanded.discard(key)
            logger.debug("Collapsed %s", key)
            return False
        self._expanded.add(key)
        logger.debug("Expanded %s", key)
        return True

    def is_expanded(self, key: NodeKey) -> bool:
        return key in self._expanded

    def expand(self, key: NodeKey) -> None:
        self._expanded.add(key)

    def collapse(self, key: NodeKey) -> None:
        self._expanded.discard(key)

    def clear(self) -> None:
        self._expanded.clear()

    def snapshot(self) -> FrozenSet[NodeKey]:
        return frozenset(self._expanded)

    def __contains__(self, key: object) -> bool:
        return key in self._expanded

    def __iter__(self) -> Iterator[NodeKey]:
        return iter(sorted(self._expanded))

    def __len__(self) -> int:
        return len(self._expanded)

    def __repr__(self) -> str:
        return f"ExpansionState({sorted(self._expanded)!r})"
