from __future__ import annotations

"""In-memory outline tree for the active document.

The model is rebuilt every time the active document changes. Each fetch is
tagged with the generation that issued it, so a slow fetch for a previous
document can never overwrite the tree of the current one.
"""

import logging
from typing import Callable, Dict, List, Optional

from outline_navigator.core.exceptions import OutlineFetchError
from outline_navigator.core.models import NodeKey, OutlineNode, assign_keys, iter_nodes
from outline_navigator.core.services.task_runner import TaskRunner
from outline_navigator.core.sources.interfaces import OutlineSource

logger = logging.getLogger(__name__)

__all__ = ["OutlineTreeModel"]


class OutlineTreeModel:
    """Outline roots of the current document, loaded in the background.

    Parameters
    ----------
    runner : TaskRunner
        Executes ``fetch_outline`` off the UI thread.
    on_changed : Callable[[], None], optional
        Invoked whenever the stored tree changes (cleared or loaded).

    Notes
    -----
    - Fetch failures are logged and leave the tree empty; they never raise.
    - ``None`` and an empty list from a source both mean "no outline".
    """

    def __init__(self, runner: TaskRunner, on_changed: Optional[Callable[[], None]] = None) -> None:
        self._runner = runner
        self._on_changed = on_changed
        self._roots: List[OutlineNode] = []
        self._index: Dict[NodeKey, OutlineNode] = {}
        self._source: Optional[OutlineSource] = None
        self._generation = 0
        self._loading = False
        self.last_error: Optional[OutlineFetchError] = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def roots(self) -> List[OutlineNode]:
        return self._roots

    @property
    def source(self) -> Optional[OutlineSource]:
        return self._source

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loading(self) -> bool:
        return self._loading

    def is_empty(self) -> bool:
        return not self._roots

    def find(self, key: NodeKey) -> Optional[OutlineNode]:
        return self._index.get(key)

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------
    def set_document(self, source: Optional[OutlineSource]) -> None:
        """Switch to *source* and request its outline.

        Passing ``None`` clears the tree without fetching anything.
        """
        self._generation += 1
        self._source = source
        self.last_error = None
        self._store([])

        if source is None:
            self._loading = False
            logger.debug("Outline cleared (no document)")
            self._notify()
            return

        generation = self._generation
        self._loading = True
        logger.debug("Requesting outline for %s (generation %d)", source.display_name, generation)
        self._notify()
        self._runner.submit(
            source.fetch_outline,
            lambda outline: self._on_fetched(generation, outline),
            lambda exc: self._on_fetch_failed(generation, exc),
        )

    def _on_fetched(self, generation: int, outline: Optional[List[OutlineNode]]) -> None:
        if generation != self._generation:
            logger.debug("Discarding stale outline (generation %d, current %d)", generation, self._generation)
            return
        self._loading = False
        self._store(list(outline or []))
        logger.info("Outline ready: %d top-level entries", len(self._roots))
        self._notify()

    def _on_fetch_failed(self, generation: int, exc: BaseException) -> None:
        if generation != self._generation:
            logger.debug("Ignoring failure of stale outline fetch (generation %d): %s", generation, exc)
            return
        self._loading = False
        if not isinstance(exc, OutlineFetchError):
            name = self._source.display_name if self._source is not None else None
            exc = OutlineFetchError(f"Unexpected error while loading outline: {exc}", name, exc)
        self.last_error = exc
        logger.error("Error loading document outline: %s", exc, exc_info=exc.cause or exc)
        self._store([])
        self._notify()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _store(self, roots: List[OutlineNode]) -> None:
        self._roots = assign_keys(roots)
        self._index = {node.key: node for node in iter_nodes(self._roots)}

    def _notify(self) -> None:
        if self._on_changed is None:
            return
        try:
            self._on_changed()
        except Exception:
            logger.exception("Outline change listener failed")
