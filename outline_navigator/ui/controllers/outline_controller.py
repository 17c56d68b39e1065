from __future__ import annotations

"""Controller mediating between the outline widget and the outline model.

Keeps the expansion state, computes which rows are visible and turns
clicks into toggles and destination lookups.
"""

import logging
from typing import Any, Callable, List, Optional

from outline_navigator.core.exceptions import DestinationResolutionError
from outline_navigator.core.expansion import ExpansionState
from outline_navigator.core.models import NodeKey, NodeState, OutlineNode, OutlineRow, ResolvedDestination, iter_nodes
from outline_navigator.core.services.outline_tree_model import OutlineTreeModel
from outline_navigator.core.services.task_runner import TaskRunner
from outline_navigator.core.sources.interfaces import OutlineSource

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "No outline available"


class OutlineController:
    """Coordinates the outline tree, its expansion state and user interaction.

    The controller owns one :class:`OutlineTreeModel` and one
    :class:`ExpansionState` for its whole lifetime. The outline source is
    borrowed: it is supplied through :meth:`set_document` and replaced
    whenever the active document changes.

    Parameters
    ----------
    runner : TaskRunner
        Runs outline fetches and destination resolutions in the background.
    on_changed : Callable[[], None], optional
        Invoked after any change that affects the visible rows.
    on_navigate : Callable[[ResolvedDestination], None], optional
        Receives each successfully resolved destination. What navigation
        means is up to the caller.

    Notes
    -----
    - No Tkinter or UI framework code should appear in this module.
    - Failures of background calls are logged and swallowed; no method
      raises for them.
    """

    def __init__(
        self,
        runner: TaskRunner,
        on_changed: Optional[Callable[[], None]] = None,
        on_navigate: Optional[Callable[[ResolvedDestination], None]] = None,
        placeholder_text: str = PLACEHOLDER_TEXT,
    ) -> None:
        self._runner = runner
        self.on_changed = on_changed
        self.on_navigate = on_navigate
        self.placeholder_text = placeholder_text
        self.model = OutlineTreeModel(runner, on_changed=self._notify)
        self.expansion = ExpansionState()

    # ---------------------------------------------------------------------------------
    # Document lifecycle
    # ---------------------------------------------------------------------------------

    def set_document(self, source: Optional[OutlineSource]) -> None:
        """Make *source* the active document; ``None`` means no document."""
        # Expansion state never survives a document switch
        self.expansion = ExpansionState()
        self.model.set_document(source)

    @property
    def source(self) -> Optional[OutlineSource]:
        return self.model.source

    # ---------------------------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------------------------

    def is_empty(self) -> bool:
        return self.model.is_empty()

    def find_node(self, key: NodeKey) -> Optional[OutlineNode]:
        return self.model.find(key)

    def node_state(self, key: NodeKey) -> Optional[NodeState]:
        """Return the derived state of the node at *key*, or None if unknown."""
        node = self.model.find(key)
        if node is None:
            return None
        return self._state_of(node)

    def visible_rows(self) -> List[OutlineRow]:
        """Return the rows to display, depth-first in document order.

        A node's children are listed only when it has children and its key
        is expanded; this applies at every level.
        """
        rows: List[OutlineRow] = []
        stack = [(node, 0) for node in reversed(self.model.roots)]
        while stack:
            node, depth = stack.pop()
            state = self._state_of(node)
            rows.append(OutlineRow(node=node, depth=depth, state=state))
            if state == "expanded":
                stack.extend((child, depth + 1) for child in reversed(node.children))
        return rows

    # ---------------------------------------------------------------------------------
    # Interaction
    # ---------------------------------------------------------------------------------

    def toggle(self, key: NodeKey) -> bool:
        """Toggle the node at *key*. Returns True if the expansion state changed.

        Leaves and unknown keys are ignored.
        """
        node = self.model.find(key)
        if node is None or not node.has_children:
            return False
        self.expansion.toggle(key)
        self._notify()
        return True

    def activate(self, key: NodeKey) -> None:
        """Handle a click on the node at *key*.

        Toggles the node when it has children and resolves its destination
        when it has one. Both may happen for the same click.
        """
        node = self.model.find(key)
        if node is None:
            logger.debug("Activation of unknown outline key %s ignored", key)
            return
        if node.has_children:
            self.toggle(key)
        if node.has_destination:
            self._resolve(node)

    def expand_all(self) -> None:
        for node in iter_nodes(self.model.roots):
            if node.has_children:
                self.expansion.expand(node.key)
        self._notify()

    def collapse_all(self) -> None:
        self.expansion.clear()
        self._notify()

    # ---------------------------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------------------------

    def _state_of(self, node: OutlineNode) -> NodeState:
        if not node.has_children:
            return "leaf"
        return "expanded" if self.expansion.is_expanded(node.key) else "collapsed"

    def _resolve(self, node: OutlineNode) -> None:
        source = self.model.source
        if source is None:
            return
        generation = self.model.generation
        destination: Any = node.destination
        self._runner.submit(
            lambda: source.resolve_destination(destination),
            lambda resolved: self._on_resolved(generation, node, resolved),
            lambda exc: self._on_resolve_failed(node, exc),
        )

    def _on_resolved(self, generation: int, node: OutlineNode, resolved: ResolvedDestination) -> None:
        if generation != self.model.generation:
            logger.debug("Dropping destination of '%s' resolved for a previous document", node.title)
            return
        logger.info("Navigate to: '%s' -> page %d", node.title, resolved.page_number)
        if self.on_navigate is None:
            return
        try:
            self.on_navigate(resolved)
        except Exception:
            logger.exception("Navigation callback failed for '%s'", node.title)

    def _on_resolve_failed(self, node: OutlineNode, exc: BaseException) -> None:
        if isinstance(exc, DestinationResolutionError):
            logger.error("Could not resolve destination of '%s': %s", node.title, exc)
        else:
            logger.error("Unexpected error resolving destination of '%s'", node.title, exc_info=exc)

    def _notify(self) -> None:
        if self.on_changed is None:
            return
        try:
            self.on_changed()
        except Exception:
            logger.exception("Outline view refresh failed")
