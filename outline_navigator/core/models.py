from __future__ import annotations

"""Shared data structures used across the Outline Navigator core.

This module is intentionally free of UI / I/O code so that the contained
objects can be reused in any context (unit-tests, CLI, GUI, etc.).
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Literal, Optional, Tuple

__all__ = [
    "NodeKey",
    "NodeState",
    "Emphasis",
    "OutlineNode",
    "OutlineRow",
    "ResolvedDestination",
    "assign_keys",
    "iter_nodes",
]

# Structural identity of a node: sibling indices from the root, e.g. (0, 2).
NodeKey = Tuple[int, ...]

NodeState = Literal["leaf", "collapsed", "expanded"]


def _clamp_component(value: Any) -> int:
    return max(0, min(255, int(value)))


@dataclass(frozen=True)
class Emphasis:
    """Presentational hints attached to an outline entry.

    Attributes
    ----------
    bold, italic
        Font style flags as declared by the document.
    color
        RGB triple with components in the 0-255 range, or ``None`` when the
        document does not colour the entry.
    """

    bold: bool = False
    italic: bool = False
    color: Optional[Tuple[int, int, int]] = None

    def __post_init__(self) -> None:
        if self.color is not None:
            r, g, b = self.color
            object.__setattr__(
                self, "color", (_clamp_component(r), _clamp_component(g), _clamp_component(b))
            )

    @property
    def is_plain(self) -> bool:
        return not (self.bold or self.italic or self.color)

    def hex_color(self) -> Optional[str]:
        """Return the colour as ``#rrggbb`` or ``None``."""
        if self.color is None:
            return None
        return "#%02x%02x%02x" % self.color


@dataclass
class OutlineNode:
    """One entry of a document outline.

    Attributes
    ----------
    title
        Display label. Not used as identity.
    destination
        Opaque, source-defined reference to a location in the document.
    children
        Sub-entries in document reading order.
    emphasis
        Optional style hints carried through unmodified.
    key
        Structural identity assigned by :func:`assign_keys` when the tree is
        loaded. Sources leave it empty.
    """

    title: str
    destination: Any = None
    children: List["OutlineNode"] = field(default_factory=list)
    emphasis: Emphasis = field(default_factory=Emphasis)
    key: NodeKey = ()

    def __post_init__(self) -> None:
        if not self.title:
            self.title = " "

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def has_destination(self) -> bool:
        return self.destination is not None


@dataclass(frozen=True)
class OutlineRow:
    """A visible row as computed by the controller."""

    node: OutlineNode
    depth: int
    state: NodeState

    @property
    def key(self) -> NodeKey:
        return self.node.key


@dataclass(frozen=True)
class ResolvedDestination:
    """Concrete navigation target returned by a data source.

    Attributes
    ----------
    page_index
        0-based page index.
    point
        Target coordinates on the page, when the destination specifies them.
    zoom
        Requested zoom factor, when specified.
    raw
        The opaque destination this was resolved from.
    """

    page_index: int
    point: Optional[Tuple[float, float]] = None
    zoom: Optional[float] = None
    raw: Any = None

    @property
    def page_number(self) -> int:
        return self.page_index + 1


def assign_keys(roots: List[OutlineNode]) -> List[OutlineNode]:
    """Stamp every node with its structural key, in place, and return *roots*.

    Uses an explicit stack so arbitrarily deep outlines are safe.
    """
    stack: List[Tuple[NodeKey, List[OutlineNode]]] = [((), roots)]
    while stack:
        prefix, siblings = stack.pop()
        for index, node in enumerate(siblings):
            node.key = prefix + (index,)
            if node.children:
                stack.append((node.key, node.children))
    return roots


def iter_nodes(roots: List[OutlineNode]) -> Iterator[OutlineNode]:
    """Yield every node depth-first, pre-order, in stored order."""
    stack: List[OutlineNode] = list(reversed(roots))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
