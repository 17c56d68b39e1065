from __future__ import annotations

"""Treeview-based presentation of outline rows."""

import tkinter as tk
from tkinter import ttk
from tkinter import font as tkfont
from typing import Callable, Dict, List, Optional

from outline_navigator.core.models import Emphasis, NodeKey, OutlineRow

DEFAULT_GLYPHS = {"expanded": "▼", "collapsed": "▶"}


class OutlineTreeWidget(ttk.Frame):
    """Tkinter widget presenting outline rows as an indented, clickable list.

    This widget focuses solely on presentation: it draws the rows it is
    given and reports activations. Which rows are visible, and what a click
    does, is decided by the controller.

    Callbacks:
        - on_item_activated: Invoked on click, <Return> or <space>. Receives
          the key of the activated row.
        - on_expand_all / on_collapse_all: Invoked on <plus> / <minus>.

    Notes
    -----
    - Rows are inserted flat; nesting is shown by indenting the label. The
      expand/collapse glyph is part of the label so the Treeview never
      manages open/closed state on its own.
    - UI-only: no service or controller imports. No logging or I/O.
    """

    def __init__(
        self,
        master: "tk.Widget",
        *,
        on_item_activated: Optional[Callable[[NodeKey], None]] = None,
        on_expand_all: Optional[Callable[[], None]] = None,
        on_collapse_all: Optional[Callable[[], None]] = None,
        indent: int = 4,
        glyphs: Optional[Dict[str, str]] = None,
        placeholder: str = "No outline available",
    ) -> None:
        super().__init__(master)
        self._on_item_activated = on_item_activated
        self._on_expand_all = on_expand_all
        self._on_collapse_all = on_collapse_all
        self._indent = max(0, int(indent))
        self._glyphs = dict(DEFAULT_GLYPHS)
        self._glyphs.update(glyphs or {})

        self._tree = ttk.Treeview(self, show="tree", selectmode="browse", height=12)
        self._vsb = ttk.Scrollbar(self, orient="vertical", command=self._tree.yview)
        self._tree.configure(yscrollcommand=self._vsb.set)
        self._placeholder = ttk.Label(self, text=placeholder, anchor="center")

        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        # Internal mappings: tree item id <-> node key
        self._id_to_key: Dict[str, NodeKey] = {}
        self._key_to_id: Dict[NodeKey, str] = {}
        # Emphasis tags already configured on the Treeview
        self._emphasis_tags: Dict[Emphasis, str] = {}
        self._fonts: List[tkfont.Font] = []
        self._last_activated: Optional[NodeKey] = None

        self._tree.bind("<ButtonRelease-1>", self._on_click_event, add="+")
        self._tree.bind("<Return>", self._on_key_activate, add="+")
        self._tree.bind("<space>", self._on_key_activate, add="+")
        self._tree.bind("<plus>", lambda _e: self._fire(self._on_expand_all), add="+")
        self._tree.bind("<KP_Add>", lambda _e: self._fire(self._on_expand_all), add="+")
        self._tree.bind("<minus>", lambda _e: self._fire(self._on_collapse_all), add="+")
        self._tree.bind("<KP_Subtract>", lambda _e: self._fire(self._on_collapse_all), add="+")

        self._show_placeholder(True)

    # Public API

    def populate(self, rows: List[OutlineRow], empty_text: Optional[str] = None) -> None:
        """Rebuild the list from *rows*; an empty list shows the placeholder.

        Focus and selection return to the last activated row when it is
        still visible.
        """
        self.clear()
        if empty_text is not None:
            self._placeholder.configure(text=empty_text)
        if not rows:
            self._show_placeholder(True)
            return
        self._show_placeholder(False)

        for row in rows:
            item_id = self._tree.insert(
                "", "end", text=self.format_label(row), tags=self._tags_for(row.node.emphasis)
            )
            self._id_to_key[item_id] = row.key
            self._key_to_id[row.key] = item_id

        if self._last_activated is not None:
            self.focus_key(self._last_activated)

    def clear(self) -> None:
        """Remove all rows and mappings."""
        try:
            self._tree.delete(*self._tree.get_children(""))
        except tk.TclError:
            pass
        self._id_to_key.clear()
        self._key_to_id.clear()

    def format_label(self, row: OutlineRow) -> str:
        """Return the display text for *row*: indentation, glyph, title."""
        glyph = self._glyphs.get(row.state, "")
        prefix = " " * (row.depth * self._indent)
        if glyph:
            return f"{prefix}{glyph} {row.node.title}"
        # Leaves get no glyph; pad so titles line up with their siblings
        return f"{prefix}  {row.node.title}"

    def find_item_by_key(self, key: NodeKey) -> Optional[str]:
        return self._key_to_id.get(key)

    def get_row_keys(self) -> List[NodeKey]:
        """Return the keys of the displayed rows, top to bottom."""
        return [self._id_to_key[iid] for iid in self._tree.get_children("") if iid in self._id_to_key]

    def get_row_text(self, key: NodeKey) -> Optional[str]:
        item_id = self._key_to_id.get(key)
        if item_id is None:
            return None
        return self._tree.item(item_id, "text")

    def is_placeholder_visible(self) -> bool:
        return bool(self._placeholder.grid_info())

    def forget_activation(self) -> None:
        """Stop restoring focus to the last activated row (e.g. after a document switch)."""
        self._last_activated = None

    def focus_key(self, key: NodeKey) -> None:
        """Select and focus the row for *key* when it exists."""
        item_id = self._key_to_id.get(key)
        if not item_id:
            return
        try:
            self._tree.selection_set((item_id,))
            self._tree.focus(item_id)
            self._tree.see(item_id)
        except tk.TclError:
            pass

    # Internals

    def _show_placeholder(self, show: bool) -> None:
        if show:
            self._tree.grid_remove()
            self._vsb.grid_remove()
            self._placeholder.grid(row=0, column=0, columnspan=2, sticky="nsew")
        else:
            self._placeholder.grid_remove()
            self._tree.grid(row=0, column=0, sticky="nsew")
            self._vsb.grid(row=0, column=1, sticky="ns")

    def _tags_for(self, emphasis: Emphasis) -> tuple:
        if emphasis.is_plain:
            return ()
        tag = self._emphasis_tags.get(emphasis)
        if tag is None:
            tag = f"emphasis-{len(self._emphasis_tags)}"
            options = {}
            if emphasis.bold or emphasis.italic:
                try:
                    font = tkfont.Font(self, font=tkfont.nametofont("TkDefaultFont"))
                    font.configure(
                        weight="bold" if emphasis.bold else "normal",
                        slant="italic" if emphasis.italic else "roman",
                    )
                    self._fonts.append(font)
                    options["font"] = font
                except tk.TclError:
                    pass
            color = emphasis.hex_color()
            if color:
                options["foreground"] = color
            self._tree.tag_configure(tag, **options)
            self._emphasis_tags[emphasis] = tag
        return (tag,)

    def _activate_item(self, item_id: str) -> None:
        key = self._id_to_key.get(item_id)
        if key is None:
            return
        self._last_activated = key
        if callable(self._on_item_activated):
            self._on_item_activated(key)

    def _on_click_event(self, event: tk.Event) -> None:
        item_id = self._tree.identify_row(event.y)
        if item_id:
            self._activate_item(item_id)

    def _on_key_activate(self, _event: tk.Event) -> str:
        item_id = self._tree.focus()
        if item_id:
            self._activate_item(item_id)
        return "break"

    @staticmethod
    def _fire(callback: Optional[Callable[[], None]]) -> None:
        if callable(callback):
            callback()
