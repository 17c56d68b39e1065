# -*- coding: utf-8 -*-
"""Tk-based GUI front-end for Outline Navigator.

Exposes the :class:`OutlineNavigatorApp` widget, which is instantiated by ``run.py``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Union

import tkinter as tk
from tkinter import ttk, filedialog

from outline_navigator.config import ConfigManager
from outline_navigator.core.models import ResolvedDestination
from outline_navigator.core.services.task_runner import ThreadedTaskRunner
from outline_navigator.core.sources import OutlineSource, PdfOutlineSource
from outline_navigator.ui.controllers import OutlineController
from outline_navigator.ui.widgets import OutlineTreeWidget

logger = logging.getLogger(__name__)

__all__ = ["OutlineNavigatorApp"]


class OutlineNavigatorApp:
    """Main application widget: file picker, outline panel and status line.

    Parameters
    ----------
    root : tk.Tk
        Toplevel window hosting the application.
    source_factory : Callable, optional
        Builds an :class:`OutlineSource` for a chosen path. Defaults to
        :class:`PdfOutlineSource`.
    on_navigate : Callable[[ResolvedDestination], None], optional
        Extra hook receiving every resolved destination, e.g. to drive a
        page viewer.
    """

    def __init__(
        self,
        root: tk.Tk,
        source_factory: Callable[[Path], OutlineSource] = PdfOutlineSource,
        on_navigate: Optional[Callable[[ResolvedDestination], None]] = None,
    ) -> None:
        self.root = root
        self._source_factory = source_factory
        self._external_navigate = on_navigate
        self._source: Optional[OutlineSource] = None

        view_cfg = ConfigManager().get_outline_view()
        placeholder = view_cfg.get("placeholder") or "No outline available"

        self._runner = ThreadedTaskRunner(dispatch=self._dispatch)
        self.controller = OutlineController(
            self._runner,
            on_changed=self._refresh,
            on_navigate=self._on_navigate,
            placeholder_text=placeholder,
        )

        self._build_ui(view_cfg, placeholder)
        self.root.protocol("WM_DELETE_WINDOW", self.close)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_ui(self, view_cfg: dict, placeholder: str) -> None:
        frame = ttk.Frame(self.root, padding=8)
        frame.pack(fill="both", expand=True)

        toolbar = ttk.Frame(frame)
        toolbar.pack(fill="x", pady=(0, 6))
        ttk.Button(toolbar, text="Open PDF…", command=self.choose_document).pack(side="left")
        ttk.Button(toolbar, text="Expand all", command=self.controller.expand_all).pack(side="left", padx=(6, 0))
        ttk.Button(toolbar, text="Collapse all", command=self.controller.collapse_all).pack(side="left", padx=(6, 0))

        self.tree_widget = OutlineTreeWidget(
            frame,
            on_item_activated=self.controller.activate,
            on_expand_all=self.controller.expand_all,
            on_collapse_all=self.controller.collapse_all,
            indent=view_cfg.get("indent", 4),
            glyphs=view_cfg.get("glyphs"),
            placeholder=placeholder,
        )
        self.tree_widget.pack(fill="both", expand=True)

        self._status_var = tk.StringVar(value="")
        ttk.Label(frame, textvariable=self._status_var, anchor="w").pack(fill="x", pady=(6, 0))

    # ------------------------------------------------------------------
    # Document handling
    # ------------------------------------------------------------------
    def choose_document(self) -> None:
        path = filedialog.askopenfilename(
            parent=self.root,
            title="Open document",
            filetypes=[("PDF documents", "*.pdf"), ("All files", "*.*")],
        )
        if path:
            self.open_document(path)

    def open_document(self, path: Union[str, Path, None]) -> None:
        """Make *path* the active document; ``None`` closes the current one."""
        previous = self._source
        self._source = self._source_factory(Path(path)) if path else None
        self.tree_widget.forget_activation()
        self.controller.set_document(self._source)
        if previous is not None:
            self._close_in_background(previous)
        if self._source is not None:
            logger.info("Opened document %s", path)
            self.root.title(f"{self._source.display_name} - Outline Navigator")
            self._status_var.set(f"Loading outline of {self._source.display_name}…")
        else:
            self._status_var.set("")

    def close(self) -> None:
        if self._source is not None:
            self._close_in_background(self._source)
            self._source = None
        self.root.destroy()

    def _close_in_background(self, source: OutlineSource) -> None:
        # Closing waits for any in-flight call on the document
        self._runner.submit(
            source.close,
            lambda _r: None,
            lambda exc: logger.warning("Error closing %s: %s", source.display_name, exc),
        )

    def _dispatch(self, callback: Callable[[], None]) -> None:
        try:
            self.root.after(0, callback)
        except tk.TclError:
            # Window already destroyed
            logger.debug("Dropping background result after shutdown")

    # ------------------------------------------------------------------
    # Controller callbacks
    # ------------------------------------------------------------------
    def _refresh(self) -> None:
        self.tree_widget.populate(self.controller.visible_rows(), empty_text=self.controller.placeholder_text)
        model = self.controller.model
        if self._source is not None and not model.is_loading:
            if model.last_error is not None:
                self._status_var.set("Could not read the document outline")
            elif self._status_var.get().startswith("Loading"):
                self._status_var.set(self._source.display_name)

    def _on_navigate(self, destination: ResolvedDestination) -> None:
        self._status_var.set(f"Page {destination.page_number}")
        if self._external_navigate is not None:
            self._external_navigate(destination)
