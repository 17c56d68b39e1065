# -*- coding: utf-8 -*-
"""
Entry point for launching the Outline Navigator application.
"""

import argparse
import logging
import tkinter as tk

import sv_ttk

from outline_navigator.app import OutlineNavigatorApp
from outline_navigator.config import ConfigManager
from outline_navigator.logging_config import setup_logging


def main(argv=None):
    """
    Configure logging, main window, and launch application.
    """
    parser = argparse.ArgumentParser(prog="outline-navigator", description="Browse the outline of a PDF document.")
    parser.add_argument("document", nargs="?", help="PDF document to open")
    args = parser.parse_args(argv)

    setup_logging()
    view_cfg = ConfigManager().get_outline_view()
    window_cfg = view_cfg.get("window") or {}

    root = tk.Tk()
    root.title(window_cfg.get("title", "Outline Navigator"))
    window_width = int(window_cfg.get("width", 360))
    window_height = int(window_cfg.get("height", 640))
    # Center the window on screen
    screen_width = root.winfo_screenwidth()
    screen_height = root.winfo_screenheight()
    pos_x = (screen_width // 2) - (window_width // 2)
    pos_y = (screen_height // 2) - (window_height // 2)
    root.geometry(f"{window_width}x{window_height}+{pos_x}+{pos_y}")

    sv_ttk.set_theme(view_cfg.get("theme", "light"))

    app = OutlineNavigatorApp(root)
    if args.document:
        app.open_document(args.document)

    root.mainloop()
    logging.info("===== Application terminated =====")
