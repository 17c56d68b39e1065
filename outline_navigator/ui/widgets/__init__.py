"""Reusable Tk widgets for Outline Navigator."""

from .outline_tree import OutlineTreeWidget  # noqa: F401

__all__: list[str] = ["OutlineTreeWidget"]
