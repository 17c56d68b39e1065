from __future__ import annotations

"""Services coordinating background work against outline sources."""

from .task_runner import TaskRunner, ThreadedTaskRunner, InlineTaskRunner  # noqa: F401
from .outline_tree_model import OutlineTreeModel  # noqa: F401

__all__: list[str] = [
    "TaskRunner",
    "ThreadedTaskRunner",
    "InlineTaskRunner",
    "OutlineTreeModel",
]
