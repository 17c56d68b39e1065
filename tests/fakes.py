"""Fake collaborators shared by the test-suite."""

from typing import Any, Dict, List, Optional

from outline_navigator.core.exceptions import DestinationResolutionError
from outline_navigator.core.models import OutlineNode, ResolvedDestination
from outline_navigator.core.services.task_runner import TaskRunner
from outline_navigator.core.sources.interfaces import OutlineSource


class ManualTaskRunner(TaskRunner):
    """Queues submitted work until the test decides to run it.

    Lets tests interleave completions with document switches to reproduce
    races deterministically.
    """

    def __init__(self) -> None:
        self.pending: List[tuple] = []

    def submit(self, work, on_success, on_error) -> None:
        self.pending.append((work, on_success, on_error))

    def run(self, index: int = 0) -> None:
        work, on_success, on_error = self.pending.pop(index)
        try:
            result = work()
        except Exception as exc:
            on_error(exc)
            return
        on_success(result)

    def run_all(self) -> None:
        while self.pending:
            self.run(0)


class FakeSource(OutlineSource):
    """In-memory source returning a fixed outline.

    ``outline`` may be a list, ``None`` or an exception instance to raise.
    ``pages`` maps destinations to page indexes; anything else fails to resolve.
    """

    def __init__(self, outline: Any = None, pages: Optional[Dict[Any, int]] = None, name: str = "fake.pdf") -> None:
        self._outline = outline
        self.pages = pages or {}
        self.name = name
        self.fetch_calls = 0
        self.resolve_calls: List[Any] = []
        self.closed = False

    @property
    def display_name(self) -> str:
        return self.name

    def fetch_outline(self) -> Optional[List[OutlineNode]]:
        self.fetch_calls += 1
        if isinstance(self._outline, BaseException):
            raise self._outline
        return self._outline

    def resolve_destination(self, destination: Any) -> ResolvedDestination:
        self.resolve_calls.append(destination)
        if destination not in self.pages:
            raise DestinationResolutionError("unknown destination", destination, self.name)
        return ResolvedDestination(page_index=self.pages[destination], raw=destination)

    def close(self) -> None:
        self.closed = True


def make_outline(entries: List[Any]) -> List[OutlineNode]:
    """Build nodes from ``(title, children)`` / ``(title, children, dest)`` tuples or bare titles."""
    nodes = []
    for item in entries:
        if isinstance(item, str):
            nodes.append(OutlineNode(title=item))
            continue
        title, children = item[0], item[1]
        dest = item[2] if len(item) > 2 else None
        nodes.append(OutlineNode(title=title, destination=dest, children=make_outline(children)))
    return nodes
