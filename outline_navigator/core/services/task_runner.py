from __future__ import annotations

"""Background execution helpers.

Source calls may block on disk I/O, so they run off the UI thread. Results
and failures are handed back through a *dispatch* callable that schedules
the continuation on the UI thread (for Tk: ``lambda fn: widget.after(0, fn)``).
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

__all__ = ["TaskRunner", "ThreadedTaskRunner", "InlineTaskRunner"]

Work = Callable[[], Any]
SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[BaseException], None]
Dispatch = Callable[[Callable[[], None]], None]


class TaskRunner(ABC):
    """Runs a unit of work and reports its outcome exactly once."""

    @abstractmethod
    def submit(self, work: Work, on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        """Run *work*; call *on_success* with its result or *on_error* with the exception."""


class ThreadedTaskRunner(TaskRunner):
    """Run work in daemon threads; deliver results via *dispatch*.

    Parameters
    ----------
    dispatch : Callable, optional
        Schedules a zero-argument callable on the consumer's thread. When
        omitted, callbacks run on the worker thread.
    name : str, optional
        Prefix for worker thread names.
    """

    def __init__(self, dispatch: Optional[Dispatch] = None, name: str = "outline-worker") -> None:
        self._dispatch = dispatch
        self._name = name
        self._counter = 0

    def submit(self, work: Work, on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        def _runner() -> None:
            try:
                result = work()
            except Exception as exc:
                self._deliver(lambda e=exc: on_error(e))
            else:
                self._deliver(lambda r=result: on_success(r))

        self._counter += 1
        threading.Thread(target=_runner, name=f"{self._name}-{self._counter}", daemon=True).start()

    def _deliver(self, callback: Callable[[], None]) -> None:
        if self._dispatch is None:
            callback()
            return
        try:
            self._dispatch(callback)
        except RuntimeError as exc:
            # Tk raises RuntimeError once the main loop is gone
            logger.debug("Dropping background result, dispatcher unavailable: %s", exc)


class InlineTaskRunner(TaskRunner):
    """Synchronous runner for headless use and scripting."""

    def submit(self, work: Work, on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        try:
            result = work()
        except Exception as exc:
            on_error(exc)
            return
        on_success(result)
