"""
Aggregate several trackers into one.

wait_for_all() returns a tracker that is set once every input tracker has
produced its first value. With a timeout, the returned tracker is set early
with an error message and partial results; if the inputs complete later it is
set again, this time with the full results and no error.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from .schedulers import default_scheduler
from .tracker import UNSET, ChangeTracker

log = logging.getLogger("changetracker.wait")


@dataclass(frozen=True)
class WaitResult:
    error: Optional[str]
    results: List[Any] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class _Waiter:
    def __init__(self, total: int, timeout: Optional[float], output: ChangeTracker) -> None:
        self.results: List[Any] = [UNSET] * total
        self.resolved = 0
        self.done = False
        self.timed_out = False
        self.timeout = timeout
        self.output = output
        self.handle: Any = None
        # Guards bookkeeping only. Output listeners run after it is released,
        # since the timer thread and input setters may both get here.
        self.lock = threading.RLock()

    def resolve(self, index: int, value: Any) -> None:
        with self.lock:
            self.results[index] = value
            self.resolved += 1
            log.debug("wait_for_all: %d/%d resolved", self.resolved, len(self.results))
            if self.resolved < len(self.results) or self.done:
                return
            self.done = True
            handle, self.handle = self.handle, None
            record = WaitResult(error=None, results=list(self.results))
            late = self.timed_out

        if handle is not None:
            handle.cancel()
        if late:
            log.info("wait_for_all: completed after timing out; emitting full results")
        self.output.set_value(record)

    def expire(self) -> None:
        with self.lock:
            self.handle = None
            if self.done or self.timed_out:
                return
            self.timed_out = True
            message = (
                f"wait_for_all timed out after {self.timeout}s with "
                f"{self.resolved}/{len(self.results)} trackers resolved"
            )
            record = WaitResult(error=message, results=list(self.results))

        log.warning(message)
        # Completion may have raced in while the lock was released.
        if not self.done:
            self.output.set_value(record)


def wait_for_all(
    trackers: Iterable[ChangeTracker],
    timeout: Optional[float] = None,
    *,
    scheduler: Any = None,
    callback_errors: Optional[str] = "log",
) -> ChangeTracker:
    """
    Wait for every tracker in ``trackers`` to be set at least once.

    Returns a ChangeTracker whose value becomes a WaitResult with the first
    value of each input, in input order. ``timeout`` is in seconds; partial
    results keep UNSET in the slots that never resolved. ``scheduler`` must
    provide ``call_later(delay, fn)`` returning an object with ``cancel()``;
    the default runs a daemon threading.Timer.

    Listeners on the returned tracker may run on the timer thread or inside
    an input tracker's set_value, so by default their errors are logged
    rather than raised (``callback_errors="log"``). With ``"raise"`` the error
    also propagates into the input tracker, which reports it a second time.
    """
    inputs = list(trackers)
    output: ChangeTracker = ChangeTracker(name="wait_for_all", callback_errors=callback_errors)
    waiter = _Waiter(len(inputs), timeout, output)

    if not inputs:
        waiter.done = True
        output.set_value(WaitResult(error=None, results=[]))
        return output

    for index, tracker in enumerate(inputs):
        tracker.get_once(lambda value, i=index: waiter.resolve(i, value))

    if timeout is not None:
        with waiter.lock:
            if not waiter.done:
                waiter.handle = (scheduler or default_scheduler()).call_later(timeout, waiter.expire)

    return output
