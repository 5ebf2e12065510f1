"""Deferred-callback schedulers used by ``wait_for_all`` timeouts."""

from __future__ import annotations

import threading
from typing import Any, Callable


class ThreadingTimerScheduler:
    """Run callbacks after a delay on a daemon ``threading.Timer`` thread."""

    def call_later(self, delay: float, fn: Callable[[], Any]) -> threading.Timer:
        timer = threading.Timer(max(0.0, float(delay)), fn)
        timer.daemon = True
        timer.name = f"changetracker-timer:{delay}"
        timer.start()
        return timer


_default_scheduler = ThreadingTimerScheduler()


def default_scheduler() -> ThreadingTimerScheduler:
    return _default_scheduler
