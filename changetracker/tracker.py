# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from . import deprecations
from .config import CALLBACK_ERRORS_RAISE, normalize_callback_errors

log = logging.getLogger("changetracker")

V = TypeVar("V")
Listener = Callable[[Any], Any]


class _Unset:
    """Marker for "no value stored yet". ``None`` is a real value."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def _same_listener(a: Listener, b: Listener) -> bool:
    if a is b:
        return True
    # obj.method builds a fresh bound method on every access. Method equality
    # compares __self__ by identity, for builtin methods like list.append too.
    if getattr(a, "__self__", None) is not None and getattr(b, "__self__", None) is not None:
        return a == b
    return False


class ChangeTracker(Generic[V]):
    """
    Keeps track of a single value's initialisation and changes.

    Three kinds of subscribers are supported:
      get_once          fires once, with the first value (immediately if already set)
      get_every_change  fires for the current value (if set) and every later set_value
      get_next          fires once, for the next set_value only

    Do not assign the tracked value directly; use set_value() so listeners
    stay in sync with the stored value.
    """

    def __init__(
        self,
        initial_value: Any = UNSET,
        *,
        force_set_flag: bool = False,
        callback_errors: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        self._cached: Any = initial_value
        # force_set_flag makes get_once()/get_every_change() fire right away
        # even when no initial value was given (they receive UNSET).
        self._initialized: bool = bool(force_set_flag) or initial_value is not UNSET

        self._once_listeners: List[Listener] = []
        self._every_listeners: List[Listener] = []
        self._next_listeners: List[Listener] = []

        self._callback_errors: str = normalize_callback_errors(callback_errors)
        self.name = name

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name else ""
        return f"<ChangeTracker{label} initialized={self._initialized} value={self._cached!r}>"

    # -----------------------------
    # Reading
    # -----------------------------
    @property
    def cached_value(self) -> Any:
        """The value exactly as stored. May be UNSET if nothing was set yet."""
        return self._cached

    @cached_value.setter
    def cached_value(self, value: Any) -> None:
        log.warning("ChangeTracker.cached_value should not be set directly. Use set_value() instead.")
        self.set_value(value)

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def callback_errors(self) -> str:
        return self._callback_errors

    def read_cached(self) -> Any:
        return self._cached

    def listener_counts(self) -> Dict[str, int]:
        return {
            "once": len(self._once_listeners),
            "every": len(self._every_listeners),
            "next": len(self._next_listeners),
        }

    # -----------------------------
    # Subscribing
    # -----------------------------
    def get_once(self, callback: Listener) -> None:
        """Be notified the first time a value is set, or now if one already is."""
        if self._initialized:
            self._dispatch([callback], self._cached)
        else:
            self._once_listeners.append(callback)

    def get_every_change(self, callback: Listener) -> None:
        """Be notified of every change, and now if a value is already set."""
        self._every_listeners.append(callback)
        if self._initialized:
            self._dispatch([callback], self._cached)

    def get_next(self, callback: Listener) -> None:
        """Be notified the next time the value is set. Ignores the current value."""
        self._next_listeners.append(callback)

    # -----------------------------
    # Writing
    # -----------------------------
    def set_value(self, value: Any) -> None:
        """
        Store ``value`` and notify listeners in the order once, next, every.

        The full set of callbacks is collected before any of them runs, so a
        callback that registers, removes, or sets again on this tracker only
        affects later cycles.
        """
        was_initialized = self._initialized
        self._cached = value

        callbacks: List[Listener] = []
        if not was_initialized:
            callbacks.extend(self._once_listeners)
            self._once_listeners = []

        callbacks.extend(self._next_listeners)
        self._next_listeners = []

        callbacks.extend(self._every_listeners)

        self._initialized = True

        log.debug("%r: notifying %d listener(s)", self, len(callbacks))
        self._dispatch(callbacks, value)

    def set_silent(self, value: Any) -> None:
        """
        Store ``value`` without notifying anyone.

        Listeners will not learn about this change, which easily leaves them
        with stale state. Does not mark the tracker as initialized.
        """
        self._cached = value

    # -----------------------------
    # Unsubscribing
    # -----------------------------
    def remove_once_listener(self, callback: Listener) -> bool:
        """Remove a listener added with get_once(). Returns False if not found."""
        return self._remove(self._once_listeners, callback)

    def remove_every_listener(self, callback: Listener) -> bool:
        """Remove a listener added with get_every_change(). Returns False if not found."""
        return self._remove(self._every_listeners, callback)

    def remove_next_listener(self, callback: Listener) -> bool:
        """Remove a listener added with get_next(). Returns False if not found."""
        return self._remove(self._next_listeners, callback)

    def remove_get_once_listener(self, callback: Listener) -> bool:
        deprecations.warn_once(
            "remove_get_once_listener",
            "ChangeTracker.remove_get_once_listener() is deprecated; use remove_once_listener()",
        )
        return self.remove_once_listener(callback)

    def remove_get_every_change_listener(self, callback: Listener) -> bool:
        deprecations.warn_once(
            "remove_get_every_change_listener",
            "ChangeTracker.remove_get_every_change_listener() is deprecated; use remove_every_listener()",
        )
        return self.remove_every_listener(callback)

    def remove_get_next_listener(self, callback: Listener) -> bool:
        deprecations.warn_once(
            "remove_get_next_listener",
            "ChangeTracker.remove_get_next_listener() is deprecated; use remove_next_listener()",
        )
        return self.remove_next_listener(callback)

    @staticmethod
    def wait_for_all(
        trackers: Sequence["ChangeTracker"],
        timeout: Optional[float] = None,
        *,
        scheduler: Any = None,
        callback_errors: Optional[str] = "log",
    ) -> "ChangeTracker":
        """See changetracker.wait.wait_for_all."""
        from .wait import wait_for_all

        return wait_for_all(trackers, timeout, scheduler=scheduler, callback_errors=callback_errors)

    # -----------------------------
    # Internals
    # -----------------------------
    @staticmethod
    def _remove(listeners: List[Listener], callback: Listener) -> bool:
        for index, existing in enumerate(listeners):
            if _same_listener(existing, callback):
                del listeners[index]
                return True
        return False

    def _dispatch(self, callbacks: Sequence[Listener], value: Any) -> None:
        # One failing listener must not starve the rest of the cycle.
        first_error: Optional[BaseException] = None
        for callback in callbacks:
            try:
                callback(value)
            except Exception as exc:
                log.exception("%r: listener %r raised", self, callback)
                if first_error is None:
                    first_error = exc

        if first_error is not None and self._callback_errors == CALLBACK_ERRORS_RAISE:
            raise first_error
