"""Runtime configuration defaults and flag normalization helpers."""

from __future__ import annotations

import os
from typing import Any, Optional, Tuple

CALLBACK_ERRORS_ENV = "CHANGETRACKER_CALLBACK_ERRORS"

CALLBACK_ERRORS_RAISE = "raise"
CALLBACK_ERRORS_LOG = "log"
CALLBACK_ERROR_POLICIES = frozenset({CALLBACK_ERRORS_RAISE, CALLBACK_ERRORS_LOG})
CALLBACK_ERRORS_DEFAULT: str = CALLBACK_ERRORS_RAISE

FORCE_SET_FLAG_DEFAULT: bool = False

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}
_DEFAULT_STRINGS = {"default", "auto", "inherit"}


def coerce_flag(value: Any, *, default: Optional[bool] = None) -> Tuple[Optional[bool], bool]:
    """Coerce a loosely-typed flag value into ``True``/``False``/``None``.

    ``default`` is returned when ``value`` is ``None`` or explicitly requests
    inheritance (``"default"``/``"auto"``). The boolean in the return tuple
    indicates whether the coercion succeeded.
    """

    if isinstance(value, bool):
        return value, True
    if value is None:
        return default, True
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True, True
        if text in _FALSE_STRINGS:
            return False, True
        if default is not None and text in _DEFAULT_STRINGS:
            return default, True
        return None, False
    if isinstance(value, (int, float)):
        if value == 1:
            return True, True
        if value == 0:
            return False, True
        return None, False
    return None, False


def normalize_force_set_flag(value: Any) -> bool:
    """Resolve a scenario/CLI ``force_set_flag`` value, falling back to the default."""

    normalized, ok = coerce_flag(value, default=FORCE_SET_FLAG_DEFAULT)
    if ok and normalized is not None:
        return bool(normalized)
    return FORCE_SET_FLAG_DEFAULT


def normalize_callback_errors(value: Any) -> str:
    """Validate a callback error policy name.

    ``None`` and the inherit spellings (``"default"``/``"auto"``) resolve to the
    environment override or ``CALLBACK_ERRORS_DEFAULT``.
    """

    if value is None:
        return default_callback_errors()
    text = str(value).strip().lower()
    if text in _DEFAULT_STRINGS:
        return default_callback_errors()
    if text not in CALLBACK_ERROR_POLICIES:
        choices = ", ".join(sorted(CALLBACK_ERROR_POLICIES))
        raise ValueError(f"unknown callback error policy {value!r}; expected one of: {choices}")
    return text


def default_callback_errors() -> str:
    """Return the process-wide policy, honoring ``CHANGETRACKER_CALLBACK_ERRORS``."""

    raw = os.environ.get(CALLBACK_ERRORS_ENV, "")
    text = raw.strip().lower()
    if not text or text in _DEFAULT_STRINGS:
        return CALLBACK_ERRORS_DEFAULT
    if text not in CALLBACK_ERROR_POLICIES:
        choices = ", ".join(sorted(CALLBACK_ERROR_POLICIES))
        raise ValueError(f"{CALLBACK_ERRORS_ENV}={raw!r} is not one of: {choices}")
    return text
