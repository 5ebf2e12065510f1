import warnings

_issued = set()


def warn_once(key: str, message: str, stacklevel: int = 3) -> None:
    """Emit a ``DeprecationWarning`` once per unique key.

    The default ``stacklevel`` points at the caller of the deprecated alias,
    not at the alias itself.
    """
    if key not in _issued:
        warnings.warn(message, DeprecationWarning, stacklevel=stacklevel)
        _issued.add(key)


def reset() -> None:
    """Forget which keys have already warned."""
    _issued.clear()
