from __future__ import annotations

import logging
import sys
from typing import Optional


LIBRARY_LOGGER = "changetracker"

# CLI -v count to level; library warnings (direct cached_value writes,
# wait_for_all timeouts) stay visible with no flags.
_LEVELS_BY_VERBOSE = {
    0: logging.WARNING,
    1: logging.INFO,   # replay progress, late wait_for_all completions
    2: logging.DEBUG,  # per-cycle listener counts
}


def setup_logging(verbose_count: int = 0, logger_name: Optional[str] = None) -> logging.Logger:
    """
    Attach a stderr handler to the ``changetracker`` logger for CLI runs.

    ``verbose_count`` is the number of -v flags; anything above 2 is DEBUG.
    Pass ``logger_name`` to configure a different logger ("" for root).
    Calling it again only adjusts the level.
    """
    level = _LEVELS_BY_VERBOSE.get(verbose_count, logging.DEBUG)
    name = LIBRARY_LOGGER if logger_name is None else logger_name
    logger = logging.getLogger(name)
    logger.setLevel(level)

    already_configured = any(getattr(h, "_changetracker_handler", False) for h in logger.handlers)
    if not already_configured:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler._changetracker_handler = True  # type: ignore[attr-defined]
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    return logger
