# changetracker/__init__.py
"""
ChangeTracker: track a single value's initialisation and changes, with
once / every-change / next-only listeners and a wait_for_all aggregator.
"""

import logging

from .tracker import UNSET, ChangeTracker
from .wait import WaitResult, wait_for_all

__version__ = "1.0.0"

logging.getLogger("changetracker").addHandler(logging.NullHandler())

__all__ = [
    "ChangeTracker",
    "UNSET",
    "WaitResult",
    "wait_for_all",
    "__version__",
]
