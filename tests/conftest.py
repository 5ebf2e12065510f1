"""Pytest configuration for changetracker."""

from __future__ import annotations

import logging
import sys
import warnings
from pathlib import Path

import pytest


def _ensure_repo_on_path() -> None:
    """Make the repository importable without an editable install."""
    repo_root = Path(__file__).resolve().parent.parent
    if repo_root.exists():
        path_str = str(repo_root)
        if path_str not in sys.path:
            sys.path.insert(0, path_str)


_ensure_repo_on_path()
warnings.simplefilter("default", DeprecationWarning)


@pytest.fixture(autouse=True)
def _isolate_library_state(monkeypatch):
    from changetracker import deprecations
    from changetracker.config import CALLBACK_ERRORS_ENV

    monkeypatch.delenv(CALLBACK_ERRORS_ENV, raising=False)
    deprecations.reset()
    yield
    deprecations.reset()

    # CLI tests attach a stderr handler bound to pytest's capture stream.
    logger = logging.getLogger("changetracker")
    for handler in list(logger.handlers):
        if getattr(handler, "_changetracker_handler", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class Recorder:
    """Callable listener that remembers every value it receives."""

    def __init__(self, name: str = "", log=None) -> None:
        self.name = name
        self.values = []
        self._log = log

    def __call__(self, value) -> None:
        self.values.append(value)
        if self._log is not None:
            self._log.append((self.name, value))


@pytest.fixture
def calls():
    """Shared invocation log; build listeners with ``make``."""
    log = []

    def make(name: str) -> Recorder:
        return Recorder(name, log)

    make.log = log
    return make
