# tests/test_deprecations.py
import warnings

from changetracker import ChangeTracker
from changetracker import deprecations


def test_warn_once_emits_single_warning():
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        deprecations.warn_once("test-key", "deprecated message")
        deprecations.warn_once("test-key", "deprecated message")

    dep_warnings = [w for w in caught if issubclass(w.category, DeprecationWarning)]
    assert len(dep_warnings) == 1


def test_legacy_removal_names_still_work_and_warn_once_each():
    tr = ChangeTracker()
    listener = lambda value: None  # noqa: E731

    pairs = [
        ("get_once", "remove_get_once_listener"),
        ("get_every_change", "remove_get_every_change_listener"),
        ("get_next", "remove_get_next_listener"),
    ]
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        for adder, remover in pairs:
            getattr(tr, adder)(listener)
            assert getattr(tr, remover)(listener) is True
            assert getattr(tr, remover)(listener) is False

    dep_warnings = [w for w in caught if issubclass(w.category, DeprecationWarning)]
    assert len(dep_warnings) == 3
    assert all(w.filename.endswith("test_deprecations.py") for w in dep_warnings)
