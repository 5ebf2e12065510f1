# tests/test_config.py
import pytest

from changetracker.config import (
    CALLBACK_ERRORS_DEFAULT,
    CALLBACK_ERRORS_ENV,
    coerce_flag,
    default_callback_errors,
    normalize_callback_errors,
    normalize_force_set_flag,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (True, (True, True)),
        ("yes", (True, True)),
        (" OFF ", (False, True)),
        (1, (True, True)),
        (0, (False, True)),
        (None, (None, True)),
        ("maybe", (None, False)),
        (2, (None, False)),
        ([], (None, False)),
    ],
)
def test_coerce_flag(raw, expected):
    assert coerce_flag(raw) == expected


def test_coerce_flag_inherit_strings_use_default():
    assert coerce_flag("auto", default=True) == (True, True)
    assert coerce_flag(None, default=False) == (False, True)


def test_normalize_force_set_flag():
    assert normalize_force_set_flag("true") is True
    assert normalize_force_set_flag(None) is False
    assert normalize_force_set_flag("garbage") is False


def test_callback_errors_default_and_env(monkeypatch):
    assert default_callback_errors() == CALLBACK_ERRORS_DEFAULT == "raise"
    assert normalize_callback_errors(None) == "raise"

    monkeypatch.setenv(CALLBACK_ERRORS_ENV, " LOG ")
    assert normalize_callback_errors(None) == "log"
    assert normalize_callback_errors("default") == "log"
    assert normalize_callback_errors("Raise") == "raise"


def test_callback_errors_bad_env_value(monkeypatch):
    monkeypatch.setenv(CALLBACK_ERRORS_ENV, "shrug")
    with pytest.raises(ValueError, match=CALLBACK_ERRORS_ENV):
        default_callback_errors()
