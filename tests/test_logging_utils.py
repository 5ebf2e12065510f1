# tests/test_logging_utils.py
import logging

from changetracker.logging_utils import setup_logging


def _our_handlers(logger):
    return [h for h in logger.handlers if getattr(h, "_changetracker_handler", False)]


def test_verbosity_levels():
    assert setup_logging(0).level == logging.WARNING
    assert setup_logging(1).level == logging.INFO
    assert setup_logging(2).level == logging.DEBUG
    assert setup_logging(5).level == logging.DEBUG


def test_setup_is_idempotent():
    logger = setup_logging(1)
    setup_logging(1)
    assert logger.name == "changetracker"
    assert len(_our_handlers(logger)) == 1


def test_named_logger_gets_its_own_handler():
    logger = setup_logging(2, logger_name="changetracker.replay-test")
    try:
        assert logger.level == logging.DEBUG
        assert len(_our_handlers(logger)) == 1
        assert _our_handlers(logging.getLogger("changetracker")) == []
    finally:
        for handler in _our_handlers(logger):
            logger.removeHandler(handler)
