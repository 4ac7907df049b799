"""
Logging setup tests: level parsing, single console handler, quiet client loggers.
"""

import logging

import pytest

from backend.logging_setup import CLIENT_LOGGERS, parse_level, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_parse_level(self):
        assert parse_level("debug") == logging.DEBUG
        assert parse_level(None) == logging.INFO
        with pytest.raises(ValueError):
            parse_level("chatty")

    def test_repeated_calls_keep_one_handler(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        named = [h for h in logging.getLogger().handlers if h.get_name() == "marketplace-console"]
        assert len(named) == 1
        assert named[0].level == logging.DEBUG
        assert logging.getLogger("ranking").level == logging.DEBUG

    def test_client_loggers_held_at_warning(self):
        setup_logging("DEBUG")
        for name in CLIENT_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
        setup_logging("ERROR")
        assert logging.getLogger("httpx").level == logging.ERROR
