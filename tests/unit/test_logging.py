"""
Logging system tests
"""

import logging
from logging.handlers import RotatingFileHandler

from pkttrim.common.enums import LogLevel
from pkttrim.infrastructure.logging import PktTrimLogger, get_logger, set_log_level


class TestPktTrimLogger:
    def test_singleton(self):
        assert PktTrimLogger() is PktTrimLogger()

    def test_named_loggers_live_under_pkttrim(self):
        logger = get_logger("trim.driver")

        assert logger.name == "pkttrim.trim.driver"
        assert get_logger("trim.driver") is logger

    def test_set_level_only_touches_console(self):
        root = logging.getLogger("pkttrim")
        console = [
            h for h in root.handlers if isinstance(h, logging.StreamHandler) and not isinstance(h, RotatingFileHandler)
        ]
        previous = [h.level for h in console]

        try:
            set_log_level(LogLevel.WARNING)
            assert all(h.level == logging.WARNING for h in console)
            for handler in root.handlers:
                if isinstance(handler, RotatingFileHandler):
                    assert handler.level == logging.DEBUG
        finally:
            for handler, level in zip(console, previous):
                handler.setLevel(level)
