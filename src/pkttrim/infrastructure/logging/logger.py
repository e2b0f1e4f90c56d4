#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PktTrim logging system
Unified logger management for the whole application
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from ...common.constants import FileConstants
from ...common.enums import LogLevel


class PktTrimLogger:
    """Application-wide logger manager"""

    _instance: Optional["PktTrimLogger"] = None
    _initialized: bool = False

    def __new__(cls) -> "PktTrimLogger":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if PktTrimLogger._initialized:
            return

        self._loggers: Dict[str, logging.Logger] = {}
        self._setup_root_logger()
        PktTrimLogger._initialized = True

    def _setup_root_logger(self):
        root_logger = logging.getLogger("pkttrim")
        root_logger.setLevel(logging.DEBUG)

        # Avoid duplicate handlers
        if root_logger.handlers:
            return

        console_level = logging.INFO
        log_to_file = True
        max_size = FileConstants.LOG_MAX_SIZE
        backup_count = FileConstants.LOG_BACKUP_COUNT
        try:
            from ...config import get_app_config

            config = get_app_config()
            console_level = getattr(logging, config.logging.log_level.upper(), logging.INFO)
            log_to_file = config.logging.log_to_file
            max_size = config.logging.log_file_max_size
            backup_count = config.logging.log_backup_count
        except Exception:
            # Configuration problems must not prevent logging from starting
            pass

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        console_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

        if log_to_file:
            try:
                log_dir = Path.home() / FileConstants.CONFIG_DIR_NAME
                log_dir.mkdir(exist_ok=True)
                log_file = log_dir / FileConstants.LOG_FILE_NAME

                file_handler = RotatingFileHandler(
                    log_file,
                    maxBytes=max_size,
                    backupCount=backup_count,
                    encoding="utf-8",
                )
                file_handler.setLevel(logging.DEBUG)
                file_formatter = logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
                file_handler.setFormatter(file_formatter)
                root_logger.addHandler(file_handler)
            except OSError as e:
                # Console logging still works without the file handler
                root_logger.warning(f"Failed to setup file logging: {e}")

        self._loggers["root"] = root_logger

    def get_logger(self, name: str) -> logging.Logger:
        """Return the logger named ``pkttrim.<name>``"""
        if name not in self._loggers:
            logger = logging.getLogger(f"pkttrim.{name}")
            self._loggers[name] = logger
        return self._loggers[name]

    def set_level(self, level: LogLevel):
        """Set the console level of the ``pkttrim`` hierarchy"""
        root_logger = logging.getLogger("pkttrim")
        for handler in root_logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, RotatingFileHandler):
                handler.setLevel(level.value)

    def reconfigure_from_config(self):
        """Re-apply the console level from the current configuration"""
        try:
            from ...config import get_app_config

            level_str = get_app_config().logging.log_level.upper()
            self.set_level(LogLevel[level_str])
        except (KeyError, AttributeError) as e:
            logging.getLogger("pkttrim").warning(f"Failed to reconfigure logging system: {e}")

    def log_exception(self, logger_name: str, exc: Exception, context: Optional[Dict[str, Any]] = None):
        logger = self.get_logger(logger_name)
        context_str = ""
        if context:
            context_str = f" Context: {context}"
        logger.error(
            f"Exception occurred: {type(exc).__name__}: {exc}{context_str}",
            exc_info=True,
        )

    def log_performance(self, logger_name: str, operation: str, duration: float, **kwargs):
        logger = self.get_logger(logger_name)
        extra_info = " ".join(f"{k}={v}" for k, v in kwargs.items())
        logger.info(f"Performance: {operation} took {duration:.3f}s {extra_info}")


_logger_manager: Optional[PktTrimLogger] = None


def _manager() -> PktTrimLogger:
    global _logger_manager
    if _logger_manager is None:
        _logger_manager = PktTrimLogger()
    return _logger_manager


def get_logger(name: str = "root") -> logging.Logger:
    """Convenience accessor for ``pkttrim.<name>`` loggers"""
    return _manager().get_logger(name)


def set_log_level(level: LogLevel):
    _manager().set_level(level)


def reconfigure_logging():
    _manager().reconfigure_from_config()


def log_exception(exc: Exception, logger_name: str = "root", context: Optional[Dict[str, Any]] = None):
    """Log an exception with traceback and optional context"""
    _manager().log_exception(logger_name, exc, context)


def log_performance(operation: str, duration: float, logger_name: str = "performance", **kwargs):
    _manager().log_performance(logger_name, operation, duration, **kwargs)
