"""
Logging infrastructure for PktTrim
"""

from .logger import (
    PktTrimLogger,
    get_logger,
    log_exception,
    log_performance,
    reconfigure_logging,
    set_log_level,
)

__all__ = [
    "PktTrimLogger",
    "get_logger",
    "log_performance",
    "log_exception",
    "set_log_level",
    "reconfigure_logging",
]
