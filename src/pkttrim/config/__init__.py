"""
Configuration module

Application settings, defaults and validation.
"""

from .settings import (
    AppConfig,
    LoggingSettings,
    TrimSettings,
    get_app_config,
    reload_app_config,
)

__all__ = [
    "AppConfig",
    "TrimSettings",
    "LoggingSettings",
    "get_app_config",
    "reload_app_config",
]
