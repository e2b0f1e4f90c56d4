"""Command line interface"""

from .commands import config_command, trim_command, validate_command

__all__ = ["trim_command", "validate_command", "config_command"]
