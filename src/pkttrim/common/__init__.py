"""
Common module for PktTrim
Constants, enumerations and exception definitions
"""

from .constants import CaptureConstants, EnvVars, FileConstants, LinkTypes
from .enums import ErrorPolicy, LayerKind, LogLevel
from .exceptions import (
    ConfigurationError,
    ContainerIOError,
    PktTrimError,
    ProcessingError,
    SerializationError,
    UnencodableLayerError,
    UnsupportedLinkTypeError,
)

__all__ = [
    "CaptureConstants",
    "EnvVars",
    "FileConstants",
    "LinkTypes",
    "ErrorPolicy",
    "LayerKind",
    "LogLevel",
    "PktTrimError",
    "ConfigurationError",
    "ContainerIOError",
    "ProcessingError",
    "SerializationError",
    "UnencodableLayerError",
    "UnsupportedLinkTypeError",
]
