#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PktTrim exception definitions
Unified management of all exception types raised by the application
"""

from typing import Any, Dict, Optional


class PktTrimError(Exception):
    """Base exception for all PktTrim errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception into a serializable dictionary"""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }


class ConfigurationError(PktTrimError):
    """Configuration related errors"""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        super().__init__(message, error_code="CONFIG_ERROR", **kwargs)
        self.config_key = config_key


class UnsupportedLinkTypeError(ConfigurationError):
    """The capture declares a link-layer type this tool cannot trim"""

    def __init__(self, linktype: int, **kwargs):
        super().__init__(
            f"Unsupported capture link type: {linktype}",
            config_key="linktype",
            **kwargs,
        )
        self.linktype = linktype


class UnencodableLayerError(PktTrimError):
    """A layer below the truncation boundary has no known encoding"""

    def __init__(self, layer_kind: str, layer_name: str, **kwargs):
        super().__init__(
            f"Cannot serialize layer [{layer_name}] (kind: {layer_kind})",
            error_code="UNENCODABLE_LAYER",
            **kwargs,
        )
        self.layer_kind = layer_kind
        self.layer_name = layer_name


class SerializationError(PktTrimError):
    """Writing retained layer bytes failed"""

    def __init__(self, message: str, layer_name: Optional[str] = None, **kwargs):
        super().__init__(message, error_code="SERIALIZATION_ERROR", **kwargs)
        self.layer_name = layer_name


class ContainerIOError(PktTrimError):
    """Reading from or writing to a capture file failed"""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="CONTAINER_IO_ERROR", **kwargs)
        self.file_path = file_path
        self.operation = operation


class ProcessingError(PktTrimError):
    """Stage level processing errors"""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        step_name: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="PROCESSING_ERROR", **kwargs)
        self.file_path = file_path
        self.step_name = step_name


def format_error_for_user(error: PktTrimError) -> str:
    """Format an error message for display"""
    base_message = error.message

    if isinstance(error, ContainerIOError) and error.file_path:
        return f"{base_message}\nFile: {error.file_path}"
    elif isinstance(error, ProcessingError) and error.step_name:
        return f"{base_message}\nStep: {error.step_name}"
    elif isinstance(error, ConfigurationError) and error.config_key:
        return f"{base_message}\nConfig key: {error.config_key}"

    return base_message
