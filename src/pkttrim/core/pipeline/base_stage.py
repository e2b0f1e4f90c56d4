from __future__ import annotations

import abc
import logging
from pathlib import Path
from typing import Dict, Optional

from ...common.exceptions import ContainerIOError, ProcessingError
from .models import StageStats


class StageBase(metaclass=abc.ABCMeta):
    """Base class for file-level pipeline stages.

    A stage reads one capture file and writes one capture file, returning
    :class:`StageStats`. Stages own every file handle they open and release
    it before ``process_file`` returns or raises.
    """

    #: Stage name for CLI display - must be overridden by implementations
    name: str = "UnnamedStage"

    _initialized: bool = False

    def __init__(self, config: Optional[Dict] = None) -> None:
        self.config = config or {}
        self._initialized = False
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    @abc.abstractmethod
    def initialize(self, config: Optional[Dict] = None) -> bool:
        """Initialize the stage.

        Returns:
            bool: True if initialization successful, False otherwise
        """

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @abc.abstractmethod
    def process_file(self, input_path: Path, output_path: Path) -> StageStats:
        """Process a single file.

        Raises:
            ContainerIOError: If the input cannot be read or the output written
            ProcessingError: If processing a packet fails
        """

    def get_display_name(self) -> str:
        return self.name

    def get_description(self) -> str:
        return f"{self.get_display_name()} stage"

    def cleanup(self) -> None:
        """Release stage resources and reset the initialization state."""
        self.logger.debug(f"Starting cleanup for {self.__class__.__name__}")
        try:
            self._cleanup_stage_specific()
        finally:
            self._initialized = False

    def _cleanup_stage_specific(self) -> None:
        """Stage-specific cleanup logic, overridden by subclasses."""

    def validate_file_access(self, file_path: Path, operation: str = "access") -> None:
        """Check that ``file_path`` exists and is a regular file.

        Raises:
            ContainerIOError: If file access validation fails
        """
        try:
            if not file_path.exists():
                raise ContainerIOError(
                    f"File does not exist for {operation}: {file_path}",
                    file_path=str(file_path),
                    operation=operation,
                )
            if not file_path.is_file():
                raise ContainerIOError(
                    f"Path is not a file for {operation}: {file_path}",
                    file_path=str(file_path),
                    operation=operation,
                )
            if not file_path.stat().st_size > 0:
                self.logger.warning(f"File is empty for {operation}: {file_path}")
        except OSError as e:
            raise ContainerIOError(
                f"Cannot access file for {operation}: {file_path} - {e}",
                file_path=str(file_path),
                operation=operation,
            ) from e

    def handle_unexpected_error(self, error: Exception, file_path: Path, operation: str) -> None:
        """Re-raise a non-library exception as :class:`ProcessingError`."""
        raise ProcessingError(
            f"Unexpected error during {operation}: {file_path} - {error}",
            file_path=str(file_path),
            step_name=self.name,
        ) from error
