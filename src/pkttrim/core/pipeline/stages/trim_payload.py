"""
Payload trimming stage

Reads a capture, cuts every packet after its transport header and writes a
capture whose records still advertise the original wire length.
"""

from __future__ import annotations

import contextlib
import time
from pathlib import Path
from typing import Any, Dict, Optional

from pkttrim.common.constants import CaptureConstants
from pkttrim.common.enums import ErrorPolicy
from pkttrim.common.exceptions import (
    ConfigurationError,
    PktTrimError,
    ProcessingError,
    SerializationError,
    UnencodableLayerError,
)
from pkttrim.core.pipeline.base_stage import StageBase
from pkttrim.core.pipeline.models import StageStats
from pkttrim.core.trim.driver import PayloadTrimmer, RecordSink
from pkttrim.infrastructure.capture import CaptureReader, CaptureWriter, NullSink, check_linktype
from pkttrim.infrastructure.logging import get_logger, log_performance


class PayloadTrimStage(StageBase):
    """Strip application payload, keep link/network/transport headers."""

    name: str = "PayloadTrimStage"

    def __init__(self, config: Dict[str, Any]):
        """Initialize the trimming stage.

        Args:
            config: Configuration dictionary with the following optional parameters:
                - enabled: Whether the stage is enabled (default: True)
                - error_policy: "abort" or "skip" (default: "abort")
                - rejects_path: Capture receiving packets dropped under "skip"
                - snaplen: Snapshot length declared in the output header
                - trace_layers: Log every layer seen at DEBUG level
                - dry_run: Process without writing an output file
        """
        super().__init__(config)

        self.enabled = config.get("enabled", True)
        self.error_policy_name = config.get("error_policy", ErrorPolicy.ABORT.value)
        self.rejects_path = config.get("rejects_path")
        self.snaplen = config.get("snaplen", CaptureConstants.DEFAULT_SNAPLEN)
        self.trace_layers = config.get("trace_layers", False)
        self.dry_run = config.get("dry_run", False)

        self.logger = get_logger("payload_trim_stage")
        self._trimmer: Optional[PayloadTrimmer] = None

    def initialize(self, config: Optional[Dict] = None) -> bool:
        if self._initialized:
            return True

        if config:
            self.config.update(config)
            self.error_policy_name = self.config.get("error_policy", self.error_policy_name)
            self.rejects_path = self.config.get("rejects_path", self.rejects_path)

        try:
            error_policy = ErrorPolicy(self.error_policy_name)
        except ValueError:
            self.logger.error(f"Invalid error policy: {self.error_policy_name}")
            return False

        if self.rejects_path and error_policy is not ErrorPolicy.SKIP:
            self.logger.error("A rejects capture requires the 'skip' error policy")
            return False

        self._trimmer = PayloadTrimmer(error_policy=error_policy, trace_layers=self.trace_layers)
        self._initialized = True
        self.logger.info(f"Payload trim stage initialized: error_policy={error_policy.value}")
        return True

    def process_file(self, input_path: Path, output_path: Path) -> StageStats:
        """Trim ``input_path`` into ``output_path``.

        Raises:
            ConfigurationError: If the stage configuration or the input link type is invalid
            ContainerIOError: If reading or writing a capture fails
            ProcessingError: If a packet cannot be trimmed under the "abort" policy
        """
        input_path = Path(input_path)
        output_path = Path(output_path)

        if not self._initialized and not self.initialize():
            raise ConfigurationError("PayloadTrimStage initialization failed", config_key="trim")

        self.validate_file_access(input_path, "payload trimming")
        self.logger.info(f"Starting payload trimming: {input_path} -> {output_path}")

        start_time = time.time()
        try:
            with CaptureReader(input_path) as reader:
                linktype = reader.linktype
                check_linktype(linktype)
                nano = reader.nano
                with self._open_sink(output_path, linktype, nano) as sink, self._open_rejects(
                    linktype, nano
                ) as rejects:
                    stats = self._trimmer.run(reader, sink, rejects)

        except (UnencodableLayerError, SerializationError) as e:
            error_msg = f"Payload trimming aborted: {e}"
            self.logger.error(error_msg)
            raise ProcessingError(error_msg, file_path=str(input_path), step_name=self.name) from e

        except PktTrimError:
            raise

        except Exception as e:
            self.logger.error(f"Payload trimming failed: {e}", exc_info=True)
            self.handle_unexpected_error(e, input_path, "payload trimming")

        duration_ms = (time.time() - start_time) * 1000
        log_performance("payload_trim", duration_ms / 1000, packets=stats.packets_processed)
        self.logger.info(
            f"Payload trimming completed: {stats.packets_trimmed}/{stats.packets_processed} packets trimmed, "
            f"{stats.bytes_removed} bytes removed"
        )

        metrics = stats.model_dump()
        metrics.update(
            {
                "bytes_removed": stats.bytes_removed,
                "error_policy": self.error_policy_name,
                "rejects_path": self.rejects_path,
                "dry_run": self.dry_run,
            }
        )
        return StageStats(
            stage_name=self.name,
            packets_processed=stats.packets_processed,
            packets_modified=stats.packets_trimmed,
            duration_ms=duration_ms,
            extra_metrics=metrics,
        )

    def _open_sink(self, output_path: Path, linktype: Optional[int], nano: bool = False):
        if self.dry_run:
            return contextlib.nullcontext(NullSink())
        return CaptureWriter(output_path, linktype=linktype, snaplen=self.snaplen, nano=nano)

    def _open_rejects(
        self, linktype: Optional[int], nano: bool = False
    ) -> contextlib.AbstractContextManager[Optional[RecordSink]]:
        if not self.rejects_path:
            return contextlib.nullcontext()
        return CaptureWriter(self.rejects_path, linktype=linktype, snaplen=self.snaplen, nano=nano)

    def get_display_name(self) -> str:
        return "Trim Payloads"

    def get_description(self) -> str:
        return "Remove everything above the transport header while keeping the original packet length"

    def _cleanup_stage_specific(self) -> None:
        self._trimmer = None
