"""
Payload trimming driver

Pulls packets from a source one at a time, trims each one to its transport
header and pushes the result to a sink. Per-packet failures come back as
:class:`TrimOutcome` objects; the configured :class:`ErrorPolicy` decides
whether the run stops or the packet is dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from scapy.packet import Packet

from ...common.enums import ErrorPolicy
from ...common.exceptions import PktTrimError, SerializationError, UnencodableLayerError
from ...infrastructure.logging import get_logger
from .boundary import select_layers
from .encoder import reencode
from .metadata import capture_metadata, passthrough_record, preserve_metadata
from .models import OutputRecord, TrimStats


class RecordSink(Protocol):
    def write(self, record: OutputRecord) -> None:
        ...


@dataclass(frozen=True)
class TrimOutcome:
    """Result of trimming one packet: either a record or an error."""

    index: int
    record: Optional[OutputRecord] = None
    error: Optional[PktTrimError] = None
    input_length: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self):
        return self.ok

    def __str__(self):
        if self.ok:
            return f"packet #{self.index}: {self.record.metadata.captured_length} bytes"
        return f"packet #{self.index}: {self.error}"


class PayloadTrimmer:
    """Sequential trimming pipeline over a packet stream."""

    def __init__(self, error_policy: ErrorPolicy = ErrorPolicy.ABORT, trace_layers: bool = False):
        self.error_policy = error_policy
        self.trace_layers = trace_layers
        self._logger = get_logger("trim.driver")

    def trim_packet(self, packet: Packet, index: int = 0) -> TrimOutcome:
        """Trim a single packet without raising for per-packet failures."""
        try:
            original = capture_metadata(packet)
            retained = select_layers(packet, trace=self.trace_layers)
            data, trimmed = reencode(retained)
            record = preserve_metadata(original, data, trimmed)
        except (UnencodableLayerError, SerializationError) as e:
            return TrimOutcome(index, error=e)
        return TrimOutcome(index, record=record, input_length=original.captured_length)

    def run(
        self,
        source: Iterable[Packet],
        sink: RecordSink,
        reject_sink: Optional[RecordSink] = None,
    ) -> TrimStats:
        """Trim every packet of ``source`` into ``sink`` in arrival order.

        Raises:
            UnencodableLayerError, SerializationError: under ``ABORT``, for
                the first packet that cannot be trimmed.
            ContainerIOError: reading or writing a capture failed.
        """
        stats = TrimStats()

        for index, packet in enumerate(source):
            stats.packets_processed += 1
            outcome = self.trim_packet(packet, index)

            if not outcome:
                self._handle_failure(outcome, packet, stats, reject_sink)
                continue

            record = outcome.record
            sink.write(record)

            stats.packets_written += 1
            stats.bytes_out += record.metadata.captured_length
            stats.wire_bytes += record.metadata.original_length
            stats.bytes_in += outcome.input_length
            if record.metadata.captured_length < outcome.input_length:
                stats.packets_trimmed += 1

        self._logger.info(
            f"Trimmed {stats.packets_trimmed}/{stats.packets_processed} packets, "
            f"{stats.bytes_removed} bytes removed, {stats.packets_skipped} skipped"
        )
        return stats

    def _handle_failure(
        self,
        outcome: TrimOutcome,
        packet: Packet,
        stats: TrimStats,
        reject_sink: Optional[RecordSink],
    ) -> None:
        if self.error_policy is ErrorPolicy.ABORT:
            self._logger.error(f"Aborting at {outcome}")
            raise outcome.error

        self._logger.warning(f"Skipping {outcome}")
        stats.packets_skipped += 1
        error_name = type(outcome.error).__name__
        stats.skipped_by_error[error_name] = stats.skipped_by_error.get(error_name, 0) + 1

        if reject_sink is not None:
            reject_sink.write(passthrough_record(packet))
