"""
Capture metadata bookkeeping

The trimmed record keeps the original wire length so readers can still tell
how large the packet was and that it has been cut.
"""

from __future__ import annotations

from decimal import Decimal

from scapy.compat import raw
from scapy.packet import Packet

from ...common.exceptions import SerializationError
from .models import CaptureMetadata, OutputRecord


def capture_metadata(packet: Packet) -> CaptureMetadata:
    """Snapshot the metadata of a packet as read from a capture."""
    try:
        captured_length = len(raw(packet))
    except Exception as e:
        raise SerializationError(f"Failed to serialize input packet: {e}") from e

    original_length = getattr(packet, "wirelen", None)
    if original_length is None:
        original_length = captured_length

    return CaptureMetadata(
        timestamp=Decimal(str(packet.time)),
        captured_length=captured_length,
        original_length=original_length,
    )


def preserve_metadata(original: CaptureMetadata, data: bytes, packet: Packet) -> OutputRecord:
    """Build the output record for re-encoded ``data``.

    The captured length follows the new bytes, the original length and
    timestamp come from the input record.
    """
    metadata = CaptureMetadata(
        timestamp=original.timestamp,
        captured_length=len(data),
        original_length=original.original_length,
    )
    # scapy's writers take the record header from these attributes
    packet.time = metadata.timestamp
    packet.wirelen = metadata.original_length
    return OutputRecord(metadata=metadata, data=data, packet=packet)


def passthrough_record(packet: Packet) -> OutputRecord:
    """Wrap an untouched packet, e.g. for the reject capture."""
    metadata = capture_metadata(packet)
    return OutputRecord(metadata=metadata, data=raw(packet), packet=packet)
