from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

from pydantic import BaseModel, Field


class CaptureMetadata(BaseModel):
    """Per-record capture metadata.

    ``captured_length`` is the number of stored bytes, ``original_length``
    the size of the packet on the wire.
    """

    timestamp: Decimal = Field(..., description="Capture timestamp, seconds since epoch")
    captured_length: int = Field(..., ge=0, description="Bytes stored for the record")
    original_length: int = Field(..., ge=0, description="Bytes seen on the wire")

    model_config = {"frozen": True}

    @property
    def truncated(self) -> bool:
        return self.captured_length < self.original_length


class OutputRecord(BaseModel):
    """A packet ready to be handed to a capture writer."""

    metadata: CaptureMetadata
    data: bytes = Field(..., description="Raw record bytes")
    packet: Any = Field(..., description="Dissected scapy packet for ``data``")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


class TrimStats(BaseModel):
    """Running counters of one trimming pass."""

    packets_processed: int = Field(0, ge=0)
    packets_written: int = Field(0, ge=0)
    packets_trimmed: int = Field(0, ge=0, description="Written packets that lost bytes")
    packets_skipped: int = Field(0, ge=0)
    bytes_in: int = Field(0, ge=0, description="Sum of input captured lengths of written packets")
    bytes_out: int = Field(0, ge=0, description="Sum of output captured lengths")
    wire_bytes: int = Field(0, ge=0, description="Sum of original lengths of written packets")
    skipped_by_error: Dict[str, int] = Field(default_factory=dict)

    @property
    def bytes_removed(self) -> int:
        return self.bytes_in - self.bytes_out
