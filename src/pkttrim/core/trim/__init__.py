"""
Payload trimming core

Decompose a packet into layers, keep everything up to the transport header,
re-encode it and carry the original wire length over to the output record.
"""

from .adapters import ADAPTERS, LinuxSll2Adapter, LinuxSllAdapter, decode_linux_sll, encode_linux_sll
from .boundary import is_truncation_boundary, select_layers
from .codecs import EncodableLayer, decoder_for, encoder_for, is_encodable
from .driver import PayloadTrimmer, RecordSink, TrimOutcome
from .encoder import ReencodedPacket, reencode
from .layers import Layer, classify, decompose
from .metadata import capture_metadata, passthrough_record, preserve_metadata
from .models import CaptureMetadata, OutputRecord, TrimStats

__all__ = [
    "ADAPTERS",
    "LinuxSllAdapter",
    "LinuxSll2Adapter",
    "encode_linux_sll",
    "decode_linux_sll",
    "is_truncation_boundary",
    "select_layers",
    "EncodableLayer",
    "encoder_for",
    "decoder_for",
    "is_encodable",
    "PayloadTrimmer",
    "RecordSink",
    "TrimOutcome",
    "ReencodedPacket",
    "reencode",
    "Layer",
    "classify",
    "decompose",
    "capture_metadata",
    "preserve_metadata",
    "passthrough_record",
    "CaptureMetadata",
    "OutputRecord",
    "TrimStats",
]
