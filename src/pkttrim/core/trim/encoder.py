"""
Re-encoding of retained layers
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from scapy.packet import Packet

from ...common.exceptions import SerializationError
from .codecs import EncodableLayer, decoder_for


class ReencodedPacket(NamedTuple):
    data: bytes
    packet: Packet


def serialize_layers(retained: Sequence[EncodableLayer]) -> bytes:
    """Concatenate the header bytes of ``retained`` in order."""
    if not retained:
        raise SerializationError("No layers retained, nothing to serialize")
    return b"".join(layer.encode() for layer in retained)


def reencode(retained: Sequence[EncodableLayer]) -> ReencodedPacket:
    """Serialize ``retained`` and dissect the result again.

    The buffer is dissected from the outermost retained layer's kind, so the
    returned packet has the same structure as one read from a capture file,
    only shorter. Length and checksum fields keep their original values.
    """
    data = serialize_layers(retained)

    outermost = retained[0]
    decoder = decoder_for(outermost.kind) or type(outermost.layer.packet)
    try:
        packet = decoder(data)
    except Exception as e:
        raise SerializationError(
            f"Failed to dissect re-encoded [{outermost.name}] packet: {e}",
            layer_name=outermost.name,
        ) from e

    return ReencodedPacket(data=data, packet=packet)
