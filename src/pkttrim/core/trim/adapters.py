"""
Cooked capture header codecs

Linux "cooked" captures (LINKTYPE_LINUX_SLL / LINUX_SLL2) carry a pseudo
link-layer header instead of an Ethernet header. These adapters write the
header from its decoded fields with an explicit big-endian layout and are
registered by layer kind in :data:`ADAPTERS`.

SLL (16 bytes)::

    [pkttype:2][lladdrtype:2][lladdrlen:2][address:8][proto:2]

SLL2 (20 bytes)::

    [proto:2][reserved:2][ifindex:4][lladdrtype:2][pkttype:1][lladdrlen:1][address:8]
"""

from __future__ import annotations

import abc
import struct
from typing import Dict, NamedTuple

from scapy.packet import Packet

from ...common.constants import CaptureConstants
from ...common.enums import LayerKind
from ...common.exceptions import SerializationError

_SLL_STRUCT = struct.Struct(">HHH8sH")
_SLL2_STRUCT = struct.Struct(">HHIHBB8s")


class LinuxSllHeader(NamedTuple):
    pkttype: int
    lladdrtype: int
    lladdrlen: int
    address: bytes
    proto: int


class LinuxSll2Header(NamedTuple):
    proto: int
    reserved: int
    ifindex: int
    lladdrtype: int
    pkttype: int
    lladdrlen: int
    address: bytes


def _fit_address(address: bytes, lladdrlen: int) -> bytes:
    """Cut the address to the advertised length and zero-pad it to 8 bytes."""
    used = max(0, min(lladdrlen, CaptureConstants.SLL_ADDRESS_LEN))
    return bytes(address[:used]).ljust(CaptureConstants.SLL_ADDRESS_LEN, b"\x00")


def encode_linux_sll(header: LinuxSllHeader) -> bytes:
    """Serialize an SLL header to exactly 16 bytes."""
    try:
        return _SLL_STRUCT.pack(
            header.pkttype,
            header.lladdrtype,
            header.lladdrlen,
            _fit_address(header.address, header.lladdrlen),
            header.proto,
        )
    except (struct.error, MemoryError) as e:
        raise SerializationError(f"Failed to encode Linux SLL header: {e}", layer_name="cooked linux") from e


def decode_linux_sll(data: bytes) -> LinuxSllHeader:
    """Parse the first 16 bytes of ``data`` as an SLL header."""
    if len(data) < _SLL_STRUCT.size:
        raise SerializationError(
            f"Linux SLL header needs {_SLL_STRUCT.size} bytes, got {len(data)}",
            layer_name="cooked linux",
        )
    pkttype, lladdrtype, lladdrlen, address, proto = _SLL_STRUCT.unpack_from(data)
    used = min(lladdrlen, CaptureConstants.SLL_ADDRESS_LEN)
    return LinuxSllHeader(pkttype, lladdrtype, lladdrlen, address[:used], proto)


def encode_linux_sll2(header: LinuxSll2Header) -> bytes:
    """Serialize an SLL2 header to exactly 20 bytes."""
    try:
        return _SLL2_STRUCT.pack(
            header.proto,
            header.reserved,
            header.ifindex,
            header.lladdrtype,
            header.pkttype,
            header.lladdrlen,
            _fit_address(header.address, header.lladdrlen),
        )
    except (struct.error, MemoryError) as e:
        raise SerializationError(f"Failed to encode Linux SLL2 header: {e}", layer_name="cooked linux v2") from e


def decode_linux_sll2(data: bytes) -> LinuxSll2Header:
    """Parse the first 20 bytes of ``data`` as an SLL2 header."""
    if len(data) < _SLL2_STRUCT.size:
        raise SerializationError(
            f"Linux SLL2 header needs {_SLL2_STRUCT.size} bytes, got {len(data)}",
            layer_name="cooked linux v2",
        )
    proto, reserved, ifindex, lladdrtype, pkttype, lladdrlen, address = _SLL2_STRUCT.unpack_from(data)
    used = min(lladdrlen, CaptureConstants.SLL_ADDRESS_LEN)
    return LinuxSll2Header(proto, reserved, ifindex, lladdrtype, pkttype, lladdrlen, address[:used])


class LayerAdapter(metaclass=abc.ABCMeta):
    """Byte-exact encoder for one layer kind."""

    #: Kind this adapter is registered under
    layer_kind: LayerKind
    #: Number of bytes produced by :meth:`encode`
    header_len: int

    @abc.abstractmethod
    def encode(self, layer: Packet) -> bytes:
        """Return the header bytes of ``layer`` (payload excluded)."""

    def __call__(self, layer: Packet) -> bytes:
        return self.encode(layer)


class LinuxSllAdapter(LayerAdapter):
    layer_kind = LayerKind.LINUX_SLL
    header_len = CaptureConstants.LINUX_SLL_HEADER_LEN

    def encode(self, layer: Packet) -> bytes:
        return encode_linux_sll(
            LinuxSllHeader(
                pkttype=int(layer.pkttype),
                lladdrtype=int(layer.lladdrtype),
                lladdrlen=int(layer.lladdrlen),
                address=layer.src or b"",
                proto=int(layer.proto),
            )
        )


class LinuxSll2Adapter(LayerAdapter):
    layer_kind = LayerKind.LINUX_SLL2
    header_len = CaptureConstants.LINUX_SLL2_HEADER_LEN

    def encode(self, layer: Packet) -> bytes:
        return encode_linux_sll2(
            LinuxSll2Header(
                proto=int(layer.proto),
                reserved=int(layer.reserved),
                ifindex=int(layer.ifindex),
                lladdrtype=int(layer.lladdrtype),
                pkttype=int(layer.pkttype),
                lladdrlen=int(layer.lladdrlen),
                address=layer.src or b"",
            )
        )


ADAPTERS: Dict[LayerKind, LayerAdapter] = {
    adapter.layer_kind: adapter for adapter in (LinuxSllAdapter(), LinuxSll2Adapter())
}
