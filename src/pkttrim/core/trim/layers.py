"""
Layer decomposition

Walks a dissected scapy packet outermost layer first and tags every layer
with a :class:`LayerKind` from a closed table. Anything not in the table is
``LayerKind.UNKNOWN``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple, Type

from scapy.layers.inet import ICMP, IP, TCP, UDP
from scapy.layers.inet6 import (
    IPv6,
    IPv6ExtHdrDestOpt,
    IPv6ExtHdrFragment,
    IPv6ExtHdrHopByHop,
    IPv6ExtHdrRouting,
    _ICMPv6,
    _ICMPv6NDGuessPayload,
)
from scapy.layers.l2 import ARP, GRE, LLC, SNAP, STP, CookedLinux, CookedLinuxV2, Dot1Q, Dot3, Ether
from scapy.packet import NoPayload, Packet, Padding, Raw

from ...common.enums import LayerKind

# Checked in order with isinstance(); subclasses must precede their bases
# (CookedLinuxV2 derives from CookedLinux, TCPerror from TCP, ...).
# Neighbor discovery options share the ND mixin with the ND messages.
_KIND_TABLE: Tuple[Tuple[Type[Packet], LayerKind], ...] = (
    (CookedLinuxV2, LayerKind.LINUX_SLL2),
    (CookedLinux, LayerKind.LINUX_SLL),
    (Ether, LayerKind.ETHERNET),
    (Dot1Q, LayerKind.DOT1Q),
    (Dot3, LayerKind.DOT3),
    (LLC, LayerKind.LLC),
    (SNAP, LayerKind.SNAP),
    (STP, LayerKind.STP),
    (ARP, LayerKind.ARP),
    (IP, LayerKind.IPV4),
    (IPv6, LayerKind.IPV6),
    (IPv6ExtHdrHopByHop, LayerKind.IPV6_EXT),
    (IPv6ExtHdrRouting, LayerKind.IPV6_EXT),
    (IPv6ExtHdrFragment, LayerKind.IPV6_EXT),
    (IPv6ExtHdrDestOpt, LayerKind.IPV6_EXT),
    (ICMP, LayerKind.ICMP),
    (_ICMPv6, LayerKind.ICMPV6),
    (_ICMPv6NDGuessPayload, LayerKind.ICMPV6),
    (GRE, LayerKind.GRE),
    (TCP, LayerKind.TCP),
    (UDP, LayerKind.UDP),
    (Raw, LayerKind.PAYLOAD),
    (Padding, LayerKind.PAYLOAD),
)


def classify(layer: Packet) -> LayerKind:
    """Return the kind of a single scapy layer instance."""
    for layer_class, kind in _KIND_TABLE:
        if isinstance(layer, layer_class):
            return kind
    return LayerKind.UNKNOWN


@dataclass(frozen=True)
class Layer:
    """One protocol layer of a dissected packet.

    ``packet`` is the scapy layer instance itself; its payload chain still
    hangs off it, so the header bytes are obtained by encoding the layer
    without its payload.
    """

    kind: LayerKind
    packet: Packet
    index: int

    @property
    def name(self) -> str:
        return self.packet.name


def decompose(packet: Packet) -> Iterator[Layer]:
    """Yield the layers of ``packet`` in on-wire order."""
    current = packet
    index = 0
    while current is not None and not isinstance(current, NoPayload):
        yield Layer(kind=classify(current), packet=current, index=index)
        current = current.payload
        index += 1
