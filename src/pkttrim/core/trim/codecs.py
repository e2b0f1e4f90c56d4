"""
Layer codec registry

Answers two questions per :class:`LayerKind`: how are the header bytes of
such a layer written (``encoder_for``), and which scapy class dissects a
buffer that starts with such a layer (``decoder_for``). A kind without an
encoder cannot be re-serialized.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Optional, Type

from scapy.compat import raw
from scapy.layers.inet import ICMP, IP, TCP, UDP
from scapy.layers.inet6 import IPv6
from scapy.layers.l2 import ARP, GRE, LLC, SNAP, STP, CookedLinux, CookedLinuxV2, Dot1Q, Dot3, Ether
from scapy.packet import Packet, Raw

from ...common.enums import LayerKind
from ...common.exceptions import PktTrimError, SerializationError
from .adapters import ADAPTERS
from .layers import Layer

LayerEncoder = Callable[[Packet], bytes]

# Kinds whose header bytes scapy reproduces from the dissected fields
GENERIC_KINDS: FrozenSet[LayerKind] = frozenset(
    {
        LayerKind.ETHERNET,
        LayerKind.DOT1Q,
        LayerKind.DOT3,
        LayerKind.LLC,
        LayerKind.SNAP,
        LayerKind.STP,
        LayerKind.ARP,
        LayerKind.IPV4,
        LayerKind.IPV6,
        LayerKind.IPV6_EXT,
        LayerKind.ICMP,
        LayerKind.ICMPV6,
        LayerKind.GRE,
        LayerKind.TCP,
        LayerKind.UDP,
        LayerKind.PAYLOAD,
    }
)

# ICMPv6 messages and IPv6 extension headers dispatch on the enclosing
# header; a buffer starting with one is dissected with the layer's own class.
DECODERS: Dict[LayerKind, Type[Packet]] = {
    LayerKind.ETHERNET: Ether,
    LayerKind.LINUX_SLL: CookedLinux,
    LayerKind.LINUX_SLL2: CookedLinuxV2,
    LayerKind.DOT1Q: Dot1Q,
    LayerKind.DOT3: Dot3,
    LayerKind.LLC: LLC,
    LayerKind.SNAP: SNAP,
    LayerKind.STP: STP,
    LayerKind.ARP: ARP,
    LayerKind.IPV4: IP,
    LayerKind.IPV6: IPv6,
    LayerKind.ICMP: ICMP,
    LayerKind.GRE: GRE,
    LayerKind.TCP: TCP,
    LayerKind.UDP: UDP,
    LayerKind.PAYLOAD: Raw,
}


def encode_header(layer: Packet) -> bytes:
    """Generic encoder: the bytes of ``layer`` alone, payload detached.

    Dissected field values (lengths, checksums) are written back as they
    were read; nothing is recomputed.
    """
    header = layer.copy()
    header.remove_payload()
    return raw(header)


def encoder_for(kind: LayerKind) -> Optional[LayerEncoder]:
    """Adapter first, then the generic encoder; ``None`` if neither applies."""
    adapter = ADAPTERS.get(kind)
    if adapter is not None:
        return adapter
    if kind in GENERIC_KINDS:
        return encode_header
    return None


def is_encodable(kind: LayerKind) -> bool:
    return encoder_for(kind) is not None


def decoder_for(kind: LayerKind) -> Optional[Type[Packet]]:
    return DECODERS.get(kind)


@dataclass(frozen=True)
class EncodableLayer:
    """A retained layer paired with the encoder chosen for it."""

    layer: Layer
    encoder: LayerEncoder

    @property
    def kind(self) -> LayerKind:
        return self.layer.kind

    @property
    def name(self) -> str:
        return self.layer.name

    def encode(self) -> bytes:
        try:
            return self.encoder(self.layer.packet)
        except PktTrimError:
            raise
        except Exception as e:
            raise SerializationError(
                f"Failed to serialize layer [{self.name}]: {e}",
                layer_name=self.name,
            ) from e
