"""
Boundary selection

Picks the longest encodable prefix of a packet's layers that ends at the
transport header. Cooked capture headers are routed to their adapters
through the codec registry.
"""

from __future__ import annotations

from typing import FrozenSet, Iterable, Iterator, Tuple

from scapy.packet import Packet

from ...common.enums import LayerKind
from ...common.exceptions import UnencodableLayerError
from ...infrastructure.logging import get_logger
from .codecs import EncodableLayer, encoder_for
from .layers import Layer, decompose

TRANSPORT_KINDS: FrozenSet[LayerKind] = frozenset({LayerKind.TCP, LayerKind.UDP})

logger = get_logger("trim.boundary")


def is_truncation_boundary(kind: LayerKind) -> bool:
    """True for the layer after which everything is payload."""
    return kind in TRANSPORT_KINDS


def layers_until_boundary(layers: Iterable[Layer]) -> Iterator[Layer]:
    """Yield layers up to and including the first transport layer."""
    for layer in layers:
        yield layer
        if is_truncation_boundary(layer.kind):
            return


def to_encodable(layer: Layer) -> EncodableLayer:
    encoder = encoder_for(layer.kind)
    if encoder is None:
        raise UnencodableLayerError(
            layer.kind.value,
            layer.name,
            context={"layer_index": layer.index},
        )
    return EncodableLayer(layer=layer, encoder=encoder)


def _traced(layers: Iterable[Layer]) -> Iterator[Layer]:
    for layer in layers:
        logger.debug(f"saw layer: [{layer.name}] kind={layer.kind.value}")
        if is_truncation_boundary(layer.kind):
            logger.debug(f"trimming packet after [{layer.name}] layer")
        yield layer


def select_layers(packet: Packet, trace: bool = False) -> Tuple[EncodableLayer, ...]:
    """Return the retained layer list for ``packet``.

    Raises:
        UnencodableLayerError: a layer before the boundary has no encoder.
    """
    layers: Iterable[Layer] = layers_until_boundary(decompose(packet))
    if trace:
        layers = _traced(layers)
    return tuple(to_encodable(layer) for layer in layers)
