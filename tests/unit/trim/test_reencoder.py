"""
Unit tests for re-encoding retained layers
"""

import pytest
from scapy.compat import raw
from scapy.layers.inet import IP, TCP, UDP
from scapy.layers.inet6 import ICMPv6ND_NS, ICMPv6NDOptSrcLLAddr, IPv6
from scapy.layers.l2 import GRE, LLC, SNAP, CookedLinux, Dot3, Ether

from pkttrim.common.exceptions import SerializationError
from pkttrim.core.trim.boundary import select_layers
from pkttrim.core.trim.codecs import EncodableLayer
from pkttrim.core.trim.encoder import reencode, serialize_layers
from pkttrim.core.trim.layers import decompose


class TestReencode:
    def test_ethernet_tcp_is_cut_after_tcp_header(self, tcp_packet):
        data, packet = reencode(select_layers(tcp_packet))

        assert len(data) == 14 + 20 + 20
        assert data == raw(tcp_packet)[:54]
        assert isinstance(packet, Ether)
        assert packet.haslayer(TCP)

    def test_length_and_checksum_fields_are_not_recomputed(self, tcp_packet):
        _, packet = reencode(select_layers(tcp_packet))

        assert packet[IP].len == 1500
        assert packet[IP].chksum == tcp_packet[IP].chksum
        assert packet[TCP].chksum == tcp_packet[TCP].chksum

    def test_sll_packet(self, sll_packet):
        data, packet = reencode(select_layers(sll_packet))

        assert len(data) == 16 + 20 + 20
        assert data[:16] == raw(sll_packet)[:16]
        assert isinstance(packet, CookedLinux)
        assert packet[TCP].dport == 80

    def test_reencoding_trimmed_packet_is_stable(self, tcp_packet):
        first, packet = reencode(select_layers(tcp_packet))
        second, _ = reencode(select_layers(packet))

        assert first == second

    def test_gre_tunnel(self):
        frame = Ether(
            raw(
                Ether(src="00:00:00:00:00:01", dst="00:00:00:00:00:02")
                / IP(src="10.0.0.1", dst="10.0.0.2")
                / GRE()
                / IP(src="172.16.0.1", dst="172.16.0.2")
                / TCP(sport=1000, dport=2000)
                / (b"t" * 200)
            )
        )

        data, packet = reencode(select_layers(frame))

        assert len(data) == 14 + 20 + 4 + 20 + 20
        assert data == raw(frame)[: len(data)]
        assert packet[GRE].proto == 0x0800
        assert packet[TCP].dport == 2000

    def test_neighbor_solicitation_is_unchanged(self):
        frame = Ether(
            raw(
                Ether(src="00:00:00:00:00:01", dst="33:33:ff:00:00:01")
                / IPv6(src="fe80::2", dst="ff02::1:ff00:1")
                / ICMPv6ND_NS(tgt="fe80::1")
                / ICMPv6NDOptSrcLLAddr(lladdr="00:00:00:00:00:01")
            )
        )

        data, packet = reencode(select_layers(frame))

        assert data == raw(frame)
        assert packet[ICMPv6ND_NS].tgt == "fe80::1"

    def test_llc_snap_frame_starts_with_dot3(self):
        frame = Ether(
            raw(
                Dot3(src="00:00:00:00:00:01", dst="00:00:00:00:00:02")
                / LLC()
                / SNAP()
                / IP(src="10.0.0.1", dst="10.0.0.2")
                / UDP()
                / (b"d" * 30)
            )
        )

        data, packet = reencode(select_layers(frame))

        assert len(data) == 14 + 3 + 5 + 20 + 8
        assert isinstance(packet, Dot3)
        assert packet.len == frame.len

    def test_empty_layer_list_raises(self):
        with pytest.raises(SerializationError):
            serialize_layers([])

    def test_encoder_failure_is_wrapped(self, tcp_packet):
        def broken_encoder(layer):
            raise ValueError("boom")

        layer = next(decompose(tcp_packet))
        encodable = EncodableLayer(layer=layer, encoder=broken_encoder)

        with pytest.raises(SerializationError) as exc_info:
            encodable.encode()

        assert exc_info.value.layer_name == "Ethernet"
        assert isinstance(exc_info.value.__cause__, ValueError)
