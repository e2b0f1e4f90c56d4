"""
Pytest configuration and fixtures for PktTrim tests
"""

import shutil
import tempfile
from pathlib import Path

import pytest
from scapy.all import wrpcap
from scapy.compat import raw
from scapy.layers.inet import IP, TCP, UDP
from scapy.layers.ipsec import ESP
from scapy.layers.l2 import CookedLinux, Ether

PAYLOAD_LEN = 1460


def dissect(packet):
    """Round-trip a built packet through bytes so it looks like one read from a file"""
    dissected = packet.__class__(raw(packet))
    dissected.time = packet.time
    return dissected


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    if temp_path.exists():
        shutil.rmtree(temp_path)


@pytest.fixture
def tcp_packet():
    """Ethernet/IPv4/TCP frame carrying a full-size payload (1514 bytes)"""
    packet = (
        Ether(src="00:11:22:33:44:55", dst="66:77:88:99:aa:bb")
        / IP(src="10.0.0.1", dst="10.0.0.2")
        / TCP(sport=40000, dport=443, flags="PA")
        / (b"\xab" * PAYLOAD_LEN)
    )
    packet.time = 1700000000.123456
    return dissect(packet)


@pytest.fixture
def udp_packet():
    packet = (
        Ether(src="00:11:22:33:44:55", dst="66:77:88:99:aa:cc")
        / IP(src="10.0.0.1", dst="10.0.0.3")
        / UDP(sport=5353, dport=53)
        / (b"q" * 64)
    )
    packet.time = 1700000001.5
    return dissect(packet)


@pytest.fixture
def sll_packet():
    """Linux cooked capture frame with a 6-byte link-layer address"""
    packet = (
        CookedLinux(pkttype=0, lladdrtype=1, lladdrlen=6, src=b"\x00\x11\x22\x33\x44\x55", proto=0x0800)
        / IP(src="192.168.1.10", dst="192.168.1.20")
        / TCP(sport=1234, dport=80)
        / (b"x" * 100)
    )
    packet.time = 1700000002.25
    return dissect(packet)


@pytest.fixture
def write_capture(temp_dir):
    """Write packets to a pcap file in ``temp_dir`` and return its path"""

    def _write(packets, name="input.pcap", **kwargs):
        path = temp_dir / name
        wrpcap(str(path), packets, **kwargs)
        return path

    return _write


@pytest.fixture
def redissect():
    return dissect


@pytest.fixture
def esp_packet():
    """Ethernet/IPv4/ESP frame: ESP is outside the known layer kinds"""
    packet = (
        Ether(src="00:00:00:00:00:01", dst="00:00:00:00:00:02")
        / IP(src="10.0.0.1", dst="10.0.0.9")
        / ESP(spi=0x1000, seq=1, data=b"\x5a" * 48)
    )
    return dissect(packet)
