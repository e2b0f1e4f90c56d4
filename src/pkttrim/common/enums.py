#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PktTrim enumeration definitions
"""

from enum import Enum, IntEnum


class LayerKind(Enum):
    """Closed set of layer kinds the trimmer knows about"""

    # Link layer
    ETHERNET = "ethernet"
    LINUX_SLL = "linux_sll"
    LINUX_SLL2 = "linux_sll2"
    DOT1Q = "dot1q"
    DOT3 = "dot3"
    LLC = "llc"
    SNAP = "snap"
    STP = "stp"

    # Network layer
    ARP = "arp"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    IPV6_EXT = "ipv6_ext"
    ICMP = "icmp"
    ICMPV6 = "icmpv6"
    GRE = "gre"

    # Transport layer
    TCP = "tcp"
    UDP = "udp"

    # Other / payload
    PAYLOAD = "payload"
    UNKNOWN = "unknown"


class ErrorPolicy(Enum):
    """What the pipeline does with a packet that cannot be trimmed"""

    ABORT = "abort"
    SKIP = "skip"


class LogLevel(IntEnum):
    """Log level enumeration"""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

