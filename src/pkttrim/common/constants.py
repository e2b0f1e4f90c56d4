#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
PktTrim constants
"""


class FileConstants:
    """File and path related constants"""

    # Configuration files
    CONFIG_DIR_NAME = ".pkttrim"
    DEFAULT_CONFIG_FILE = "config.yaml"

    # Log files
    LOG_FILE_NAME = "pkttrim.log"
    LOG_MAX_SIZE = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT = 5

    # Output naming
    OUTPUT_SUFFIX = "_trimmed"
    SUPPORTED_EXTENSIONS = (".pcap", ".pcapng", ".cap")


class LinkTypes:
    """libpcap LINKTYPE_* values accepted as trimmer input"""

    ETHERNET = 1
    RAW = 101
    LINUX_SLL = 113
    IPV4 = 228
    IPV6 = 229
    LINUX_SLL2 = 276

    SUPPORTED = frozenset({ETHERNET, RAW, LINUX_SLL, IPV4, IPV6, LINUX_SLL2})


class CaptureConstants:
    """Capture container defaults"""

    DEFAULT_SNAPLEN = 262144

    # Cooked capture header sizes
    LINUX_SLL_HEADER_LEN = 16
    LINUX_SLL2_HEADER_LEN = 20
    SLL_ADDRESS_LEN = 8


class EnvVars:
    """Environment variables recognised at startup"""

    LOG_LEVEL = "PKTTRIM_LOG_LEVEL"
