"""Capture file readers and writers"""

from .files import CaptureReader, CaptureWriter, NullSink, check_linktype

__all__ = ["CaptureReader", "CaptureWriter", "NullSink", "check_linktype"]
