"""
Capture file access

Thin wrappers around scapy's ``PcapReader`` / ``PcapWriter`` that own the
file handles and turn container failures into :class:`ContainerIOError`.
"""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Iterator, Optional, Union

from scapy.error import Scapy_Exception
from scapy.packet import Packet
from scapy.utils import PcapReader, PcapWriter

from ...common.constants import CaptureConstants, LinkTypes
from ...common.exceptions import ContainerIOError, UnsupportedLinkTypeError
from ..logging import get_logger

_READ_ERRORS = (OSError, EOFError, struct.error, Scapy_Exception)

logger = get_logger("capture")


def check_linktype(linktype: Optional[int]) -> None:
    """Reject link types the trimmer cannot decode; ``None`` means unknown."""
    if linktype is not None and linktype not in LinkTypes.SUPPORTED:
        raise UnsupportedLinkTypeError(linktype)


class CaptureReader:
    """Sequential packet source backed by a pcap or pcapng file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._reader = None

    def open(self) -> "CaptureReader":
        try:
            # PcapReader switches to PcapNgReader on its own
            self._reader = PcapReader(str(self.path))
        except _READ_ERRORS as e:
            raise ContainerIOError(
                f"Cannot open capture {self.path}: {e}",
                file_path=str(self.path),
                operation="open",
            ) from e
        logger.debug(f"Opened {self.path} (linktype={self.linktype})")
        return self

    @property
    def linktype(self) -> Optional[int]:
        return getattr(self._reader, "linktype", None)

    @property
    def nano(self) -> bool:
        """True when record timestamps have nanosecond resolution."""
        return bool(getattr(self._reader, "nano", False))

    def __iter__(self) -> Iterator[Packet]:
        if self._reader is None:
            raise ContainerIOError("Capture is not open", file_path=str(self.path), operation="read")
        iterator = iter(self._reader)
        while True:
            try:
                packet = next(iterator)
            except StopIteration:
                return
            except _READ_ERRORS as e:
                raise ContainerIOError(
                    f"Failed to read packet from {self.path}: {e}",
                    file_path=str(self.path),
                    operation="read",
                ) from e
            yield packet

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None

    def __enter__(self) -> "CaptureReader":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class CaptureWriter:
    """Sequential record sink backed by a pcap file.

    ``linktype`` is declared once in the file header; ``None`` lets scapy
    derive it from the first packet written. ``nano`` selects nanosecond
    timestamp resolution.
    """

    def __init__(
        self,
        path: Union[str, Path],
        linktype: Optional[int] = None,
        snaplen: int = CaptureConstants.DEFAULT_SNAPLEN,
        nano: bool = False,
    ):
        self.path = Path(path)
        self.linktype = linktype
        self.snaplen = snaplen
        self.nano = nano
        self.records_written = 0
        self._writer: Optional[PcapWriter] = None

    def open(self) -> "CaptureWriter":
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._writer = PcapWriter(
                str(self.path), linktype=self.linktype, snaplen=self.snaplen, nano=self.nano, sync=False
            )
        except OSError as e:
            raise ContainerIOError(
                f"Cannot create capture {self.path}: {e}",
                file_path=str(self.path),
                operation="create",
            ) from e
        return self

    def write(self, record) -> None:
        """Append ``record`` (an :class:`OutputRecord`)."""
        if self._writer is None:
            raise ContainerIOError("Capture is not open", file_path=str(self.path), operation="write")
        try:
            self._writer.write(record.packet)
        except (OSError, struct.error, Scapy_Exception) as e:
            raise ContainerIOError(
                f"Failed to write record to {self.path}: {e}",
                file_path=str(self.path),
                operation="write",
            ) from e
        self.records_written += 1

    def close(self) -> None:
        if self._writer is not None:
            try:
                self._writer.flush()
                self._writer.close()
            except OSError as e:
                raise ContainerIOError(
                    f"Failed to close capture {self.path}: {e}",
                    file_path=str(self.path),
                    operation="close",
                ) from e
            finally:
                self._writer = None

    def __enter__(self) -> "CaptureWriter":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # keep the original failure; a close error here would replace it
        try:
            self.close()
        except ContainerIOError as close_error:
            logger.error(f"{close_error} (while handling {exc_type.__name__})")


class NullSink:
    """Sink that only counts records, used for dry runs."""

    def __init__(self):
        self.records_written = 0

    def write(self, record) -> None:
        self.records_written += 1
