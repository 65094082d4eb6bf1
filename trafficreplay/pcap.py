"""Writer for the classic libpcap capture file format (v2.4, little endian)."""

from __future__ import annotations

import struct
import time
from dataclasses import dataclass
from typing import BinaryIO, Optional

__all__ = [
    "MAGIC_NANOSECONDS",
    "MAGIC_MICROSECONDS",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "CaptureInfo",
    "PcapWriter",
]

MAGIC_NANOSECONDS = 0xA1B23C4D
MAGIC_MICROSECONDS = 0xA1B2C3D4
VERSION_MAJOR = 2
VERSION_MINOR = 4

_NANOS_PER_MICRO = 1000
_NANOS_PER_NANO = 1
_UINT32_MASK = 0xFFFFFFFF
_FILE_HEADER = struct.Struct("<IHHIIII")
_PACKET_HEADER = struct.Struct("<IIII")


@dataclass
class CaptureInfo:
    """Metadata of one captured packet; ``timestamp_ns`` of None means now."""

    capture_length: int
    length: int
    timestamp_ns: Optional[int] = None
    interface_index: int = 0


class PcapWriter:
    """Writes packet records to a binary stream in pcap format."""

    def __init__(self, stream: BinaryIO, nanos: bool = False) -> None:
        self._stream = stream
        self._scale = _NANOS_PER_NANO if nanos else _NANOS_PER_MICRO

    def write_file_header(self, snaplen: int, link_type: int) -> None:
        """Write the global header; call exactly once for a new file."""
        magic = MAGIC_MICROSECONDS if self._scale == _NANOS_PER_MICRO else MAGIC_NANOSECONDS
        self._stream.write(
            _FILE_HEADER.pack(
                magic,
                VERSION_MAJOR,
                VERSION_MINOR,
                0,
                0,
                snaplen & _UINT32_MASK,
                link_type & _UINT32_MASK,
            )
        )

    def write_packet(self, info: CaptureInfo, data: bytes) -> None:
        """Write one packet record header followed by its data."""
        if info.capture_length != len(data):
            raise ValueError(
                f"capture length {info.capture_length} does not match data length {len(data)}"
            )
        if info.capture_length > info.length:
            raise ValueError(f"invalid capture info {info!r}:  capture length > length")
        ts = info.timestamp_ns if info.timestamp_ns is not None else time.time_ns()
        secs, nanos = divmod(ts, 1_000_000_000)
        self._stream.write(
            _PACKET_HEADER.pack(
                secs & _UINT32_MASK,
                (nanos // self._scale) & _UINT32_MASK,
                info.capture_length & _UINT32_MASK,
                info.length & _UINT32_MASK,
            )
        )
        self._stream.write(bytes(data))