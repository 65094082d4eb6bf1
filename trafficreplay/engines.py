"""Capture engine selection and link-layer sizing helpers."""

from __future__ import annotations

import enum

__all__ = [
    "EngineType",
    "LinkType",
    "link_type_length",
    "afpacket_compute_size",
]


class EngineType(enum.IntEnum):
    """Available engines for intercepting traffic."""

    PCAP = 1 << 0
    PCAP_FILE = 1 << 1
    RAW_SOCKET = 1 << 2
    AF_PACKET = 1 << 3

    @classmethod
    def parse(cls, value: str) -> "EngineType":
        """Parse an engine name; an empty name selects libpcap."""
        try:
            return _ENGINE_BY_NAME[value]
        except KeyError:
            raise ValueError(f"invalid engine {value}") from None

    @property
    def label(self) -> str:
        """The command line name of this engine."""
        return _ENGINE_LABELS[self]

    def __str__(self) -> str:
        return self.label


_ENGINE_LABELS = {
    EngineType.PCAP: "libpcap",
    EngineType.PCAP_FILE: "pcap_file",
    EngineType.RAW_SOCKET: "raw_socket",
    EngineType.AF_PACKET: "af_packet",
}

_ENGINE_BY_NAME = {"": EngineType.PCAP}
_ENGINE_BY_NAME.update({label: engine for engine, label in _ENGINE_LABELS.items()})


class LinkType(enum.IntEnum):
    """Data link types a capture handle may report."""

    NULL = 0
    ETHERNET = 1
    FDDI = 10
    RAW = 101
    LOOP = 108
    LINUX_SLL = 113
    IPNET = 226
    IPV4 = 228
    IPV6 = 229


_LINK_HEADER_LENGTHS = {
    LinkType.ETHERNET: 14,
    LinkType.NULL: 4,
    LinkType.LOOP: 4,
    LinkType.RAW: 0,
    12: 0,
    14: 0,
    LinkType.IPV4: 0,
    LinkType.IPV6: 0,
    LinkType.LINUX_SLL: 16,
    LinkType.FDDI: 13,
    LinkType.IPNET: 24,
}


def link_type_length(link_type: int) -> int:
    """Length of the link-layer header for ``link_type``.

    Raises ValueError for link types whose header size is unknown.
    """
    try:
        return _LINK_HEADER_LENGTHS[int(link_type)]
    except KeyError:
        raise ValueError(f"can not identify link type {int(link_type)}") from None


def afpacket_compute_size(target_size_mb: int, snaplen: int, page_size: int) -> tuple[int, int, int]:
    """Compute ``(frame_size, block_size, num_blocks)`` for an AF_PACKET ring.

    The ring stays just under ``target_size_mb`` megabytes, with a block size
    divisible by both the frame size and the page size.
    """
    if snaplen < page_size:
        frame_size = page_size // (page_size // snaplen)
    else:
        frame_size = (snaplen // page_size + 1) * page_size

    block_size = frame_size * 128
    num_blocks = (target_size_mb * 1024 * 1024) // block_size
    if num_blocks == 0:
        raise ValueError("Interface buffersize is too small")
    return frame_size, block_size, num_blocks