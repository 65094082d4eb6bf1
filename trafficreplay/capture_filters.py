"""Builders for the BPF filter expressions applied to capture handles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

__all__ = [
    "Interface",
    "is_device",
    "interface_addresses",
    "listen_all",
    "ports_filter",
    "hosts_filter",
    "build_filter",
]

_WINDOWS_LOOPBACK = r"\Device\NPF_Loopback"
_MAX_PORT = (1 << 16) - 1


@dataclass(frozen=True)
class Interface:
    """A capture device: its name and the IP addresses bound to it."""

    name: str = ""
    addresses: tuple[str, ...] = ()


def is_device(addr: str, interface: Interface) -> bool:
    """True when ``addr`` names ``interface`` or one of its addresses."""
    # The npcap loopback device on Windows carries no addresses.
    if addr == "127.0.0.1" and interface.name == _WINDOWS_LOOPBACK:
        return True
    if addr == interface.name:
        return True
    return any(ip == addr for ip in interface.addresses)


def interface_addresses(interface: Interface) -> list[str]:
    """The addresses of ``interface`` as strings."""
    return list(interface.addresses)


def listen_all(addr: str) -> bool:
    """True when ``addr`` means every local address."""
    return addr in ("", "0.0.0.0", "[::]", "::")


def ports_filter(transport: str, direction: str, ports: Sequence[int]) -> str:
    """Filter matching ``ports`` in ``direction``; no port or port 0 means all ports."""
    if not ports or ports[0] == 0:
        return f"{transport} {direction} portrange 0-{_MAX_PORT}"
    return " or ".join(f"{transport} {direction} port {port}" for port in ports)


def hosts_filter(direction: str, hosts: Iterable[str]) -> str:
    """Filter matching any of ``hosts`` in ``direction``."""
    return " or ".join(f"{direction} host {host}" for host in hosts)


def _directed(transport: str, direction: str, ports: Sequence[int],
              hosts: Sequence[str], promiscuous: bool) -> str:
    port_part = ports_filter(transport, direction, ports)
    if hosts and not promiscuous:
        return f"(({port_part}) and ({hosts_filter(direction, hosts)}))"
    return f"({port_part})"


def build_filter(
    host: str,
    ports: Sequence[int],
    interface: Interface,
    transport: str = "tcp",
    promiscuous: bool = False,
    track_response: bool = False,
) -> str:
    """The automatic filter for capturing traffic to ``host`` on ``interface``."""
    hosts: list[str] = [host]
    if listen_all(host) or is_device(host, interface):
        hosts = interface_addresses(interface)

    result = _directed(transport, "dst", ports, hosts, promiscuous)
    if track_response:
        result = f"{result} or {_directed(transport, 'src', ports, hosts, promiscuous)}"
    return result