"""
Helpers for reporting where the server can be reached.
"""

from __future__ import annotations

import socket
from typing import Optional

# Any non-loopback address works: connecting a UDP socket sends no packets, it
# only asks the kernel which local interface would route there.
_PROBE_ADDRESS = ("10.255.255.255", 1)


def _is_external(address: str) -> bool:
    return not address.startswith("127.") and address != "0.0.0.0"


def _routed_ip() -> Optional[str]:
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.connect(_PROBE_ADDRESS)
        return sock.getsockname()[0]
    except OSError:
        return None
    finally:
        sock.close()


def _hostname_ips() -> list[str]:
    try:
        infos = socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET)
    except OSError:
        return []
    return [info[4][0] for info in infos]


def get_local_ip() -> Optional[str]:
    """
    Return the first non-loopback IPv4 address of this host, if any.

    The routed interface is preferred; hosts without a route fall back to the
    addresses their hostname resolves to.
    """
    routed = _routed_ip()
    if routed and _is_external(routed):
        return routed
    for address in _hostname_ips():
        if _is_external(address):
            return address
    return None


def describe_addresses(port: int) -> list[str]:
    lines = [f"Local:           http://localhost:{port}"]
    ip = get_local_ip()
    if ip:
        lines.append(f"On Wifi Network: http://{ip}:{port}")
    return lines
