"""
Client identity derivation for claim throttling.

The identity is an IP address string: the first hop of X-Forwarded-For
when a proxy set it, otherwise the transport peer. Equivalent spellings of
the same address collapse to one form so the limiter sees one client.
"""
import ipaddress
from typing import Optional

UNKNOWN_IDENTITY = "unknown"
IPV4_LOOPBACK = "127.0.0.1"


def normalize_ip(ip: str) -> str:
    """
    Canonicalize an address string.

    ::ffff:a.b.c.d becomes a.b.c.d and ::1 becomes 127.0.0.1. Strings that
    are not IP addresses are returned stripped but otherwise unchanged.
    """
    ip = ip.strip()
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return ip

    if isinstance(address, ipaddress.IPv6Address):
        if address.ipv4_mapped is not None:
            return str(address.ipv4_mapped)
        if address.is_loopback:
            return IPV4_LOOPBACK

    return str(address)


def resolve_client_identity(forwarded_for: Optional[str], peer_host: Optional[str]) -> str:
    """
    Derive the throttle identity for a request.

    Args:
        forwarded_for: Raw X-Forwarded-For header value, if any
        peer_host: Transport-level peer address, if known

    Returns:
        Normalized identity string, "unknown" when nothing is available
    """
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return normalize_ip(first_hop)

    if peer_host:
        return normalize_ip(peer_host)

    return UNKNOWN_IDENTITY
