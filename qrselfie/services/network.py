import ipaddress
import logging
import socket

import psutil

logger = logging.getLogger(__name__)


def get_local_ip() -> str:
    """First non-loopback IPv4 address across the host's interfaces, else "localhost"."""
    for name, addrs in psutil.net_if_addrs().items():
        for addr in addrs:
            if addr.family != socket.AF_INET:
                continue
            if ipaddress.ip_address(addr.address).is_loopback:
                continue
            logger.debug("Using interface %s (%s)", name, addr.address)
            return addr.address
    return "localhost"


def resolve_base_url(public_base_url: str, port: int) -> str:
    if public_base_url:
        return public_base_url.rstrip("/")
    return f"http://{get_local_ip()}:{port}"
