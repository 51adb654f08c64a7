"""Addresses the API announces at startup."""
import socket
from typing import Dict, Optional, Tuple

LOOPBACK_ADDRESSES = ("127.0.0.1", "localhost")


def get_local_ip(route_target: Tuple[str, int] = ("8.8.8.8", 80)) -> str:
    """LAN address of the interface that routes to route_target, or '127.0.0.1'.

    Connecting a UDP socket only selects a route; nothing is sent.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(route_target)
        ip = str(s.getsockname()[0])
    except OSError:
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip


def service_urls(port: int, local_ip: Optional[str] = None) -> Dict[str, Optional[str]]:
    """URLs for this machine and, when it has a LAN address, for other devices."""
    ip = local_ip if local_ip is not None else get_local_ip()
    return {
        "local": f"http://localhost:{port}",
        "lan": None if ip in LOOPBACK_ADDRESSES else f"http://{ip}:{port}",
    }
