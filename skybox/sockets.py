"""Address helpers for connected or bound sockets.

Every helper answers with an empty string or port 0 when the socket has no
such endpoint (not bound, not connected or closed) instead of raising.
"""

from __future__ import annotations

import socket
from collections.abc import Callable
from typing import Any


def endpoint_address(endpoint: tuple[Any, ...]) -> str:
    """Format an endpoint tuple as ``ip:port``."""
    return f"{endpoint[0]}:{endpoint[1]}"


def _endpoint(getter: Callable[[], Any]) -> tuple[Any, ...] | None:
    try:
        ep = getter()
    except OSError:
        return None
    return ep if isinstance(ep, tuple) else None


def socket_local_address(sock: socket.socket) -> str:
    """``ip:port`` of the local end, or an empty string."""
    ep = _endpoint(sock.getsockname)
    return endpoint_address(ep) if ep else ""


def socket_remote_address(sock: socket.socket) -> str:
    """``ip:port`` of the peer, or an empty string."""
    ep = _endpoint(sock.getpeername)
    return endpoint_address(ep) if ep else ""


def socket_local_ip(sock: socket.socket) -> str:
    ep = _endpoint(sock.getsockname)
    return str(ep[0]) if ep else ""


def socket_local_port(sock: socket.socket) -> int:
    ep = _endpoint(sock.getsockname)
    return int(ep[1]) if ep else 0


def socket_remote_ip(sock: socket.socket) -> str:
    ep = _endpoint(sock.getpeername)
    return str(ep[0]) if ep else ""


def socket_remote_port(sock: socket.socket) -> int:
    ep = _endpoint(sock.getpeername)
    return int(ep[1]) if ep else 0