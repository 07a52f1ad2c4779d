"""Listening TCP socket driven by an event loop."""

from __future__ import annotations

import asyncio
import concurrent.futures
import socket
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from .log import logger


@dataclass
class TcpServerHandle:
    """Callbacks of a server: ``accept`` gets each new connection, ``error`` an accept failure."""

    accept: Callable[[socket.socket], Any]
    error: Optional[Callable[[BaseException], Any]] = None


class TcpServer:
    """Accepts connections on ``host:port`` inside ``loop`` and hands them to the handle."""

    def __init__(self, handle: TcpServerHandle, loop: asyncio.AbstractEventLoop, host: str | None, port: int) -> None:
        self._handle = handle
        self._loop = loop
        self._host = host
        self._port = port
        self._listener: socket.socket | None = None
        self._accept_task: asyncio.Task | None = None
        self._stopped = threading.Event()
        self.address: tuple[str, int] | None = None

    def startup(self) -> concurrent.futures.Future:
        """Start listening; the returned future resolves to the bound ``(host, port)``."""
        return asyncio.run_coroutine_threadsafe(self._safe_startup(), self._loop)

    async def _safe_startup(self) -> tuple[str, int]:
        family, kind, proto, _, sockaddr = socket.getaddrinfo(
            self._host, self._port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE
        )[0]
        listener = socket.socket(family, kind, proto)
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind(sockaddr)
            listener.listen(socket.SOMAXCONN)
            listener.setblocking(False)
        except OSError:
            listener.close()
            raise
        self._listener = listener
        name = listener.getsockname()
        self.address = (name[0], name[1])
        self._accept_task = self._loop.create_task(self._accept_loop())
        return self.address

    async def _accept_loop(self) -> None:
        listener = self._listener
        while True:
            try:
                conn, _ = await self._loop.sock_accept(listener)
            except OSError as exc:
                if self._handle.error is not None:
                    self._handle.error(exc)
                return
            try:
                self._handle.accept(conn)
            except Exception:
                logger.exception("accept handler failed")

    def shutdown(self) -> None:
        """Close the listening socket and wait until that is done."""
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._safe_shutdown()
            return
        self._loop.call_soon_threadsafe(self._safe_shutdown)
        self._stopped.wait()

    def _safe_shutdown(self) -> None:
        if self._accept_task is not None:
            self._accept_task.cancel()
            self._accept_task = None
        if self._listener is not None:
            try:
                self._loop.remove_reader(self._listener.fileno())
            except (OSError, ValueError):
                pass
            self._listener.close()
            self._listener = None
        self._stopped.set()