"""One-shot HTTP POST client running on an event loop."""

from __future__ import annotations

import asyncio
import ipaddress
import secrets
from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

from .log import logger

TIMEOUT = 30.0
USER_AGENT = "skybox/http"

HttpCallback = Callable[[BaseException | None, str], Any]


def _parse_url(url: str) -> tuple[str, int, str]:
    parts = urlsplit(url)
    host = parts.hostname
    if not parts.scheme or not host:
        raise ValueError(f"invalid url {url!r}")
    port = parts.port
    if port is None:
        port = 443 if parts.scheme == "https" else 80
    ipaddress.ip_address(host)
    return host, port, parts.path or "/"


def _build_request(host: str, target: str, data: str | bytes) -> bytes:
    body = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    head = (
        f"POST {target} HTTP/1.1\r\n"
        f"Host: {host}\r\n"
        "Content-Type: application/json\r\n"
        f"User-Agent: {USER_AGENT}\r\n"
        f"Content-Length: {len(body)}\r\n"
        "\r\n"
    )
    return head.encode("latin-1") + body


async def _read_chunked(reader: asyncio.StreamReader) -> bytes:
    parts = []
    while True:
        line = await reader.readuntil(b"\r\n")
        size = int(line.split(b";")[0].strip(), 16)
        if size == 0:
            while await reader.readuntil(b"\r\n") != b"\r\n":
                pass
            return b"".join(parts)
        parts.append(await reader.readexactly(size))
        await reader.readexactly(2)


async def _read_response(reader: asyncio.StreamReader) -> bytes:
    head = await reader.readuntil(b"\r\n\r\n")
    lines = head.decode("latin-1").split("\r\n")
    status = lines[0].split()
    if len(status) < 2 or not status[0].startswith("HTTP/"):
        raise ValueError(f"bad status line {lines[0]!r}")
    headers = {}
    for line in lines[1:]:
        if not line:
            continue
        name, sep, value = line.partition(":")
        if not sep:
            raise ValueError(f"bad header line {line!r}")
        headers[name.strip().lower()] = value.strip()
    if "chunked" in headers.get("transfer-encoding", "").lower():
        return await _read_chunked(reader)
    if "content-length" in headers:
        return await reader.readexactly(int(headers["content-length"]))
    if status[1] in ("204", "304") or status[1].startswith("1"):
        return b""
    return await reader.read()


class HttpClient:
    """Sends one JSON POST and reports ``(error, body)`` to a callback."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.id = secrets.token_hex(4)
        self._loop = loop
        self._callback: HttpCallback | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._shutdown = False

    def post(self, url: str, data: str | bytes, callback: HttpCallback) -> None:
        """POST ``data`` to ``url``; the host must be an IP address literal."""
        self._callback = callback
        try:
            host, port, target = _parse_url(url)
        except ValueError as exc:
            logger.error("%s invalid url %s", self.id, url)
            self._call(exc, "")
            return
        logger.info("%s url %s host %s port %d target %s", self.id, url, host, port, target)
        request = _build_request(host, target, data)
        asyncio.run_coroutine_threadsafe(self._exchange(host, port, request), self._loop)

    async def _exchange(self, host: str, port: int, request: bytes) -> None:
        try:
            reader, writer = await asyncio.wait_for(asyncio.open_connection(host, port), TIMEOUT)
        except (OSError, asyncio.TimeoutError) as exc:
            logger.error("%s connect failed %s", self.id, exc)
            self._call(exc, "")
            self.shutdown()
            return
        self._writer = writer
        try:
            writer.write(request)
            await asyncio.wait_for(writer.drain(), TIMEOUT)
        except (OSError, asyncio.TimeoutError) as exc:
            logger.error("%s write failed %s", self.id, exc)
            self._call(exc, "")
            self.shutdown()
            return
        logger.debug("%s write %d bytes", self.id, len(request))
        error: BaseException | None = None
        body = b""
        try:
            body = await asyncio.wait_for(_read_response(reader), TIMEOUT)
        except (OSError, EOFError, ValueError, asyncio.TimeoutError, asyncio.LimitOverrunError) as exc:
            logger.error("%s read failed %s", self.id, exc)
            error = exc
        self._call(error, body.decode("utf-8", "surrogateescape"))
        self.shutdown()

    def _call(self, error: BaseException | None, body: str) -> None:
        if self._callback is not None:
            self._callback(error, body)

    def shutdown(self) -> None:
        """Close the connection, once, on the client's loop."""
        self._loop.call_soon_threadsafe(self._safe_shutdown)

    def _safe_shutdown(self) -> None:
        if self._shutdown:
            return
        self._shutdown = True
        logger.debug("%s safe shutdown", self.id)
        if self._writer is not None:
            self._writer.close()