import asyncio
import socket
import threading

import pytest

from skybox.tcp_server import TcpServer, TcpServerHandle


@pytest.fixture
def loop():
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    yield loop
    loop.call_soon_threadsafe(loop.stop)
    thread.join(5)
    loop.close()


class _Collector:
    def __init__(self, expected=1):
        self.sockets = []
        self.expected = expected
        self.done = threading.Event()
        self.lock = threading.Lock()

    def __call__(self, conn):
        with self.lock:
            self.sockets.append(conn)
            if len(self.sockets) >= self.expected:
                self.done.set()


def test_accepts_connection(loop):
    collected = _Collector()
    server = TcpServer(TcpServerHandle(accept=collected), loop, "127.0.0.1", 0)
    address = server.startup().result(5)
    client = socket.create_connection(address)
    try:
        assert collected.done.wait(5)
        accepted = collected.sockets[0]
        assert accepted.getpeername() == client.getsockname()
        assert server.address == address
    finally:
        client.close()
        for conn in collected.sockets:
            conn.close()
        server.shutdown()


def test_accepts_several_connections(loop):
    collected = _Collector(expected=2)
    server = TcpServer(TcpServerHandle(accept=collected), loop, "127.0.0.1", 0)
    address = server.startup().result(5)
    clients = [socket.create_connection(address) for _ in range(2)]
    try:
        assert collected.done.wait(5)
        peers = {conn.getpeername() for conn in collected.sockets}
        assert peers == {c.getsockname() for c in clients}
    finally:
        for c in clients:
            c.close()
        for conn in collected.sockets:
            conn.close()
        server.shutdown()


def test_shutdown_stops_listening(loop):
    server = TcpServer(TcpServerHandle(accept=lambda conn: conn.close()), loop, "127.0.0.1", 0)
    address = server.startup().result(5)
    server.shutdown()
    with pytest.raises(ConnectionRefusedError):
        socket.create_connection(address, timeout=2)


def test_port_in_use_fails_startup(loop):
    occupant = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    occupant.bind(("127.0.0.1", 0))
    occupant.listen()
    try:
        port = occupant.getsockname()[1]
        server = TcpServer(TcpServerHandle(accept=lambda conn: conn.close()), loop, "127.0.0.1", port)
        with pytest.raises(OSError):
            server.startup().result(5)
    finally:
        occupant.close()