"""
Shared fixtures: loopback SA-MP servers running in background threads
"""

import socket
import struct
import threading
from typing import List, Optional

import pytest


def build_info_reply(hostname: str = "Test Server", game_mode: str = "DM", language: str = "EN",
                     players: int = 5, max_players: int = 50, passworded: int = 0,
                     header: bytes = b'SAMP\x7f\x00\x00\x01\x61\x1ei') -> bytes:
    """Craft an info reply the way a server would send it"""
    data = bytearray(header)
    data.append(passworded)
    data.extend(struct.pack('>HH', players, max_players))
    for text in (hostname, game_mode, language):
        encoded = text.encode('utf-8')
        data.extend(struct.pack('>i', len(encoded)))
        data.extend(encoded)
    return bytes(data)


class FakeHandshakeServer:
    """TCP server that answers one handshake.

    response=None keeps the connection open without replying;
    response=b'' closes it without replying.
    """

    def __init__(self, response: Optional[bytes]):
        self.response = response
        self.received: List[bytes] = []
        self._stop = threading.Event()
        self._conns: List[socket.socket] = []
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._listener.bind(("127.0.0.1", 0))
        self._listener.listen(1)
        self._listener.settimeout(0.1)
        self.port = self._listener.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self):
        while not self._stop.is_set():
            try:
                conn, _ = self._listener.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            self._conns.append(conn)
            conn.settimeout(2.0)
            try:
                self.received.append(conn.recv(1024))
            except OSError:
                continue
            if self.response is None:
                continue
            if self.response:
                conn.sendall(self.response)
            else:
                conn.close()

    def close_clients(self):
        for conn in self._conns:
            try:
                conn.close()
            except OSError:
                pass

    def stop(self):
        self._stop.set()
        self.close_clients()
        self._listener.close()
        self._thread.join(timeout=2.0)


class FakeQueryServer:
    """UDP server that answers every datagram with reply (or ignores it when None)"""

    def __init__(self, reply: Optional[bytes]):
        self.reply = reply
        self.received: List[bytes] = []
        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.settimeout(0.1)
        self.port = self._sock.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self):
        while not self._stop.is_set():
            try:
                data, addr = self._sock.recvfrom(2048)
            except socket.timeout:
                continue
            except OSError:
                return
            self.received.append(data)
            if self.reply is not None:
                self._sock.sendto(self.reply, addr)

    def stop(self):
        self._stop.set()
        self._thread.join(timeout=2.0)
        self._sock.close()


@pytest.fixture
def handshake_server():
    """Factory fixture: handshake_server(response) -> FakeHandshakeServer"""
    servers = []

    def factory(response: Optional[bytes]) -> FakeHandshakeServer:
        server = FakeHandshakeServer(response)
        servers.append(server)
        return server

    yield factory
    for server in servers:
        server.stop()


@pytest.fixture
def query_server():
    """Factory fixture: query_server(reply) -> FakeQueryServer"""
    servers = []

    def factory(reply: Optional[bytes]) -> FakeQueryServer:
        server = FakeQueryServer(reply)
        servers.append(server)
        return server

    yield factory
    for server in servers:
        server.stop()


@pytest.fixture
def closed_port() -> int:
    """A loopback port with nothing listening on it"""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


@pytest.fixture
def info_reply():
    """The build_info_reply helper, for crafting query replies"""
    return build_info_reply
