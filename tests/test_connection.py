"""
Tests for the handshake client against loopback servers
"""

import threading
import time

import pytest

from pysamp.config import ClientConfig, ConfigValidationError
from pysamp.connection import SAMPConnection


def fast_config(timeout: float = 0.3) -> ClientConfig:
    return ClientConfig(connect_timeout=timeout)


def wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


class TestConnect:
    """Test handshake outcomes"""

    def test_success(self, handshake_server):
        server = handshake_server(b'\x00')
        conn = SAMPConnection("127.0.0.1", server.port, fast_config())
        outcome = conn.connect("player", "secret")
        try:
            assert outcome.is_success
            assert conn.outcome == outcome
            assert conn.is_connected()
            assert conn.sock is not None
        finally:
            conn.disconnect()

    def test_sends_username_but_not_password(self, handshake_server):
        server = handshake_server(b'\x00')
        with SAMPConnection("127.0.0.1", server.port, fast_config()) as conn:
            conn.connect("player", "hunter2")
        assert wait_for(lambda: server.received)
        assert server.received[0] == b'SAMP\x40\x57\x06player'
        assert b'hunter2' not in server.received[0]

    @pytest.mark.parametrize("response,reason", [
        (b'\x01', "wrong password"),
        (b'\x02', "server full"),
        (b'\x03', "banned"),
        (b'\x07\x00\x00\x00', "unknown error (code: 7)"),
    ])
    def test_rejections(self, handshake_server, response, reason):
        server = handshake_server(response)
        conn = SAMPConnection("127.0.0.1", server.port, fast_config())
        outcome = conn.connect("player", "")
        assert outcome.is_failed
        assert outcome.reason == reason
        assert not conn.is_connected()
        assert conn.sock is None

    def test_no_response(self, handshake_server):
        server = handshake_server(b'')
        outcome = SAMPConnection("127.0.0.1", server.port, fast_config()).connect("player", "")
        assert outcome.reason == "no response from server"

    def test_timeout(self, handshake_server):
        server = handshake_server(None)
        outcome = SAMPConnection("127.0.0.1", server.port, fast_config(0.2)).connect("player", "")
        assert outcome.is_failed
        assert outcome.reason == "server not responding"

    def test_refused(self, closed_port):
        outcome = SAMPConnection("127.0.0.1", closed_port, fast_config()).connect("player", "")
        assert outcome.is_failed
        assert outcome.reason.startswith("connection error: ")

    def test_retry_after_failure(self, handshake_server):
        server = handshake_server(b'\x02')
        conn = SAMPConnection("127.0.0.1", server.port, fast_config())
        assert conn.connect("player", "").reason == "server full"
        server.response = b'\x00'
        try:
            assert conn.connect("player", "").is_success
        finally:
            conn.disconnect()

    def test_outcome_is_connecting_while_pending(self, handshake_server):
        server = handshake_server(None)
        conn = SAMPConnection("127.0.0.1", server.port, fast_config(1.0))
        assert conn.outcome is None
        worker = threading.Thread(target=conn.connect, args=("player", ""))
        worker.start()
        try:
            assert wait_for(lambda: conn.outcome is not None and conn.outcome.is_connecting)
        finally:
            worker.join()
        assert conn.outcome.is_failed


class TestDisconnect:
    """Test session teardown"""

    def test_disconnect_after_success(self, handshake_server):
        server = handshake_server(b'\x00')
        conn = SAMPConnection("127.0.0.1", server.port, fast_config())
        assert conn.connect("player", "").is_success
        conn.disconnect()
        assert not conn.is_connected()
        assert conn.sock is None

    def test_disconnect_without_connect(self):
        conn = SAMPConnection("127.0.0.1", 7777)
        conn.disconnect()
        conn.disconnect()
        assert not conn.is_connected()

    def test_not_reusable_after_disconnect(self, handshake_server):
        server = handshake_server(b'\x00')
        conn = SAMPConnection("127.0.0.1", server.port, fast_config())
        conn.disconnect()
        outcome = conn.connect("player", "")
        assert outcome.reason == "session closed"
        assert not server.received

    def test_peer_close_is_detected(self, handshake_server):
        server = handshake_server(b'\x00')
        conn = SAMPConnection("127.0.0.1", server.port, fast_config())
        try:
            assert conn.connect("player", "").is_success
            server.close_clients()
            assert wait_for(lambda: not conn.is_connected())
            assert conn._connected is False
            assert not conn._lock.locked()
        finally:
            conn.disconnect()

    def test_disconnect_aborts_pending_read(self, handshake_server):
        server = handshake_server(None)
        conn = SAMPConnection("127.0.0.1", server.port, fast_config(3.0))
        results = []
        worker = threading.Thread(target=lambda: results.append(conn.connect("player", "")))
        worker.start()
        assert wait_for(lambda: server.received)

        started = time.monotonic()
        conn.disconnect()
        worker.join(timeout=5.0)

        assert results and results[0].is_failed
        assert results[0].reason.startswith("connection error")
        assert time.monotonic() - started < 2.0
        assert not conn.is_connected()


class TestConnectionConfig:
    """Test that bad settings are rejected before any connect is made"""

    @pytest.mark.parametrize("overrides", [
        {"connect_timeout": -1},
        {"encoding": "no-such-codec"},
        {"recv_buffer_size": 0},
    ])
    def test_invalid_config_rejected_at_construction(self, overrides):
        with pytest.raises(ConfigValidationError):
            SAMPConnection("127.0.0.1", 7777, ClientConfig(**overrides))
