"""
pysamp - Handshake Client
Opens a TCP session to a SA-MP server and classifies the login reply.
"""

import logging
import select
import socket
import threading
from typing import Optional

from .config import ClientConfig
from .models.connection_result import ConnectionOutcome
from .protocol.packets import build_handshake_packet, parse_handshake_response

logger = logging.getLogger(__name__)


class SAMPConnection:
    """
    Single-attempt handshake client for one SA-MP server.

    Usage:
        conn = SAMPConnection("127.0.0.1", 7777)
        outcome = conn.connect("player", "secret")
        if outcome.is_success:
            ...
        conn.disconnect()

    Or with context manager:
        with SAMPConnection("127.0.0.1", 7777) as conn:
            print(conn.connect("player", "secret"))

    The socket belongs to this instance and must not be shared between
    concurrent callers. disconnect() may be called from another thread to
    abort a connect() that is waiting for the reply.
    """

    def __init__(self, host: str, port: int, config: Optional[ClientConfig] = None):
        """
        Create a new connection.

        Args:
            host: Server hostname or IP
            port: Server port
            config: Timeouts, buffer size and encoding (defaults if omitted)

        Raises:
            ConfigValidationError: a config value is out of range
        """
        self.host = host
        self.port = port
        self.config = (config or ClientConfig()).validate()
        self._socket: Optional[socket.socket] = None
        self._connected = False
        self._closed = False
        self._outcome: Optional[ConnectionOutcome] = None
        self._lock = threading.Lock()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
        return False

    @property
    def sock(self) -> Optional[socket.socket]:
        """The open socket after a successful handshake, for the caller to use"""
        return self._socket

    @property
    def outcome(self) -> Optional[ConnectionOutcome]:
        """Last outcome; CONNECTING while connect() is running, None before the first call"""
        return self._outcome

    def connect(self, username: str, password: str) -> ConnectionOutcome:
        """
        Attempt the handshake.

        The password is accepted but not sent: the login packet carries
        only the username. Never raises for network failures; every
        failure comes back as a FAILED outcome with a readable reason.

        Args:
            username: Player name sent in the login packet
            password: Server password (currently unused on the wire)

        Returns:
            SUCCESS, or FAILED(reason)
        """
        if self._closed:
            return self._finish(ConnectionOutcome.failed("session closed"))

        # A second connect replaces any live session
        self._release_socket()
        self._outcome = ConnectionOutcome.connecting()
        logger.info(f"Connecting to {self.host}:{self.port} as {username}")
        if password:
            logger.debug("Password supplied but the login packet does not carry it")

        timeout = self.config.connect_timeout
        sock = None
        try:
            sock = socket.create_connection((self.host, self.port), timeout=timeout)
            sock.settimeout(timeout)
            with self._lock:
                if self._closed:
                    sock.close()
                    return self._finish(ConnectionOutcome.failed("session closed"))
                self._socket = sock

            packet = build_handshake_packet(username, self.config.encoding)
            sock.sendall(packet)
            logger.debug(f"Sent handshake ({len(packet)} bytes)")

            response = sock.recv(self.config.recv_buffer_size)
            if not response and self._closed:
                outcome = ConnectionOutcome.failed("connection error: socket closed")
            elif not response:
                outcome = ConnectionOutcome.failed("no response from server")
            else:
                logger.debug(f"Received {len(response)} bytes, code {response[0]:#04x}")
                outcome = parse_handshake_response(response)

        except socket.timeout:
            outcome = ConnectionOutcome.failed("server not responding")
        except OSError as e:
            outcome = ConnectionOutcome.failed(f"connection error: {e}")
        except Exception as e:
            logger.exception("Unexpected error during handshake")
            outcome = ConnectionOutcome.failed(f"unknown error: {e}")

        if outcome.is_success:
            with self._lock:
                # disconnect() may have run while we were reading
                self._connected = self._socket is sock and not self._closed
            if not self._connected:
                outcome = ConnectionOutcome.failed("session closed")
        if outcome.is_success:
            logger.info(f"Connected to {self.host}:{self.port}")
        else:
            logger.warning(f"Connection to {self.host}:{self.port} failed: {outcome.reason}")
            self._release_socket(sock)

        return self._finish(outcome)

    def disconnect(self):
        """Close the session. Never raises; further connect() calls fail."""
        with self._lock:
            was_connected = self._connected
            self._closed = True
        self._release_socket()
        if was_connected:
            logger.info(f"Disconnected from {self.host}:{self.port}")

    def is_connected(self) -> bool:
        """True only while the handshake succeeded and the socket is still open."""
        if not self._connected:
            return False
        sock = self._socket
        if sock is None or not _socket_is_open(sock):
            with self._lock:
                self._connected = False
            return False
        return True

    def _finish(self, outcome: ConnectionOutcome) -> ConnectionOutcome:
        self._outcome = outcome
        return outcome

    def _release_socket(self, sock: Optional[socket.socket] = None):
        """Close the current socket (or sock, if given) and clear connected state."""
        with self._lock:
            if sock is None:
                sock = self._socket
            if sock is self._socket:
                self._socket = None
                self._connected = False
        if sock is None:
            return
        try:
            # Wakes a recv() blocked in another thread
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        try:
            sock.close()
        except OSError:
            pass


def _socket_is_open(sock: socket.socket) -> bool:
    """Check the socket has not been closed locally or by the peer."""
    if sock.fileno() == -1:
        return False
    try:
        readable, _, _ = select.select([sock], [], [], 0)
        if not readable:
            return True
        # Readable with nothing to peek means the peer sent FIN
        return sock.recv(1, socket.MSG_PEEK) != b''
    except (OSError, ValueError):
        return False
