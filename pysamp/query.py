"""
pysamp - Query Client
Fetches live server metadata over the UDP query protocol.
"""

import logging
import socket
from typing import Optional

from .config import ClientConfig
from .exceptions import PySampError, ServerTimeoutError, TransportError
from .models.server_info import ServerInfo
from .protocol.constants import OPCODE_INFO
from .protocol.packets import build_query_packet, parse_info_response

logger = logging.getLogger(__name__)


class ServerQuery:
    """Client for the SA-MP UDP query protocol.

    Each call opens its own socket, sends one datagram, waits for one
    reply and closes the socket again. Instances hold only configuration
    and can be shared between threads.
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        """Initialize query client.

        Args:
            config: Timeout, buffer size and encoding (defaults if omitted)

        Raises:
            ConfigValidationError: a config value is out of range
        """
        self.config = (config or ClientConfig()).validate()

    def get_server_info(self, host: str, port: int) -> Optional[ServerInfo]:
        """Query basic server information.

        Args:
            host: Server IPv4 address as a dotted quad (no DNS lookup)
            port: Server port

        Returns:
            ServerInfo, or None if the server was unreachable or the reply
            could not be decoded. The two cases are not distinguished.
        """
        try:
            return self.request_info(host, port)
        except PySampError as e:
            logger.debug(f"Query to {host}:{port} failed: {e}")
            return None

    def request_info(self, host: str, port: int) -> ServerInfo:
        """Query basic server information, raising on failure.

        Raises:
            FormatError: host is not a dotted-quad IPv4 literal
            ServerTimeoutError: no reply within config.query_timeout
            TransportError: the datagram could not be sent or received
            ProtocolError: the reply was too short or truncated
        """
        packet = build_query_packet(host, port, OPCODE_INFO)
        data = self._exchange(host, port, packet)
        return parse_info_response(data, host, port, self.config.encoding)

    def _exchange(self, host: str, port: int, packet: bytes) -> bytes:
        """Send one datagram and return the first reply."""
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                sock.settimeout(self.config.query_timeout)
                sock.sendto(packet, (host, port))
                logger.debug(f"Sent query opcode {chr(packet[-1])!r} to {host}:{port}")
                data, _ = sock.recvfrom(self.config.query_buffer_size)
        except socket.timeout:
            raise ServerTimeoutError(f"No reply from {host}:{port} "
                                     f"within {self.config.query_timeout}s")
        except (OSError, OverflowError) as e:
            raise TransportError(f"Query to {host}:{port} failed: {e}") from e

        logger.debug(f"Received {len(data)} bytes from {host}:{port}")
        return data


def get_server_info(host: str, port: int, timeout: Optional[float] = None) -> Optional[ServerInfo]:
    """
    Quick query helper.

    Args:
        host: Server IPv4 address
        port: Server port
        timeout: Receive timeout in seconds (default 3.0)

    Returns:
        ServerInfo or None
    """
    config = ClientConfig()
    if timeout is not None:
        config.query_timeout = timeout
    return ServerQuery(config).get_server_info(host, port)
