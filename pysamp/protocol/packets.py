"""
Packet builders and parsers for the handshake and query exchanges
"""

import logging
import struct
from typing import Union

from ..exceptions import ProtocolError
from ..models.connection_result import ConnectionOutcome
from ..models.server_info import ServerInfo
from .codec import PacketReader, ip_to_bytes, read_length_prefixed_string
from .constants import (
    DEFAULT_ENCODING,
    OPCODE_INFO,
    QUERY_HEADER_SIZE,
    RESPONSE_REASONS,
    SAMP_MAGIC,
    SAMP_VERSION,
    ResponseCode,
)

logger = logging.getLogger(__name__)


def build_handshake_packet(username: str, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Build the TCP login packet.

    Format: "SAMP" + version (2 bytes, big-endian) + username length (1 byte)
    + username. The length byte is masked to 8 bits; usernames over 255
    bytes produce a wrong length, which the server will reject.
    """
    name = username.encode(encoding)
    packet = bytearray(SAMP_MAGIC)
    packet.extend(struct.pack('>H', SAMP_VERSION))
    packet.append(len(name) & 0xFF)
    packet.extend(name)
    return bytes(packet)


def parse_handshake_response(data: bytes) -> ConnectionOutcome:
    """Classify a non-empty handshake reply by its first byte."""
    if not data:
        raise ProtocolError("Empty handshake response")

    code = data[0]
    if code == ResponseCode.SUCCESS:
        return ConnectionOutcome.success()
    if code in RESPONSE_REASONS:
        return ConnectionOutcome.failed(RESPONSE_REASONS[ResponseCode(code)])
    return ConnectionOutcome.failed(f"unknown error (code: {code})")


def build_query_packet(host: str, port: int, opcode: int = OPCODE_INFO) -> bytes:
    """Build the 11-byte UDP query datagram.

    Format: "SAMP" + 4 IP octets + port (2 bytes, little-endian) + opcode.
    host must already be a dotted-quad literal.
    """
    packet = bytearray(SAMP_MAGIC)
    packet.extend(ip_to_bytes(host))
    packet.append(port & 0xFF)
    packet.append((port >> 8) & 0xFF)
    packet.append(int(opcode) & 0xFF)
    return bytes(packet)


def parse_info_response(data: Union[bytes, bytearray], host: str, port: int,
                        encoding: str = DEFAULT_ENCODING) -> ServerInfo:
    """Decode an info reply into a ServerInfo.

    The first 11 bytes echo the request header and are skipped without
    checking them. Raises ProtocolError on a short or truncated reply.
    """
    if len(data) < QUERY_HEADER_SIZE:
        raise ProtocolError(f"Info response too short: {len(data)} bytes")

    reader = PacketReader(data, QUERY_HEADER_SIZE)
    is_passworded = reader.read_byte() == 1
    players_online = reader.read_uint16()
    max_players = reader.read_uint16()
    hostname = read_length_prefixed_string(reader, encoding)
    game_mode = read_length_prefixed_string(reader, encoding)
    language = read_length_prefixed_string(reader, encoding)

    logger.debug(f"Parsed info from {host}:{port}: {hostname!r} "
                 f"{players_online}/{max_players} {game_mode!r} {language!r}")

    return ServerInfo(
        hostname=hostname,
        ip=host,
        port=port,
        players_online=players_online,
        max_players=max_players,
        game_mode=game_mode,
        language=language,
        is_passworded=is_passworded,
    )
