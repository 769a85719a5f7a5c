"""
Protocol Module - wire formats for the SA-MP handshake and query

- constants: magic, version tag, opcodes, response codes
- codec: byte cursor and primitive string/IP encoders
- packets: packet builders and reply parsers
"""

from .codec import (
    PacketReader,
    bytes_to_ip,
    ip_to_bytes,
    read_clamped_string,
    read_length_prefixed_string,
    write_length_prefixed_string,
)
from .constants import QueryOpcode, ResponseCode
from .packets import (
    build_handshake_packet,
    build_query_packet,
    parse_handshake_response,
    parse_info_response,
)

__all__ = [
    'PacketReader',
    'bytes_to_ip',
    'ip_to_bytes',
    'read_clamped_string',
    'read_length_prefixed_string',
    'write_length_prefixed_string',
    'QueryOpcode',
    'ResponseCode',
    'build_handshake_packet',
    'build_query_packet',
    'parse_handshake_response',
    'parse_info_response',
]
