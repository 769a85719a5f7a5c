"""
Protocol constants for pysamp
"""

from enum import IntEnum

# Every packet in both directions starts with this
SAMP_MAGIC = b'SAMP'

# Handshake version tag, sent big-endian
SAMP_VERSION = 0x4057

# Timeouts in seconds
HANDSHAKE_TIMEOUT = 5.0
QUERY_TIMEOUT = 3.0

# Receive buffers
HANDSHAKE_RECV_SIZE = 1024
QUERY_RECV_SIZE = 2048

# Query datagram layout: magic(4) + ip(4) + port(2) + opcode(1)
QUERY_HEADER_SIZE = 11

# Length-prefixed strings outside (0, MAX_STRING_LENGTH] read as empty
MAX_STRING_LENGTH = 1024
CLAMPED_STRING_LENGTH = 256

DEFAULT_PORT = 7777
DEFAULT_ENCODING = 'utf-8'


class QueryOpcode(IntEnum):
    """Query opcodes (single ASCII byte at offset 10)"""
    INFO = ord('i')
    RULES = ord('r')  # not used
    CLIENTS = ord('c')  # not used
    DETAILED = ord('d')  # not used


OPCODE_INFO = QueryOpcode.INFO
OPCODE_RULES = QueryOpcode.RULES
OPCODE_CLIENTS = QueryOpcode.CLIENTS
OPCODE_DETAILED = QueryOpcode.DETAILED


class ResponseCode(IntEnum):
    """First byte of a handshake reply"""
    SUCCESS = 0x00
    WRONG_PASSWORD = 0x01
    SERVER_FULL = 0x02
    BANNED = 0x03


# Failure reasons for the known non-success codes
RESPONSE_REASONS = {
    ResponseCode.WRONG_PASSWORD: "wrong password",
    ResponseCode.SERVER_FULL: "server full",
    ResponseCode.BANNED: "banned",
}
