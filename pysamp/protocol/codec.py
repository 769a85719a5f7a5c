"""
Binary codec for SA-MP packets.

Primitive readers and writers shared by the handshake and query clients:
a byte cursor, clamped and length-prefixed strings, and dotted-quad IPv4
conversion. Nothing here holds state beyond a single PacketReader.
"""

import struct
from typing import Union

from ..exceptions import FormatError, InsufficientDataError
from .constants import CLAMPED_STRING_LENGTH, DEFAULT_ENCODING, MAX_STRING_LENGTH


class PacketReader:
    """Sequential reader over a byte buffer"""

    def __init__(self, data: Union[bytes, bytearray], pos: int = 0):
        self.data = bytes(data)
        self.pos = pos

    def remaining(self) -> int:
        """Bytes remaining to read"""
        return max(0, len(self.data) - self.pos)

    def has_remaining(self) -> bool:
        return self.pos < len(self.data)

    def skip(self, count: int):
        """Advance past count bytes"""
        if self.remaining() < count:
            raise InsufficientDataError(f"Cannot skip {count} bytes, {self.remaining()} left")
        self.pos += count

    def read_byte(self) -> int:
        """Read a single unsigned byte"""
        if self.pos >= len(self.data):
            raise InsufficientDataError("End of data reached")
        value = self.data[self.pos]
        self.pos += 1
        return value

    def read_bytes(self, count: int) -> bytes:
        """Read exactly count bytes"""
        if self.remaining() < count:
            raise InsufficientDataError(f"Need {count} bytes, {self.remaining()} left")
        value = self.data[self.pos:self.pos + count]
        self.pos += count
        return value

    def read_uint16(self) -> int:
        """Read unsigned 16-bit big-endian integer"""
        return struct.unpack('>H', self.read_bytes(2))[0]

    def read_int32(self) -> int:
        """Read signed 32-bit big-endian integer"""
        return struct.unpack('>i', self.read_bytes(4))[0]


def read_clamped_string(reader: PacketReader, max_length: int = CLAMPED_STRING_LENGTH,
                        encoding: str = DEFAULT_ENCODING) -> str:
    """
    Read a zero-terminated string of at most max_length bytes.

    Stops at the first zero byte (consumed, not returned), after max_length
    bytes, or when the buffer runs out. Never raises on exhaustion.
    """
    result = bytearray()
    while reader.has_remaining() and len(result) < max_length:
        byte = reader.read_byte()
        if byte == 0:
            break
        result.append(byte)
    return result.decode(encoding, errors='replace')


def write_length_prefixed_string(buffer: bytearray, value: str,
                                 encoding: str = DEFAULT_ENCODING) -> bytearray:
    """Append a 4-byte signed big-endian byte length followed by the bytes"""
    encoded = value.encode(encoding)
    buffer.extend(struct.pack('>i', len(encoded)))
    buffer.extend(encoded)
    return buffer


def read_length_prefixed_string(reader: PacketReader, encoding: str = DEFAULT_ENCODING) -> str:
    """
    Read a string preceded by a 4-byte signed big-endian length.

    A length of zero, a negative length, or one above MAX_STRING_LENGTH
    yields "" and leaves the reader directly after the length field; the
    payload is not skipped.
    """
    length = reader.read_int32()
    if length <= 0 or length > MAX_STRING_LENGTH:
        return ""
    return reader.read_bytes(length).decode(encoding, errors='replace')


def ip_to_bytes(ip: str) -> bytes:
    """Convert a dotted-quad IPv4 string to 4 bytes"""
    parts = ip.split('.')
    if len(parts) != 4:
        raise FormatError(f"Invalid IPv4 address: {ip!r}")

    octets = bytearray()
    for part in parts:
        if not (part.isascii() and part.isdigit()):
            raise FormatError(f"Invalid IPv4 address: {ip!r}")
        value = int(part)
        if value > 255:
            raise FormatError(f"Octet out of range in {ip!r}: {value}")
        octets.append(value)
    return bytes(octets)


def bytes_to_ip(data: Union[bytes, bytearray, list]) -> str:
    """Convert 4 bytes to a dotted-quad string"""
    return '.'.join(str(b & 0xFF) for b in data)
