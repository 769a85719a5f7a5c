"""
Exceptions raised by pysamp

Only ServerQuery.request_info lets these escape to callers; the handshake
and get_server_info convert them into outcomes.
"""


class PySampError(Exception):
    """Base exception for pysamp errors"""
    pass


class ServerTimeoutError(PySampError):
    """Raised when the server does not answer within the timeout"""
    pass


class TransportError(PySampError):
    """Raised when the socket is refused, reset or fails to send/receive"""
    pass


class ProtocolError(PySampError):
    """Raised when a reply cannot be decoded"""
    pass


class InsufficientDataError(ProtocolError):
    """Raised when not enough data is available for reading"""
    pass


class FormatError(PySampError, ValueError):
    """Raised for an invalid dotted-quad IPv4 literal"""
    pass
