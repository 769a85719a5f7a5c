"""
Client Configuration - timeouts, buffer sizes and text encoding
"""

import logging
from dataclasses import dataclass, asdict, fields
from typing import Dict, Any

from ..protocol.constants import (
    DEFAULT_ENCODING,
    HANDSHAKE_RECV_SIZE,
    HANDSHAKE_TIMEOUT,
    QUERY_RECV_SIZE,
    QUERY_TIMEOUT,
)
from .validation import (
    ConfigValidationError,
    validate_buffer_size,
    validate_encoding,
    validate_timeout,
)


@dataclass
class ClientConfig:
    """Client configuration settings"""

    # Timeouts (seconds)
    connect_timeout: float = HANDSHAKE_TIMEOUT
    query_timeout: float = QUERY_TIMEOUT

    # Receive buffers
    recv_buffer_size: int = HANDSHAKE_RECV_SIZE
    query_buffer_size: int = QUERY_RECV_SIZE

    # Text encoding for usernames and server strings
    encoding: str = DEFAULT_ENCODING

    # Logging
    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClientConfig':
        """Create from dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def update(self, **kwargs):
        """Update configuration values"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def validate(self) -> 'ClientConfig':
        """Check every value, raising ConfigValidationError on the first bad one"""
        self.connect_timeout = validate_timeout(self.connect_timeout)
        self.query_timeout = validate_timeout(self.query_timeout)
        self.recv_buffer_size = validate_buffer_size(self.recv_buffer_size)
        self.query_buffer_size = validate_buffer_size(self.query_buffer_size)
        self.encoding = validate_encoding(self.encoding)
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ConfigValidationError(f"Unknown log level: {self.log_level!r}")
        return self
