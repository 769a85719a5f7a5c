"""
Configuration validation utilities
"""

from typing import Union


class ConfigValidationError(Exception):
    """Raised when configuration validation fails"""
    pass


def validate_host(host: str) -> str:
    """Validate host address"""
    if not host or not isinstance(host, str):
        raise ConfigValidationError("Host must be a non-empty string")

    if len(host.strip()) == 0:
        raise ConfigValidationError("Host cannot be empty or whitespace")

    return host.strip()


def validate_port(port: int) -> int:
    """Validate port number"""
    if not isinstance(port, int) or isinstance(port, bool):
        raise ConfigValidationError("Port must be an integer")

    if port < 1 or port > 65535:
        raise ConfigValidationError("Port must be between 1 and 65535")

    return port


def validate_timeout(timeout: Union[int, float]) -> float:
    """Validate timeout value"""
    if not isinstance(timeout, (int, float)) or isinstance(timeout, bool):
        raise ConfigValidationError("Timeout must be a number")

    if timeout <= 0:
        raise ConfigValidationError("Timeout must be greater than 0")

    return float(timeout)


def validate_buffer_size(size: int) -> int:
    """Validate receive buffer size"""
    if not isinstance(size, int) or isinstance(size, bool) or size < 1:
        raise ConfigValidationError("Buffer size must be a positive integer")

    return size


def validate_encoding(encoding: str) -> str:
    """Validate text encoding name"""
    import codecs

    try:
        codecs.lookup(encoding)
    except (LookupError, TypeError):
        raise ConfigValidationError(f"Unknown encoding: {encoding!r}")

    return encoding
