"""
pysamp - A minimal Python client for SA-MP servers

Usage:
    from pysamp import SAMPConnection

    conn = SAMPConnection("127.0.0.1", 7777)
    outcome = conn.connect("username", "password")
    if outcome.is_success:
        ...
    else:
        print(outcome.reason)
    conn.disconnect()

Or query server info:
    from pysamp import ServerQuery

    info = ServerQuery().get_server_info("127.0.0.1", 7777)
    if info:
        print(f"{info.hostname}: {info.player_count_string}")

Or from asyncio:
    from pysamp import AsyncServerQuery

    async with AsyncServerQuery() as query:
        info = await query.get_server_info("127.0.0.1", 7777)
"""

__version__ = "1.0.0"

from .async_client import AsyncSAMPConnection, AsyncServerQuery
from .config import ClientConfig, ConfigValidationError
from .connection import SAMPConnection
from .exceptions import (
    FormatError,
    InsufficientDataError,
    ProtocolError,
    PySampError,
    ServerTimeoutError,
    TransportError,
)
from .models import ConnectionOutcome, OutcomeState, ServerInfo
from .query import ServerQuery, get_server_info

__all__ = [
    "SAMPConnection",
    "ServerQuery",
    "get_server_info",
    "AsyncSAMPConnection",
    "AsyncServerQuery",
    "ServerInfo",
    "ConnectionOutcome",
    "OutcomeState",
    "ClientConfig",
    "ConfigValidationError",
    "PySampError",
    "ServerTimeoutError",
    "TransportError",
    "ProtocolError",
    "InsufficientDataError",
    "FormatError",
]
