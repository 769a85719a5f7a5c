#!/usr/bin/env python3
"""
Async/Await Support for pysamp
==============================

Awaitable wrappers around the blocking handshake and query clients.

Each call runs the synchronous client in a thread pool so the asyncio
event loop is never blocked. The socket timeout is the only cancellation
boundary: cancelling the awaiting task does not interrupt the socket, but
awaiting disconnect() while connect() is pending closes it and lets the
pending call finish with a FAILED outcome.
"""

import asyncio
import functools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Awaitable, Callable, Optional

from .config import ClientConfig
from .connection import SAMPConnection
from .models.connection_result import ConnectionOutcome
from .models.server_info import ServerInfo
from .query import ServerQuery

logger = logging.getLogger(__name__)


class _ExecutorMixin:
    """Runs blocking calls on a private thread pool"""

    _executor: ThreadPoolExecutor

    def _run_in_thread(self, func: Callable, *args, **kwargs) -> Awaitable:
        """
        Run a synchronous function in the thread pool.

        Returns:
            Awaitable that resolves to the function result
        """
        loop = asyncio.get_running_loop()
        return loop.run_in_executor(self._executor, functools.partial(func, *args, **kwargs))

    def close(self):
        """Shut down the worker threads"""
        self._executor.shutdown(wait=False)


class AsyncSAMPConnection(_ExecutorMixin):
    """
    Async wrapper around SAMPConnection.

    Usage:
        async def main():
            async with AsyncSAMPConnection("127.0.0.1", 7777) as conn:
                outcome = await conn.connect("player", "secret")
                print(outcome)
    """

    def __init__(self, host: str, port: int, config: Optional[ClientConfig] = None):
        self._sync_connection = SAMPConnection(host, port, config)
        # Two workers so disconnect() can run while connect() is blocked
        self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="pysamp-connect")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()
        self.close()
        return False

    @property
    def outcome(self) -> Optional[ConnectionOutcome]:
        """Last outcome; CONNECTING while a connect is pending"""
        return self._sync_connection.outcome

    async def connect(self, username: str, password: str) -> ConnectionOutcome:
        """Attempt the handshake without blocking the event loop."""
        outcome = await self._run_in_thread(self._sync_connection.connect, username, password)
        logger.debug(f"Async connect finished: {outcome}")
        return outcome

    async def disconnect(self) -> None:
        """Close the session."""
        await self._run_in_thread(self._sync_connection.disconnect)

    def is_connected(self) -> bool:
        return self._sync_connection.is_connected()


class AsyncServerQuery(_ExecutorMixin):
    """
    Async wrapper around ServerQuery.

    Usage:
        async def main():
            async with AsyncServerQuery() as query:
                info = await query.get_server_info("127.0.0.1", 7777)
    """

    def __init__(self, config: Optional[ClientConfig] = None, max_workers: int = 4):
        """
        Args:
            config: Query timeout, buffer size and encoding
            max_workers: Maximum number of queries running at once
        """
        self._sync_query = ServerQuery(config)
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="pysamp-query")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    async def get_server_info(self, host: str, port: int) -> Optional[ServerInfo]:
        """Query basic server information without blocking the event loop."""
        return await self._run_in_thread(self._sync_query.get_server_info, host, port)

    async def request_info(self, host: str, port: int) -> ServerInfo:
        """Like get_server_info but raises the query error instead of returning None."""
        return await self._run_in_thread(self._sync_query.request_info, host, port)
