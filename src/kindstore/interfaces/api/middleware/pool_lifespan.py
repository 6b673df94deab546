"""Pool lifespan middleware - opens pool on startup, closes on shutdown."""

import asyncio
from typing import Any

from psycopg_pool import ConnectionPool


class PoolLifespanMiddleware:
    """Opens the PostgreSQL connection pool on startup and closes it on shutdown.

    The pool is synchronous, so both calls run in a worker thread.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        await asyncio.to_thread(self._pool.open, wait=True)

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        await asyncio.to_thread(self._pool.close)
