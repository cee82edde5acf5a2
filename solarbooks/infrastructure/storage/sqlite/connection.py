"""
Async SQLite connection pool with aiosqlite.

One pool per database file. Stores borrow a connection for a read with
``get_connection()`` or a write unit with ``get_transaction()``. Money and
quantities are stored as TEXT, so connections need no type adapters.

A caller that cannot get a connection within the busy timeout gets a
``DatabaseError`` rather than waiting forever behind a stuck writer.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from solarbooks.config import get_logger, get_settings
from solarbooks.core.exceptions import DatabaseError

logger = get_logger(__name__)


class ConnectionPool:
    """Fixed-size pool of aiosqlite connections."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = max(1, pool_size)
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue(
            maxsize=self.pool_size
        )
        self._connections: list[aiosqlite.Connection] = []
        self._initialized = False
        self._lock = asyncio.Lock()

    @property
    def available(self) -> int:
        return self._idle.qsize()

    async def initialize(self) -> None:
        async with self._lock:
            if self._initialized:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            for _ in range(self.pool_size):
                conn = await self._open()
                self._connections.append(conn)
                await self._idle.put(conn)

            self._initialized = True
            logger.info(
                "connection_pool_initialized",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )

    async def _open(self) -> aiosqlite.Connection:
        conn = await aiosqlite.connect(self.db_path)
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout}")
        await conn.execute("PRAGMA foreign_keys=ON")
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection.

        Usage:
            async with pool.acquire() as conn:
                await conn.execute(...)
        """
        if not self._initialized:
            await self.initialize()

        try:
            conn = await asyncio.wait_for(
                self._idle.get(), timeout=self.busy_timeout / 1000
            )
        except asyncio.TimeoutError:
            logger.error(
                "connection_pool_exhausted",
                db_path=str(self.db_path),
                pool_size=self.pool_size,
            )
            raise DatabaseError(
                "acquire", f"no free connection after {self.busy_timeout}ms"
            ) from None

        try:
            yield conn
        finally:
            await self._idle.put(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection inside a write transaction.

        BEGIN IMMEDIATE takes the write lock up front so a read-then-write
        unit (ledger balance, document numbering) cannot interleave with
        another writer. Commits on success, rolls back on any exception.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException as e:
                await conn.rollback()
                logger.warning("transaction_rolled_back", error=str(e) or type(e).__name__)
                raise
            else:
                await conn.commit()

    async def close(self) -> None:
        async with self._lock:
            for conn in self._connections:
                await conn.close()
            self._connections.clear()
            self._idle = asyncio.Queue(maxsize=self.pool_size)
            self._initialized = False
            logger.info("connection_pool_closed", db_path=str(self.db_path))


# Global connection pool
_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """Get or create the global connection pool from storage settings."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
