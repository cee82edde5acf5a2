"""Tests for the aiosqlite connection pool."""

from pathlib import Path

import pytest

from solarbooks.core.exceptions import DatabaseError
from solarbooks.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    get_connection,
    get_pool,
    get_transaction,
)


@pytest.fixture
async def pool(tmp_path: Path):
    pool = ConnectionPool(tmp_path / "pool.db", pool_size=2, busy_timeout=1000)
    await pool.initialize()
    try:
        yield pool
    finally:
        await pool.close()


class TestConnectionPool:
    async def test_initialize(self, pool):
        assert pool.available == 2

        async with pool.acquire() as conn:
            assert pool.available == 1
            cursor = await conn.execute("PRAGMA foreign_keys")
            assert (await cursor.fetchone())[0] == 1

        assert pool.available == 2

    async def test_minimum_size(self, tmp_path: Path):
        assert ConnectionPool(tmp_path / "x.db", pool_size=0).pool_size == 1

    async def test_transaction_commits(self, pool):
        async with pool.transaction() as conn:
            await conn.execute("CREATE TABLE t (v TEXT)")
            await conn.execute("INSERT INTO t VALUES ('a')")

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 1

    async def test_transaction_rolls_back(self, pool):
        async with pool.transaction() as conn:
            await conn.execute("CREATE TABLE t (v TEXT)")

        with pytest.raises(RuntimeError):
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t VALUES ('a')")
                raise RuntimeError("boom")

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 0

    async def test_exhausted_pool_raises(self, tmp_path: Path):
        pool = ConnectionPool(tmp_path / "busy.db", pool_size=1, busy_timeout=50)
        await pool.initialize()
        try:
            async with pool.acquire():
                with pytest.raises(DatabaseError):
                    async with pool.acquire():
                        pass
            assert pool.available == 1
        finally:
            await pool.close()


class TestGlobalPool:
    async def test_uses_settings(self, initialized_db):
        pool = await get_pool()
        assert pool.db_path == initialized_db
        assert await get_pool() is pool

        async with get_transaction() as conn:
            await conn.execute("SELECT 1")
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM items")
            assert (await cursor.fetchone())[0] == 0
