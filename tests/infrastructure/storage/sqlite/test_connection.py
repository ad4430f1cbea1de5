"""Tests for the SQLite connection pool."""

from unittest.mock import MagicMock, patch

import pytest

import marginbook.infrastructure.storage.sqlite.connection as conn_module
from marginbook.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)


@pytest.fixture
async def pool(tmp_path):
    pool = ConnectionPool(db_path=tmp_path / "pool.db", pool_size=2, busy_timeout=1000)
    await pool.initialize()
    async with pool.transaction() as conn:
        await conn.execute("CREATE TABLE t (id INTEGER PRIMARY KEY, v TEXT)")
    yield pool
    await pool.close()


class TestConnectionPool:
    async def test_pragmas(self, pool):
        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA foreign_keys")
            assert (await cursor.fetchone())[0] == 1
            cursor = await conn.execute("PRAGMA journal_mode")
            assert (await cursor.fetchone())[0] == "wal"

    async def test_transaction_commits(self, pool):
        async with pool.transaction() as conn:
            await conn.execute("INSERT INTO t (v) VALUES ('a')")
        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 1

    async def test_transaction_rolls_back(self, pool):
        with pytest.raises(RuntimeError):
            async with pool.transaction() as conn:
                await conn.execute("INSERT INTO t (v) VALUES ('a')")
                raise RuntimeError("boom")
        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 0

    async def test_immediate_transaction_holds_write_lock(self, pool):
        async with pool.transaction(immediate=True) as conn:
            assert conn.in_transaction
            await conn.execute("INSERT INTO t (v) VALUES ('a')")
        async with pool.acquire() as conn:
            assert not conn.in_transaction

    async def test_released_connection_has_no_open_transaction(self, pool):
        async with pool.acquire() as conn:
            await conn.execute("INSERT INTO t (v) VALUES ('a')")
            assert conn.in_transaction

        async with pool.acquire() as first, pool.acquire() as second:
            assert not first.in_transaction
            assert not second.in_transaction
            cursor = await first.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 0

    async def test_unicode_lower_function(self, pool):
        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT unicode_lower('ÉTÉ'), unicode_lower(NULL)")
            assert tuple(await cursor.fetchone()) == ("été", None)

    async def test_close_and_reinitialize(self, pool):
        await pool.close()
        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT 1")
            assert (await cursor.fetchone())[0] == 1


class TestGlobalPool:
    async def test_get_pool_uses_settings(self, tmp_path):
        conn_module._pool = None
        mock_settings = MagicMock()
        mock_settings.storage.db_path = tmp_path / "global.db"
        mock_settings.storage.pool_size = 1
        mock_settings.storage.busy_timeout = 1000

        with patch.object(conn_module, "get_settings", return_value=mock_settings):
            try:
                pool = await get_pool()
                assert pool.db_path == tmp_path / "global.db"
                assert await get_pool() is pool

                async with get_transaction() as conn:
                    await conn.execute("CREATE TABLE g (id INTEGER)")
                async with get_connection() as conn:
                    cursor = await conn.execute("SELECT COUNT(*) FROM g")
                    assert (await cursor.fetchone())[0] == 0
            finally:
                await close_pool()

        assert conn_module._pool is None
