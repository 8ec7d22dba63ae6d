"""Unit tests for SQLite connection pool."""

from pathlib import Path

import pytest

from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    get_connection,
    get_transaction,
)


class TestConnectionPool:
    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)
        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool._initialized is False

    async def test_initialize_creates_connections(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "pool.db"
        pool = ConnectionPool(db_path, pool_size=2)
        await pool.initialize()
        try:
            assert db_path.parent.exists()
            assert len(pool._connections) == 2
            async with pool.acquire() as conn:
                cursor = await conn.execute("PRAGMA foreign_keys")
                row = await cursor.fetchone()
                assert row[0] == 1
        finally:
            await pool.close()
        assert pool._connections == []

    async def test_immediate_transaction_holds_write_lock(self, tmp_path: Path):
        pool = ConnectionPool(tmp_path / "lock.db", pool_size=1)
        try:
            async with pool.transaction(immediate=True) as conn:
                assert conn.in_transaction
        finally:
            await pool.close()


class TestGlobalTransaction:
    async def test_commit_on_success(self, billing_db):
        async with get_transaction(immediate=True) as conn:
            await conn.execute(
                "INSERT INTO clients (name, region) VALUES ('Commit Co', 'UAE')"
            )
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM clients WHERE name = 'Commit Co'")
            row = await cursor.fetchone()
        assert row[0] == 1

    async def test_rollback_on_error(self, billing_db):
        with pytest.raises(RuntimeError):
            async with get_transaction(immediate=True) as conn:
                await conn.execute(
                    "INSERT INTO clients (name, region) VALUES ('Rollback Co', 'UAE')"
                )
                raise RuntimeError("boom")
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM clients WHERE name = 'Rollback Co'")
            row = await cursor.fetchone()
        assert row[0] == 0
