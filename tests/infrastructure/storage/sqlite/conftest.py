"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.core.entities import Client, Region
from src.infrastructure.storage.sqlite.client_store import SQLiteClientStore
from src.infrastructure.storage.sqlite.connection import close_pool
from src.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def billing_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated database with the global pool pointed at it."""
    results = await initialize_database(temp_db_path, create_backup_before=False)
    assert all(r.success for r in results)

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await close_pool()


@pytest.fixture
async def uae_client(billing_db) -> Client:
    return await SQLiteClientStore().create_client(
        Client(name="Gulf Events LLC", region=Region.UAE, trn="100200300400003")
    )


@pytest.fixture
async def saudi_client(billing_db) -> Client:
    return await SQLiteClientStore().create_client(
        Client(name="Riyadh Expo Co", region=Region.SAUDI)
    )
