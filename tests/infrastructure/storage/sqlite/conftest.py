"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import solarbooks.infrastructure.storage.sqlite.connection as conn_module
from solarbooks.infrastructure.storage.sqlite.connection import close_pool
from solarbooks.infrastructure.storage.sqlite.migrations.migrator import (
    initialize_database,
)


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "solarbooks_test.db"


@pytest.fixture
async def initialized_db(temp_db_path: Path) -> AsyncGenerator[Path, None]:
    """
    Migrated temporary database wired into the global pool.

    The pool reads its path from settings, so settings are patched for the
    duration of the test and the pool is closed afterwards.
    """
    await initialize_database(temp_db_path, create_backup_before=False)

    conn_module._pool = None
    mock_settings = MagicMock()
    mock_settings.storage.db_path = temp_db_path
    mock_settings.storage.pool_size = 1
    mock_settings.storage.busy_timeout = 5000

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await close_pool()
