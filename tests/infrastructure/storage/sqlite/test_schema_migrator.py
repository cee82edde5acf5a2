"""Unit tests for database migrator."""

from pathlib import Path

import aiosqlite
import pytest

from solarbooks.infrastructure.storage.sqlite.migrations.migrator import (
    LEDGER_TRIGGERS,
    REQUIRED_TABLES,
    MigrationInfo,
    create_backup,
    discover_migrations,
    get_applied_migrations,
    get_migration_status,
    initialize_database,
    restore_backup,
    verify_schema_integrity,
)


class TestMigrationInfo:
    def test_from_file_parses_filename(self, tmp_path: Path):
        migration_file = tmp_path / "v002_add_projects.sql"
        migration_file.write_text("SELECT 1;")

        info = MigrationInfo.from_file(migration_file)

        assert info.version == "002"
        assert info.name == "add_projects"
        assert len(info.checksum) == 16

    def test_invalid_filename(self, tmp_path: Path):
        bad = tmp_path / "initial.sql"
        bad.write_text("SELECT 1;")

        with pytest.raises(ValueError):
            MigrationInfo.from_file(bad)

    def test_discover_bundled(self):
        versions = [m.version for m in discover_migrations()]
        assert versions[0] == "001"
        assert versions == sorted(versions)


class TestInitializeDatabase:
    async def test_fresh_database(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path, create_backup_before=False)

        assert results
        assert all(r.success for r in results)
        async with aiosqlite.connect(temp_db_path) as conn:
            applied = await get_applied_migrations(conn)
        assert "001" in applied

    async def test_second_run_is_noop(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        assert await initialize_database(temp_db_path, create_backup_before=True) == []
        # Backup removed after a clean run
        assert list(temp_db_path.parent.glob("*.backup_*")) == []

    async def test_status(self, temp_db_path: Path):
        missing = await get_migration_status(temp_db_path)
        assert missing["exists"] is False

        await initialize_database(temp_db_path, create_backup_before=False)
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is True
        assert status["current_version"] is not None
        assert status["pending_migrations"] == []

    async def test_schema_integrity(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)

        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}
        assert checks["foreign_keys"]["status"] == "PASS"
        assert checks["integrity"]["status"] == "PASS"
        assert checks["required_tables"]["status"] == "PASS"
        assert "stock_ledger" in REQUIRED_TABLES

    async def test_applied_on_empty_database(self, temp_db_path: Path):
        async with aiosqlite.connect(temp_db_path) as conn:
            assert await get_applied_migrations(conn) == {}


class TestBackup:
    def test_create_and_restore(self, tmp_path: Path):
        db_path = tmp_path / "books.db"
        db_path.write_bytes(b"original")

        backup = create_backup(db_path)
        db_path.write_bytes(b"changed")
        restore_backup(db_path, backup)

        assert db_path.read_bytes() == b"original"


class TestBookkeepingChecks:
    async def _insert_item(self, db_path: Path, current_stock: str) -> int:
        async with aiosqlite.connect(db_path) as conn:
            cursor = await conn.execute(
                """
                INSERT INTO items (item_code, name, current_stock, created_at, updated_at)
                VALUES ('ITEM001', 'DC Cable', ?, '2025-01-01', '2025-01-01')
                """,
                (current_stock,),
            )
            await conn.commit()
            return cursor.lastrowid

    async def _append(self, db_path: Path, item_id: int, signed: str, balance: str) -> None:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute(
                """
                INSERT INTO stock_ledger (item_id, transaction_type, direction, quantity,
                    signed_quantity, balance_quantity, transaction_date, created_at)
                VALUES (?, 'Purchase', 'in', ?, ?, ?, '2025-01-02', '2025-01-02')
                """,
                (item_id, signed.lstrip("-"), signed, balance),
            )
            await conn.commit()

    async def test_triggers_present(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)

        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}
        assert checks["ledger_append_only"]["status"] == "PASS"
        assert set(LEDGER_TRIGGERS) == {
            "trg_stock_ledger_no_update",
            "trg_stock_ledger_no_delete",
        }

    async def test_matching_balances(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        item_id = await self._insert_item(temp_db_path, "70.00")
        await self._append(temp_db_path, item_id, "100", "100")
        await self._append(temp_db_path, item_id, "-30", "70")

        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}
        assert checks["stock_balances"]["status"] == "PASS"

    async def test_stale_cached_stock(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        await self._insert_item(temp_db_path, "5")

        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}
        assert checks["stock_balances"]["status"] == "FAIL"
        assert checks["stock_balances"]["stale"] == ["ITEM001: cached 5, ledger 0"]


def test_discover_skips_invalid_names(tmp_path: Path):
    (tmp_path / "v002_add_projects.sql").write_text("SELECT 1;")
    (tmp_path / "v001_initial.sql").write_text("SELECT 1;")
    (tmp_path / "vnext_draft.sql").write_text("SELECT 1;")

    assert [m.version for m in discover_migrations(tmp_path)] == ["001", "002"]
