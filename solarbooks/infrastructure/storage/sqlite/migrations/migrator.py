"""
Versioned SQL migrations for the SolarBooks database.

Migration files live beside this module as ``vNNN_name.sql`` and are applied
in version order. Each applied version is recorded in ``schema_migrations``
with a checksum of the script, so an edited script is reported instead of
silently re-run. An existing database is copied aside before migrating and
restored if the run raises.
"""

import asyncio
import hashlib
import re
import shutil
import sys
import time
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import aiosqlite

from solarbooks.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

MIGRATION_FILENAME = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = (
    "items",
    "stock_ledger",
    "invoices",
    "invoice_items",
    "invoice_payments",
    "quotations",
    "quotation_items",
    "schema_migrations",
)

# Reject UPDATE / DELETE on stock_ledger
LEDGER_TRIGGERS = ("trg_stock_ledger_no_update", "trg_stock_ledger_no_delete")


@dataclass
class MigrationInfo:
    """A migration script on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILENAME.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")

        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=hashlib.sha256(path.read_bytes()).hexdigest()[:16],
        )


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to the checksum they were applied with."""
    try:
        cursor = await conn.execute(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
    except aiosqlite.OperationalError:
        # schema_migrations is created by v001
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    migrations = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it in schema_migrations."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start = time.perf_counter()

    def elapsed_ms() -> int:
        return int((time.perf_counter() - start) * 1000)

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            """
            INSERT OR REPLACE INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed_ms()),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error(
            "migration_failed",
            version=migration.version,
            name=migration.name,
            error=str(e),
        )
        return MigrationResult(
            migration.version, migration.name, False, elapsed_ms(), error=str(e)
        )

    result = MigrationResult(migration.version, migration.name, True, elapsed_ms())
    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=result.execution_time_ms,
    )
    return result


def create_backup(db_path: Path) -> Path:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{timestamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Apply all pending migrations, stopping at the first failure.

    Args:
        db_path: Database file (default from settings)
        create_backup_before: Copy an existing database aside first

    Returns:
        Results of the migrations that were attempted; empty when up to date
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    backup_path = None
    if create_backup_before and db_path.exists():
        backup_path = create_backup(db_path)

    results: list[MigrationResult] = []
    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")

            applied = await get_applied_migrations(conn)
            for migration in discover_migrations():
                if migration.version in applied:
                    if applied[migration.version] != migration.checksum:
                        logger.warning(
                            "migration_checksum_changed",
                            version=migration.version,
                            name=migration.name,
                        )
                    continue

                result = await apply_migration(conn, migration)
                results.append(result)
                if not result.success:
                    break
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path and backup_path.exists():
            restore_backup(db_path, backup_path)
        raise

    if backup_path and all(r.success for r in results):
        backup_path.unlink()

    return results


async def get_migration_status(db_path: Path | None = None) -> dict:
    db_path = db_path or get_settings().storage.db_path
    discovered = discover_migrations()

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [m.version for m in discovered],
            "total_migrations": len(discovered),
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)
    return {
        "exists": True,
        "current_version": max(applied) if applied else None,
        "applied_migrations": list(applied),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
        "total_migrations": len(discovered),
    }


def _check(name: str, passed: bool, **extra) -> dict:
    return {"check": name, "status": "PASS" if passed else "FAIL", **extra}


async def _stale_stock(conn: aiosqlite.Connection) -> list[str]:
    """Items whose cached current_stock differs from their latest ledger balance."""
    cursor = await conn.execute(
        """
        SELECT i.item_code, i.current_stock,
               (SELECT l.balance_quantity FROM stock_ledger l
                WHERE l.item_id = i.id ORDER BY l.id DESC LIMIT 1)
        FROM items i
        """
    )
    stale = []
    for item_code, current_stock, last_balance in await cursor.fetchall():
        if Decimal(current_stock) != Decimal(last_balance or "0"):
            stale.append(f"{item_code}: cached {current_stock}, ledger {last_balance or 0}")
    return stale


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """
    Run SQLite and bookkeeping checks against a migrated database.

    Besides the foreign key and page integrity pragmas this confirms the
    required tables exist, that the stock ledger is still guarded by its
    append-only triggers, and that every item's cached stock equals the
    balance on its latest ledger entry.
    """
    db_path = db_path or get_settings().storage.db_path
    checks = []

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA foreign_key_check")
        fk_violations = await cursor.fetchall()
        checks.append(_check("foreign_keys", not fk_violations, violations=len(fk_violations)))

        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]
        checks.append(_check("integrity", integrity == "ok", result=integrity))

        cursor = await conn.execute("SELECT type, name FROM sqlite_master")
        objects = await cursor.fetchall()
        tables = {name for kind, name in objects if kind == "table"}
        triggers = {name for kind, name in objects if kind == "trigger"}

        missing = [t for t in REQUIRED_TABLES if t not in tables]
        checks.append(_check("required_tables", not missing, missing=missing))

        unguarded = [t for t in LEDGER_TRIGGERS if t not in triggers]
        checks.append(_check("ledger_append_only", not unguarded, missing=unguarded))

        if not missing:
            stale = await _stale_stock(conn)
            checks.append(_check("stock_balances", not stale, stale=stale))

    return checks


def main() -> None:
    """``solarbooks-migrate``: apply pending migrations, or report status / verify."""
    import argparse

    parser = argparse.ArgumentParser(description="SolarBooks database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="Show migration status")
    mode.add_argument("--verify", action="store_true", help="Verify schema and stock balances")
    parser.add_argument("--no-backup", action="store_true", help="Skip backup before migrations")
    args = parser.parse_args()

    async def show_status() -> bool:
        status = await get_migration_status(args.db_path)
        print(f"Database exists: {status['exists']}")
        print(f"Current version: {status['current_version'] or 'N/A'}")
        print(f"Applied: {', '.join(status['applied_migrations']) or '-'}")
        print(f"Pending: {', '.join(status['pending_migrations']) or '-'}")
        return True

    async def verify() -> bool:
        checks = await verify_schema_integrity(args.db_path)
        for check in checks:
            print(f"[{check['status']}] {check['check']}")
            if check["status"] != "PASS":
                for key, value in check.items():
                    if key not in ("check", "status"):
                        print(f"       {key}: {value}")
        return all(c["status"] == "PASS" for c in checks)

    async def migrate() -> bool:
        results = await initialize_database(
            args.db_path, create_backup_before=not args.no_backup
        )
        if not results:
            print("Database is up to date")
        for result in results:
            outcome = "SUCCESS" if result.success else "FAILED"
            print(f"[{outcome}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
            if result.error:
                print(f"         Error: {result.error}")
        return all(r.success for r in results)

    if args.status:
        command = show_status
    elif args.verify:
        command = verify
    else:
        command = migrate
    if not asyncio.run(command()):
        sys.exit(1)


if __name__ == "__main__":
    main()
