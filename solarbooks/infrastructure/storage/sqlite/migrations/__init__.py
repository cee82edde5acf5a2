"""Database migrations module."""

from solarbooks.infrastructure.storage.sqlite.migrations.migrator import (
    LEDGER_TRIGGERS,
    REQUIRED_TABLES,
    MigrationInfo,
    MigrationResult,
    create_backup,
    discover_migrations,
    get_migration_status,
    initialize_database,
    restore_backup,
    verify_schema_integrity,
)

__all__ = [
    "LEDGER_TRIGGERS",
    "REQUIRED_TABLES",
    "MigrationInfo",
    "MigrationResult",
    "create_backup",
    "discover_migrations",
    "get_migration_status",
    "initialize_database",
    "restore_backup",
    "verify_schema_integrity",
]
