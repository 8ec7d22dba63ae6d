"""Versioned SQL migrations for the billing schema."""

from src.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    MigrationResult,
    get_migration_status,
    initialize_database,
    run_migrations,
    verify_schema_integrity,
)

__all__ = [
    "REQUIRED_TABLES",
    "MigrationResult",
    "get_migration_status",
    "initialize_database",
    "run_migrations",
    "verify_schema_integrity",
]
