"""Database migrations module."""

from marginbook.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    MigrationResult,
    discover_migrations,
    get_current_version,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)

__all__ = [
    "MigrationInfo",
    "MigrationResult",
    "discover_migrations",
    "get_current_version",
    "get_migration_status",
    "initialize_database",
    "verify_schema_integrity",
]
