"""
Versioned schema migrations for the MarginBook database.

Each ``vNNN_name.sql`` file in this package runs once, inside its own
transaction, and is recorded in ``schema_migrations`` with a checksum of its
text. A recorded migration whose file has since changed halts the run.
"""

import hashlib
import re
import time
from dataclasses import dataclass
from pathlib import Path

import aiosqlite

from marginbook.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

MIGRATION_FILENAME = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = ("users", "receipts", "invoices", "schema_migrations")

SCHEMA_MIGRATIONS_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    execution_time_ms INTEGER NOT NULL DEFAULT 0,
    applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


@dataclass
class MigrationInfo:
    """One migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILENAME.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=digest[:16])


@dataclass
class MigrationResult:
    """Outcome of one attempted migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration files in ``directory``, in version order."""
    found = []
    for path in sorted(directory.glob("v*.sql")):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return found


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to their recorded checksums."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    """Highest applied version, or None on an unmigrated database."""
    try:
        cursor = await conn.execute("SELECT MAX(version) FROM schema_migrations")
    except aiosqlite.OperationalError:
        return None
    row = await cursor.fetchone()
    return row[0] if row else None


async def apply_migration(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    """
    Run one migration script and record it in the same transaction.

    A failing script leaves neither its partial DDL nor a
    ``schema_migrations`` row behind.
    """
    logger.info("applying_migration", version=migration.version, name=migration.name)
    started = time.perf_counter()

    def elapsed_ms() -> int:
        return int((time.perf_counter() - started) * 1000)

    try:
        script = migration.path.read_text(encoding="utf-8")
        await conn.executescript(f"BEGIN;\n{script}\n")
        await conn.execute(
            "INSERT INTO schema_migrations (version, name, checksum, execution_time_ms)"
            " VALUES (?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, elapsed_ms()),
        )
        await conn.commit()
    except (aiosqlite.Error, OSError) as e:
        await conn.rollback()
        logger.error(
            "migration_failed",
            version=migration.version,
            name=migration.name,
            error=str(e),
        )
        return MigrationResult(migration.version, migration.name, False, elapsed_ms(), str(e))

    result = MigrationResult(migration.version, migration.name, True, elapsed_ms())
    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=result.execution_time_ms,
    )
    return result


async def initialize_database(
    db_path: Path | None = None,
    migrations_dir: Path = MIGRATIONS_DIR,
) -> list[MigrationResult]:
    """
    Bring the database up to the latest schema.

    Args:
        db_path: Database file (default from settings)
        migrations_dir: Directory holding ``v*.sql`` files

    Returns:
        Results for the migrations attempted on this call; empty when the
        schema was already current. Stops at the first failure.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        await conn.execute(SCHEMA_MIGRATIONS_DDL)
        await conn.commit()

        applied = await get_applied_migrations(conn)
        for migration in discover_migrations(migrations_dir):
            recorded = applied.get(migration.version)
            if recorded == migration.checksum:
                continue
            if recorded is not None:
                logger.error(
                    "migration_checksum_mismatch",
                    version=migration.version,
                    recorded=recorded,
                    on_disk=migration.checksum,
                )
                results.append(
                    MigrationResult(
                        migration.version,
                        migration.name,
                        False,
                        0,
                        f"Migration {migration.version} changed after it was applied",
                    )
                )
                break

            result = await apply_migration(conn, migration)
            results.append(result)
            if not result.success:
                break

    return results


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Current version plus applied and pending migration versions."""
    db_path = db_path or get_settings().storage.db_path
    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [],
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)
        current = await get_current_version(conn)

    available = discover_migrations()
    return {
        "exists": True,
        "current_version": current,
        "applied_migrations": sorted(applied),
        "pending_migrations": [m.version for m in available if m.version not in applied],
        "total_migrations": len(available),
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """Foreign key, page integrity and required-table checks."""
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA foreign_key_check")
        violations = len(await cursor.fetchall())

        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}

    missing = [t for t in REQUIRED_TABLES if t not in tables]
    return [
        {"check": "foreign_keys", "status": "FAIL" if violations else "PASS", "violations": violations},
        {"check": "integrity", "status": "PASS" if integrity == "ok" else "FAIL", "result": integrity},
        {"check": "required_tables", "status": "FAIL" if missing else "PASS", "missing": missing},
    ]
