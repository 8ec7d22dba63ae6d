"""
Schema migrations for the billing database.

Migration files live beside this module and are named ``vNNN_<name>.sql``.
Each applied file is recorded in ``schema_migrations`` with a checksum of its
contents; a file whose checksum changed after it was applied is reported but
never re-run. An existing database is copied aside before migrating and the
copy is put back if migrating raises.
"""

import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
FILENAME_PATTERN = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = [
    "clients",
    "document_sequences",
    "quotations",
    "quotation_items",
    "invoices",
    "invoice_items",
    "payments",
    "schema_migrations",
]


@dataclass
class MigrationInfo:
    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = FILENAME_PATTERN.fullmatch(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=digest[:16],
        )


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def discover_migrations() -> list[MigrationInfo]:
    """Migration files in version order; badly named files are skipped."""
    found = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError:
            logger.warning("migration_file_ignored", path=str(path))
    return found


async def _applied_checksums(conn: aiosqlite.Connection) -> dict[str, str]:
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        # Fresh database, the tracking table arrives with v001
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def _run_one(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    started = time.perf_counter()
    logger.info("migration_started", version=migration.version, name=migration.name)

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            "INSERT OR REPLACE INTO schema_migrations "
            "(version, name, checksum, execution_time_ms) VALUES (?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, _elapsed_ms(started)),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            migration.version, migration.name, False, _elapsed_ms(started), str(e)
        )

    elapsed = _elapsed_ms(started)
    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed)
    return MigrationResult(migration.version, migration.name, True, elapsed)


async def _foreign_key_violations(conn: aiosqlite.Connection) -> int:
    cursor = await conn.execute("PRAGMA foreign_key_check")
    return len(await cursor.fetchall())


def create_backup(db_path: Path) -> Path:
    """Copy the database file to a timestamped sibling and return its path."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring the database up to the latest schema version.

    Returns one result per migration attempted; an up-to-date database
    yields an empty list. Stops at the first failing migration.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    backup_path = create_backup(db_path) if create_backup_before and db_path.exists() else None
    results: list[MigrationResult] = []

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")
            applied = await _applied_checksums(conn)

            for migration in discover_migrations():
                recorded = applied.get(migration.version)
                if recorded is not None:
                    if recorded != migration.checksum:
                        logger.warning("migration_checksum_changed", version=migration.version)
                    continue

                result = await _run_one(conn, migration)
                results.append(result)
                if not result.success:
                    break
                if violations := await _foreign_key_violations(conn):
                    logger.error(
                        "migration_left_fk_violations",
                        version=migration.version,
                        violations=violations,
                    )
                    break
    except Exception:
        logger.exception("database_initialization_failed", db_path=str(db_path))
        if backup_path is not None:
            restore_backup(db_path, backup_path)
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()

    logger.info("database_ready", db_path=str(db_path), applied=len(results))
    return results


# Name used by the application lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    db_path = db_path or get_settings().storage.db_path
    versions = [m.version for m in discover_migrations()]

    applied: dict[str, str] = {}
    if db_path.exists():
        async with aiosqlite.connect(db_path) as conn:
            applied = await _applied_checksums(conn)

    return {
        "exists": db_path.exists(),
        "applied_migrations": sorted(applied),
        "pending_migrations": [v for v in versions if v not in applied],
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """SQLite integrity, foreign keys and presence of every billing table."""
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA integrity_check")
        (integrity,) = await cursor.fetchone()
        violations = await _foreign_key_violations(conn)
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {name for (name,) in await cursor.fetchall()}

    missing = [t for t in REQUIRED_TABLES if t not in tables]

    def status(ok: bool) -> str:
        return "PASS" if ok else "FAIL"

    return [
        {"check": "integrity", "status": status(integrity == "ok"), "result": integrity},
        {"check": "foreign_keys", "status": status(violations == 0), "violations": violations},
        {"check": "required_tables", "status": status(not missing), "missing": missing},
    ]
