"""Database initialization and migration system."""

import logging
import os
import re
from pathlib import Path

import aiosqlite
from fastapi import Request

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent.parent / "migrations"
MIGRATION_PATTERN = re.compile(r"^(\d{3})_.*\.sql$")


def _pending_migrations(current_version: int) -> list[tuple[int, Path]]:
    """Return (number, path) for every migration newer than current_version."""
    pending = []
    if not MIGRATIONS_DIR.exists():
        return pending

    for file_path in MIGRATIONS_DIR.iterdir():
        if not file_path.is_file():
            continue
        match = MIGRATION_PATTERN.match(file_path.name)
        if match and int(match.group(1)) > current_version:
            pending.append((int(match.group(1)), file_path))

    pending.sort(key=lambda x: x[0])
    return pending


async def init_db(db_path: str) -> aiosqlite.Connection:
    """
    Open the memories database and bring its schema up to date.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        aiosqlite connection with WAL mode, foreign keys and Row factory

    The schema version lives in PRAGMA user_version; every
    core/migrations/NNN_*.sql file with a higher number is applied in order.
    """
    parent_dir = os.path.dirname(db_path)
    if parent_dir:
        os.makedirs(parent_dir, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    await conn.execute("PRAGMA journal_mode=WAL")
    await conn.execute("PRAGMA foreign_keys=ON")
    conn.row_factory = aiosqlite.Row

    async with conn.execute("PRAGMA user_version") as cursor:
        row = await cursor.fetchone()
        current_version = row[0]

    for migration_number, migration_file in _pending_migrations(current_version):
        logger.info("Applying migration %s", migration_file.name)
        await conn.executescript(migration_file.read_text())
        await conn.execute(f"PRAGMA user_version = {migration_number}")
        await conn.commit()

    return conn


async def get_db(request: Request) -> aiosqlite.Connection:
    """FastAPI dependency returning the connection stored on app.state.db."""
    return request.app.state.db
