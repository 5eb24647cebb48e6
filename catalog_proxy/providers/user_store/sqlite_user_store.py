"""SQLite-backed per-user key-value store.

Persists one JSON blob per (user_key, field) to a local SQLite database at
``data/user_store.db``.  Uses ``aiosqlite`` for async I/O.  Writes are
upserts, so the last writer for a key wins.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import aiosqlite
import structlog

from catalog_proxy.interfaces.user_store import IUserStore
from catalog_proxy.models.user import UserField

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_DB_PATH = Path("data/user_store.db")

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS user_blobs (
    user_key    TEXT    NOT NULL,
    field       TEXT    NOT NULL,
    blob_json   TEXT    NOT NULL,
    updated_at  TEXT    NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
    PRIMARY KEY (user_key, field)
);
"""

_UPSERT_SQL = """\
INSERT INTO user_blobs (user_key, field, blob_json)
VALUES (?, ?, ?)
ON CONFLICT(user_key, field)
DO UPDATE SET blob_json  = excluded.blob_json,
              updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now');
"""

_SELECT_SQL = "SELECT blob_json FROM user_blobs WHERE user_key = ? AND field = ?;"


class SQLiteUserStore(IUserStore):
    """SQLite-backed user blob persistence."""

    def __init__(self, db_path: str | Path = _DEFAULT_DB_PATH) -> None:
        self._db_path = Path(db_path)

    async def initialize(self) -> None:
        """Create the blob table if it doesn't exist."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute(_CREATE_TABLE_SQL)
            await db.commit()
        logger.info("user_store_initialized", path=str(self._db_path))

    async def read(self, user_key: str, field: UserField) -> Any | None:
        async with aiosqlite.connect(str(self._db_path)) as db:
            cursor = await db.execute(_SELECT_SQL, (user_key, UserField(field).value))
            row = await cursor.fetchone()
        if row is None:
            return None
        return json.loads(row[0])

    async def write(self, user_key: str, field: UserField, blob: Any) -> None:
        # Serialise before opening the connection so a bad blob writes nothing.
        blob_json = json.dumps(blob)
        async with aiosqlite.connect(str(self._db_path)) as db:
            await db.execute(_UPSERT_SQL, (user_key, UserField(field).value, blob_json))
            await db.commit()
        logger.debug("user_blob_written", user_key=user_key, field=UserField(field).value)
