"""SQLite implementation of the key-value persistence collaborator."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from nexus_ledger.config import get_logger
from nexus_ledger.core.exceptions import DatabaseError
from nexus_ledger.core.interfaces.storage import IKeyValueStore
from nexus_ledger.infrastructure.storage.sqlite.connection import ConnectionPool

logger = get_logger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS ledger_collections (
    key TEXT PRIMARY KEY,
    payload TEXT NOT NULL,
    item_count INTEGER NOT NULL DEFAULT 0,
    updated_at TEXT NOT NULL
);
"""


class SQLiteKeyValueStore(IKeyValueStore):
    """Stores each collection as one JSON document row."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 2,
        busy_timeout: int = 30000,
    ) -> None:
        self._pool = ConnectionPool(
            db_path, pool_size=pool_size, busy_timeout=busy_timeout, schema=_SCHEMA
        )

    async def load(self, key: str) -> list[dict[str, Any]] | None:
        try:
            async with self._pool.acquire() as conn:
                cursor = await conn.execute(
                    "SELECT payload FROM ledger_collections WHERE key = ?", (key,)
                )
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise DatabaseError("load", str(e)) from e
        if row is None:
            return None
        return json.loads(row["payload"])

    async def save(self, key: str, collection: list[dict[str, Any]]) -> None:
        try:
            async with self._pool.transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO ledger_collections (key, payload, item_count, updated_at)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        payload = excluded.payload,
                        item_count = excluded.item_count,
                        updated_at = excluded.updated_at
                    """,
                    (
                        key,
                        json.dumps(collection),
                        len(collection),
                        datetime.now(UTC).isoformat(),
                    ),
                )
        except aiosqlite.Error as e:
            raise DatabaseError("save", str(e)) from e
        logger.info("collection_saved", key=key, size=len(collection))

    async def close(self) -> None:
        await self._pool.close()
