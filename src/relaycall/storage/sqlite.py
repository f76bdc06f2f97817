"""SQLite implementation of the QueueStorage protocol."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiosqlite

SCHEMA = """
-- Pending transactions, oldest first
CREATE TABLE IF NOT EXISTS pending_transactions (
    position INTEGER PRIMARY KEY,
    tx_id TEXT NOT NULL,
    record TEXT NOT NULL,
    saved_at TEXT NOT NULL
);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SQLiteQueueStorage:
    """SQLite-backed snapshot storage for the transaction queue."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._db: aiosqlite.Connection | None = None

    async def initialize(self) -> None:
        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db = await aiosqlite.connect(self._db_path)
        self._db.row_factory = aiosqlite.Row
        await self._db.executescript(SCHEMA)
        await self._db.commit()

    async def close(self) -> None:
        if self._db:
            await self._db.close()
            self._db = None

    @property
    def db(self) -> aiosqlite.Connection:
        if self._db is None:
            raise RuntimeError("storage not initialized")
        return self._db

    async def get(self) -> list[dict[str, Any]] | None:
        cursor = await self.db.execute(
            "SELECT record FROM pending_transactions ORDER BY position"
        )
        rows = await cursor.fetchall()
        if not rows:
            return None
        return [json.loads(row["record"]) for row in rows]

    async def set(self, records: list[dict[str, Any]]) -> None:
        """Replace the stored snapshot in one transaction."""
        now = _now()
        try:
            await self.db.execute("DELETE FROM pending_transactions")
            await self.db.executemany(
                "INSERT INTO pending_transactions (position, tx_id, record, saved_at) "
                "VALUES (?, ?, ?, ?)",
                [
                    (i, r["tx_id"], json.dumps(r, sort_keys=True), now)
                    for i, r in enumerate(records)
                ],
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def reset(self) -> None:
        await self.db.execute("DELETE FROM pending_transactions")
        await self.db.commit()
