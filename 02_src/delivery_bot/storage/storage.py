"""SQLite storage implementation."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..models import DialogRecord


class IStorage(Protocol):
    """Persistent append-only store for dialog history (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    async def append_dialog_record(self, record: DialogRecord) -> None:
        """Append a dialog record."""
        ...

    async def get_dialog_records(
        self, user_id: str | None = None, limit: int = 100
    ) -> list[DialogRecord]:
        """Get dialog records, oldest first, optionally for one user."""
        ...

    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    async def append_dialog_record(self, record: DialogRecord) -> None:
        """Append a dialog record."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        await self._conn.execute(
            """
            INSERT INTO dialog_records (user_id, message, intent, timestamp)
            VALUES (?, ?, ?, ?)
            """,
            (
                record.user_id,
                record.message,
                record.intent,
                record.timestamp.isoformat(),
            ),
        )
        await self._conn.commit()

    async def get_dialog_records(
        self, user_id: str | None = None, limit: int = 100
    ) -> list[DialogRecord]:
        """Get dialog records, oldest first, optionally for one user."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        if user_id is not None:
            cursor = await self._conn.execute(
                """
                SELECT user_id, message, intent, timestamp
                FROM dialog_records
                WHERE user_id = ?
                ORDER BY id ASC
                LIMIT ?
                """,
                (user_id, limit),
            )
        else:
            cursor = await self._conn.execute(
                """
                SELECT user_id, message, intent, timestamp
                FROM dialog_records
                ORDER BY id ASC
                LIMIT ?
                """,
                (limit,),
            )

        rows = await cursor.fetchall()

        records = []
        for row in rows:
            ts = datetime.fromisoformat(row[3])
            if ts.tzinfo is None:
                ts = ts.replace(tzinfo=timezone.utc)
            records.append(
                DialogRecord(
                    user_id=row[0],
                    message=row[1],
                    intent=row[2],
                    timestamp=ts,
                )
            )

        return records

    async def clear(self) -> None:
        """Clear all data."""
        if not self._conn:
            raise RuntimeError("Storage not initialized")

        await self._conn.execute("DELETE FROM dialog_records")
        await self._conn.commit()
