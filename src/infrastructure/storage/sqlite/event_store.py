"""SQLite implementation of calendar event storage."""

from datetime import datetime, tzinfo

import aiosqlite

from src.config import get_logger
from src.core.entities.record import Event
from src.core.exceptions import RecordNotFoundError
from src.core.interfaces.storage import IEventStore
from src.core.services.reminder_policy import to_local
from src.infrastructure.storage.sqlite.base import (
    SQLiteStoreBase,
    from_db_timestamp,
    to_db_timestamp,
)

logger = get_logger(__name__)


class SQLiteEventStore(SQLiteStoreBase, IEventStore):
    """SQLite implementation of event storage."""

    kind = "event"

    async def create(self, event: Event) -> Event:
        async with self._transaction("create_event", event.id) as conn:
            await conn.execute(
                """
                INSERT INTO events (
                    id, title, description, start_date, end_date,
                    location, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event.id,
                    event.title,
                    event.description,
                    to_db_timestamp(event.start_date),
                    to_db_timestamp(event.end_date),
                    event.location,
                    to_db_timestamp(event.created_at),
                ),
            )
        logger.info("event_created", event_id=event.id)
        return event

    async def get(self, event_id: str) -> Event | None:
        async with self._connection() as conn:
            cursor = await conn.execute("SELECT * FROM events WHERE id = ?", (event_id,))
            row = await cursor.fetchone()
            return self._row_to_entity(row) if row else None

    async def update(self, event: Event) -> Event:
        async with self._transaction("update_event") as conn:
            cursor = await conn.execute(
                """
                UPDATE events SET
                    title = ?, description = ?, start_date = ?,
                    end_date = ?, location = ?
                WHERE id = ?
                """,
                (
                    event.title,
                    event.description,
                    to_db_timestamp(event.start_date),
                    to_db_timestamp(event.end_date),
                    event.location,
                    event.id,
                ),
            )
            if cursor.rowcount == 0:
                raise RecordNotFoundError(self.kind, event.id)
        logger.info("event_updated", event_id=event.id)
        return event

    async def delete(self, event_id: str) -> bool:
        async with self._transaction("delete_event") as conn:
            cursor = await conn.execute("DELETE FROM events WHERE id = ?", (event_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("event_deleted", event_id=event_id)
        return deleted

    async def list_all(self) -> list[Event]:
        async with self._connection() as conn:
            cursor = await conn.execute("SELECT * FROM events ORDER BY created_at DESC")
            rows = await cursor.fetchall()
            return self._convert_rows(rows, self._row_to_entity)

    async def list_between(
        self, start: datetime, end: datetime, tz: tzinfo | None = None
    ) -> list[Event]:
        """
        List events overlapping [start, end).

        Stored timestamps may carry different offsets (or none), so the
        overlap test runs on parsed values rather than in SQL.
        Naive values are wall-clock time in `tz`.
        """
        lo, hi = to_local(start, tz), to_local(end, tz)
        events = [
            e
            for e in await self.list_all()
            if to_local(e.start_date, tz) < hi and to_local(e.end_date, tz) >= lo
        ]
        return sorted(events, key=lambda e: to_local(e.start_date, tz))

    async def delete_all(self) -> int:
        async with self._transaction("delete_all_events") as conn:
            cursor = await conn.execute("DELETE FROM events")
            count = cursor.rowcount
        logger.info("events_cleared", count=count)
        return count

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> Event:
        return Event(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            start_date=from_db_timestamp(row["start_date"]),
            end_date=from_db_timestamp(row["end_date"]),
            location=row["location"],
            created_at=from_db_timestamp(row["created_at"]),
        )
