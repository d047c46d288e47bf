"""SQLite implementation of appointment storage."""

import aiosqlite

from src.config import get_logger
from src.core.entities.record import Appointment
from src.core.exceptions import RecordNotFoundError
from src.core.interfaces.storage import IAppointmentStore
from src.infrastructure.storage.sqlite.base import (
    SQLiteStoreBase,
    from_db_timestamp,
    to_db_timestamp,
)

logger = get_logger(__name__)


class SQLiteAppointmentStore(SQLiteStoreBase, IAppointmentStore):
    """SQLite implementation of appointment storage."""

    kind = "appointment"

    async def create(self, appointment: Appointment) -> Appointment:
        async with self._transaction("create_appointment", appointment.id) as conn:
            await conn.execute(
                """
                INSERT INTO appointments (
                    id, title, date, contact, notes, created_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    appointment.id,
                    appointment.title,
                    to_db_timestamp(appointment.date),
                    appointment.contact,
                    appointment.notes,
                    to_db_timestamp(appointment.created_at),
                ),
            )
        logger.info("appointment_created", appointment_id=appointment.id)
        return appointment

    async def get(self, appointment_id: str) -> Appointment | None:
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM appointments WHERE id = ?", (appointment_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_entity(row) if row else None

    async def update(self, appointment: Appointment) -> Appointment:
        async with self._transaction("update_appointment") as conn:
            cursor = await conn.execute(
                """
                UPDATE appointments SET
                    title = ?, date = ?, contact = ?, notes = ?
                WHERE id = ?
                """,
                (
                    appointment.title,
                    to_db_timestamp(appointment.date),
                    appointment.contact,
                    appointment.notes,
                    appointment.id,
                ),
            )
            if cursor.rowcount == 0:
                raise RecordNotFoundError(self.kind, appointment.id)
        logger.info("appointment_updated", appointment_id=appointment.id)
        return appointment

    async def delete(self, appointment_id: str) -> bool:
        async with self._transaction("delete_appointment") as conn:
            cursor = await conn.execute(
                "DELETE FROM appointments WHERE id = ?", (appointment_id,)
            )
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("appointment_deleted", appointment_id=appointment_id)
        return deleted

    async def list_all(self) -> list[Appointment]:
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM appointments ORDER BY created_at DESC"
            )
            rows = await cursor.fetchall()
            return self._convert_rows(rows, self._row_to_entity)

    async def delete_all(self) -> int:
        async with self._transaction("delete_all_appointments") as conn:
            cursor = await conn.execute("DELETE FROM appointments")
            count = cursor.rowcount
        logger.info("appointments_cleared", count=count)
        return count

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> Appointment:
        return Appointment(
            id=row["id"],
            title=row["title"],
            date=from_db_timestamp(row["date"]),
            contact=row["contact"],
            notes=row["notes"],
            created_at=from_db_timestamp(row["created_at"]),
        )
