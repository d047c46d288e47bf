"""Notification entities derived from organizer records."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.core.entities.record import RecordKind


def notification_id_for(kind: RecordKind, record_id: str) -> str:
    """
    Derive the notification id for a record.

    The same record always maps to the same id, which is what lets a
    rescan overwrite rather than duplicate and lets a delete cancel
    without any lookup.
    """
    return f"{kind.notification_prefix}-{record_id}"


class ScheduledReminder(BaseModel):
    """
    A notification the reminder policy wants delivered.

    Pure Pydantic model, not persisted in the records database.
    """

    notification_id: str
    fire_at: datetime
    title: str
    body: str
    source_type: RecordKind
    source_id: str

    @property
    def metadata(self) -> dict[str, str]:
        """Payload attached to the notification for tap navigation."""
        return {"type": self.source_type.value, "id": self.source_id}


class PendingNotification(BaseModel):
    """A notification currently waiting in the scheduler backend."""

    id: str
    fire_at: datetime
    title: str
    message: str
    metadata: dict[str, Any] = Field(default_factory=dict)
