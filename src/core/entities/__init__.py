"""Core domain entities."""

from src.core.entities.notification import (
    PendingNotification,
    ScheduledReminder,
    notification_id_for,
)
from src.core.entities.record import (
    Appointment,
    Event,
    Record,
    RecordKind,
    Task,
)

__all__ = [
    # Records
    "Task",
    "Event",
    "Appointment",
    "Record",
    "RecordKind",
    # Notifications
    "ScheduledReminder",
    "PendingNotification",
    "notification_id_for",
]
