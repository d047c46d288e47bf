"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.notifications import INotificationBackend
from src.core.interfaces.storage import (
    IAppointmentStore,
    IEventStore,
    ITaskStore,
)

__all__ = [
    "ITaskStore",
    "IEventStore",
    "IAppointmentStore",
    "INotificationBackend",
]
