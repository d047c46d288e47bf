"""
Reset Data Use Case.

Deletes every task, event and appointment and cancels every pending
notification, so no reminder outlives the records it was built from.
"""

from dataclasses import dataclass

from src.config import get_logger
from src.core.interfaces.storage import IAppointmentStore, IEventStore, ITaskStore
from src.core.services.notification_store import NotificationStore

logger = get_logger(__name__)


@dataclass
class ResetResult:
    """Counts removed by a reset."""

    tasks: int = 0
    events: int = 0
    appointments: int = 0
    notifications: int = 0


class ResetDataUseCase:
    """Use case for wiping all organizer data."""

    def __init__(
        self,
        notifications: NotificationStore,
        task_store: ITaskStore,
        event_store: IEventStore,
        appointment_store: IAppointmentStore,
    ):
        self._notifications = notifications
        self._task_store = task_store
        self._event_store = event_store
        self._appointment_store = appointment_store

    async def execute(self) -> ResetResult:
        result = ResetResult(
            tasks=await self._task_store.delete_all(),
            events=await self._event_store.delete_all(),
            appointments=await self._appointment_store.delete_all(),
        )
        result.notifications = await self._notifications.cancel_all()

        logger.info(
            "data_reset",
            tasks=result.tasks,
            events=result.events,
            appointments=result.appointments,
            notifications=result.notifications,
        )
        return result
