"""
Manage Events Use Case.

Calendar event CRUD and per-day listing. Writes are followed by the
reminder lifecycle hook once committed.
"""

from datetime import date, datetime, time, timedelta

from src.application.dto.requests import CreateEventRequest, UpdateEventRequest
from src.config import get_logger
from src.core.entities.record import Event, RecordKind
from src.core.exceptions import RecordNotFoundError, ValidationError
from src.core.interfaces.storage import IEventStore
from src.core.services.reminder_policy import to_local
from src.core.services.reminder_sync import ReminderLifecycleHooks

logger = get_logger(__name__)


class ManageEventsUseCase:
    """Use case for calendar events."""

    def __init__(
        self,
        event_store: IEventStore | None = None,
        hooks: ReminderLifecycleHooks | None = None,
    ):
        self._event_store = event_store
        self._hooks = hooks

    async def _get_store(self) -> IEventStore:
        if self._event_store is None:
            from src.infrastructure.storage.sqlite import get_event_store

            self._event_store = await get_event_store()
        return self._event_store

    def _get_hooks(self) -> ReminderLifecycleHooks:
        if self._hooks is None:
            from src.application.services import get_reminder_hooks

            self._hooks = get_reminder_hooks()
        return self._hooks

    async def create(self, request: CreateEventRequest) -> Event:
        store = await self._get_store()
        event = await store.create(Event(**request.model_dump()))
        await self._get_hooks().on_created(event)
        return event

    async def get(self, event_id: str) -> Event:
        store = await self._get_store()
        event = await store.get(event_id)
        if event is None:
            raise RecordNotFoundError(RecordKind.EVENT.value, event_id)
        return event

    async def list_all(self) -> list[Event]:
        store = await self._get_store()
        return await store.list_all()

    async def list_for_day(self, day: date) -> list[Event]:
        """Events overlapping the given calendar day in the configured zone."""
        store = await self._get_store()
        tz = self._get_hooks().tz
        start = to_local(datetime.combine(day, time.min), tz)
        end = to_local(datetime.combine(day + timedelta(days=1), time.min), tz)
        return await store.list_between(start, end, tz=tz)

    async def update(self, event_id: str, request: UpdateEventRequest) -> Event:
        existing = await self.get(event_id)
        changes = {
            k: v
            for k, v in request.model_dump(exclude_unset=True).items()
            if v is not None or k in ("description", "location")
        }
        try:
            event = Event.model_validate({**existing.model_dump(), **changes})
        except ValueError as e:
            raise ValidationError("end_date", str(e)) from e

        store = await self._get_store()
        updated = await store.update(event)
        await self._get_hooks().on_updated(updated)
        return updated

    async def delete(self, event_id: str) -> None:
        store = await self._get_store()
        deleted = await store.delete(event_id)
        await self._get_hooks().on_deleted(RecordKind.EVENT, event_id)
        if not deleted:
            raise RecordNotFoundError(RecordKind.EVENT.value, event_id)
