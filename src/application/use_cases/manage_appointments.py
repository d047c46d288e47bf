"""Manage Appointments Use Case."""

from src.application.dto.requests import CreateAppointmentRequest, UpdateAppointmentRequest
from src.config import get_logger
from src.core.entities.record import Appointment, RecordKind
from src.core.exceptions import RecordNotFoundError
from src.core.interfaces.storage import IAppointmentStore
from src.core.services.reminder_sync import ReminderLifecycleHooks

logger = get_logger(__name__)


class ManageAppointmentsUseCase:
    """Use case for appointments; each write re-syncs the appointment reminder."""

    def __init__(
        self,
        appointment_store: IAppointmentStore | None = None,
        hooks: ReminderLifecycleHooks | None = None,
    ):
        self._appointment_store = appointment_store
        self._hooks = hooks

    async def _get_store(self) -> IAppointmentStore:
        if self._appointment_store is None:
            from src.infrastructure.storage.sqlite import get_appointment_store

            self._appointment_store = await get_appointment_store()
        return self._appointment_store

    def _get_hooks(self) -> ReminderLifecycleHooks:
        if self._hooks is None:
            from src.application.services import get_reminder_hooks

            self._hooks = get_reminder_hooks()
        return self._hooks

    async def create(self, request: CreateAppointmentRequest) -> Appointment:
        store = await self._get_store()
        appointment = await store.create(Appointment(**request.model_dump()))
        await self._get_hooks().on_created(appointment)
        return appointment

    async def get(self, appointment_id: str) -> Appointment:
        store = await self._get_store()
        appointment = await store.get(appointment_id)
        if appointment is None:
            raise RecordNotFoundError(RecordKind.APPOINTMENT.value, appointment_id)
        return appointment

    async def list_all(self) -> list[Appointment]:
        store = await self._get_store()
        return await store.list_all()

    async def update(
        self, appointment_id: str, request: UpdateAppointmentRequest
    ) -> Appointment:
        existing = await self.get(appointment_id)
        changes = {
            k: v
            for k, v in request.model_dump(exclude_unset=True).items()
            if v is not None or k in ("contact", "notes")
        }
        appointment = Appointment.model_validate({**existing.model_dump(), **changes})

        store = await self._get_store()
        updated = await store.update(appointment)
        await self._get_hooks().on_updated(updated)
        return updated

    async def delete(self, appointment_id: str) -> None:
        store = await self._get_store()
        deleted = await store.delete(appointment_id)
        await self._get_hooks().on_deleted(RecordKind.APPOINTMENT, appointment_id)
        if not deleted:
            raise RecordNotFoundError(RecordKind.APPOINTMENT.value, appointment_id)
