"""
Manage Tasks Use Case.

Task CRUD plus completion toggling and restore. Every successful write is
followed by the reminder lifecycle hook, after the row has committed.
"""

from src.application.dto.requests import CreateTaskRequest, UpdateTaskRequest
from src.config import get_logger
from src.core.entities.record import RecordKind, Task
from src.core.exceptions import RecordNotFoundError
from src.core.interfaces.storage import ITaskStore
from src.core.services.reminder_sync import ReminderLifecycleHooks

logger = get_logger(__name__)


class ManageTasksUseCase:
    """Use case for creating, editing, completing and deleting tasks."""

    def __init__(
        self,
        task_store: ITaskStore | None = None,
        hooks: ReminderLifecycleHooks | None = None,
    ):
        self._task_store = task_store
        self._hooks = hooks

    async def _get_store(self) -> ITaskStore:
        if self._task_store is None:
            from src.infrastructure.storage.sqlite import get_task_store

            self._task_store = await get_task_store()
        return self._task_store

    def _get_hooks(self) -> ReminderLifecycleHooks:
        if self._hooks is None:
            from src.application.services import get_reminder_hooks

            self._hooks = get_reminder_hooks()
        return self._hooks

    async def create(self, request: CreateTaskRequest) -> Task:
        store = await self._get_store()
        task = await store.create(
            Task(
                title=request.title,
                description=request.description,
                due_date=request.due_date,
            )
        )
        await self._get_hooks().on_created(task)
        return task

    async def get(self, task_id: str) -> Task:
        store = await self._get_store()
        task = await store.get(task_id)
        if task is None:
            raise RecordNotFoundError(RecordKind.TASK.value, task_id)
        return task

    async def list_all(self, include_completed: bool = True) -> list[Task]:
        store = await self._get_store()
        tasks = await store.list_all()
        if not include_completed:
            tasks = [t for t in tasks if not t.is_completed]
        return tasks

    async def update(self, task_id: str, request: UpdateTaskRequest) -> Task:
        """Apply the fields present in the request and re-sync the reminder."""
        existing = await self.get(task_id)
        changes = {
            k: v
            for k, v in request.model_dump(exclude_unset=True).items()
            if v is not None or k in ("description", "due_date")
        }
        task = Task.model_validate({**existing.model_dump(), **changes})
        return await self._save(task)

    async def toggle_status(self, task_id: str) -> Task:
        """Flip completion. Completing cancels the reminder, reopening re-arms it."""
        existing = await self.get(task_id)
        task = existing.model_copy(update={"is_completed": not existing.is_completed})
        return await self._save(task)

    async def restore(self, task_id: str) -> Task:
        """
        Reopen a task and move its due date to now.

        "Now" comes from the hooks' clock, so the hook sees a due time that
        is not in the future and schedules nothing. The one exception is a
        restore during the minute after local midnight: that due time reads
        as date-only and gets the usual morning reminder. The stale reminder,
        if any, is cancelled.
        """
        existing = await self.get(task_id)
        task = existing.model_copy(
            update={"due_date": self._get_hooks().now(), "is_completed": False}
        )
        return await self._save(task)

    async def delete(self, task_id: str) -> None:
        store = await self._get_store()
        deleted = await store.delete(task_id)
        await self._get_hooks().on_deleted(RecordKind.TASK, task_id)
        if not deleted:
            raise RecordNotFoundError(RecordKind.TASK.value, task_id)

    async def _save(self, task: Task) -> Task:
        store = await self._get_store()
        updated = await store.update(task)
        await self._get_hooks().on_updated(updated)
        return updated
