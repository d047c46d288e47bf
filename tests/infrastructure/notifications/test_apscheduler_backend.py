"""Tests for the APScheduler notification backend."""

import asyncio
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta

import pytest
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.jobstores.sqlalchemy import SQLAlchemyJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from src.config import get_settings
from src.config.settings import NotificationSettings, Settings
from src.core.exceptions import NotificationPermissionError, SchedulerUnavailableError
from src.core.services import NotificationStore
from src.infrastructure.notifications import (
    NOTIFICATION_JOBSTORE,
    APSchedulerNotificationBackend,
    DeliveredNotification,
    create_scheduler,
    register_sink,
    start_jobstore_polling,
)


def _soon(hours: float = 1) -> datetime:
    return datetime.now().astimezone() + timedelta(hours=hours)


@pytest.fixture
async def scheduler() -> AsyncGenerator[AsyncIOScheduler, None]:
    sched = create_scheduler(persistent=False)
    sched.start(paused=True)
    yield sched
    sched.shutdown(wait=False)


@pytest.fixture
def backend(scheduler: AsyncIOScheduler) -> APSchedulerNotificationBackend:
    return APSchedulerNotificationBackend(scheduler)


class TestCreateScheduler:
    def test_in_memory_job_stores(self):
        sched = create_scheduler(persistent=False)

        assert isinstance(sched._jobstores[NOTIFICATION_JOBSTORE], MemoryJobStore)
        assert isinstance(sched._jobstores["default"], MemoryJobStore)
        assert sched.running is False

    def test_persistent_store_in_data_dir(self):
        sched = create_scheduler()

        store = sched._jobstores[NOTIFICATION_JOBSTORE]
        assert isinstance(store, SQLAlchemyJobStore)
        assert get_settings().jobstore_path.parent.exists()

    async def test_jobstore_polling_job(self, scheduler: AsyncIOScheduler):
        start_jobstore_polling(scheduler, interval_seconds=30)
        start_jobstore_polling(scheduler, interval_seconds=30)

        job = scheduler.get_job("notification_jobstore_polling")
        assert job is not None
        assert len(scheduler.get_jobs(jobstore="default")) == 1


class TestBackend:
    async def test_add_and_list(self, backend: APSchedulerNotificationBackend):
        fire_at = _soon()

        await backend.add("task-1", "Task Reminder", "Body", fire_at, {"type": "task", "id": "1"})

        [pending] = await backend.list_pending()
        assert pending.id == "task-1"
        assert pending.fire_at == fire_at
        assert pending.title == "Task Reminder"
        assert pending.message == "Body"
        assert pending.metadata == {"type": "task", "id": "1"}

    async def test_add_same_id_replaces(self, backend: APSchedulerNotificationBackend):
        await backend.add("event-1", "Event Reminder", "old", _soon(1))
        await backend.add("event-1", "Event Reminder", "new", _soon(2))

        pending = await backend.list_pending()
        assert [p.message for p in pending] == ["new"]

    async def test_job_carries_channel_settings(
        self, backend: APSchedulerNotificationBackend, scheduler: AsyncIOScheduler
    ):
        await backend.add("appt-1", "Appointment Reminder", "Soon", _soon())

        job = scheduler.get_job("appt-1", jobstore=NOTIFICATION_JOBSTORE)
        assert job.kwargs["channel_id"] == "organext-reminders"
        assert job.kwargs["importance"] == "high"
        assert job.kwargs["allow_while_idle"] is True

    async def test_remove(self, backend: APSchedulerNotificationBackend):
        await backend.add("task-1", "T", "B", _soon())

        assert await backend.remove("task-1") is True
        assert await backend.remove("task-1") is False
        assert await backend.list_pending() == []

    async def test_remove_all_leaves_default_store(
        self, backend: APSchedulerNotificationBackend, scheduler: AsyncIOScheduler
    ):
        start_jobstore_polling(scheduler)
        await backend.add("task-1", "T", "B", _soon(1))
        await backend.add("task-2", "T", "B", _soon(2))

        assert await backend.remove_all() == 2
        assert await backend.list_pending() == []
        assert scheduler.get_job("notification_jobstore_polling") is not None

    async def test_list_sorted(self, backend: APSchedulerNotificationBackend):
        await backend.add("late", "T", "B", _soon(5))
        await backend.add("early", "T", "B", _soon(1))

        assert [p.id for p in await backend.list_pending()] == ["early", "late"]

    async def test_permission_denied(self, scheduler: AsyncIOScheduler):
        settings = Settings(notifications=NotificationSettings(enabled=False))
        backend = APSchedulerNotificationBackend(scheduler, settings=settings)

        with pytest.raises(NotificationPermissionError):
            await backend.add("task-1", "T", "B", _soon())

    async def test_not_running_raises(self):
        backend = APSchedulerNotificationBackend(create_scheduler(persistent=False))

        with pytest.raises(SchedulerUnavailableError):
            await backend.add("task-1", "T", "B", _soon())
        with pytest.raises(SchedulerUnavailableError):
            await backend.list_pending()

    async def test_store_swallows_permission_error(self, scheduler: AsyncIOScheduler):
        settings = Settings(notifications=NotificationSettings(enabled=False))
        store = NotificationStore(APSchedulerNotificationBackend(scheduler, settings=settings))

        assert await store.schedule("task-1", "T", "B", _soon()) is False


class TestPersistence:
    async def test_jobs_survive_restart(self):
        first = create_scheduler()
        first.start(paused=True)
        await APSchedulerNotificationBackend(first).add(
            "appt-7", "Appointment Reminder", "Dentist", _soon(3), {"type": "appointment", "id": "7"}
        )
        first.shutdown(wait=False)

        second = create_scheduler()
        second.start(paused=True)
        try:
            [pending] = await APSchedulerNotificationBackend(second).list_pending()
        finally:
            second.shutdown(wait=False)

        assert pending.id == "appt-7"
        assert pending.metadata == {"type": "appointment", "id": "7"}


async def test_due_job_is_delivered():
    delivered: list[DeliveredNotification] = []
    arrived = asyncio.Event()

    def sink(notification: DeliveredNotification) -> None:
        delivered.append(notification)
        arrived.set()

    register_sink(sink)
    sched = create_scheduler(persistent=False)
    sched.start()
    try:
        await APSchedulerNotificationBackend(sched).add(
            "task-9", "Task Reminder", "Now", datetime.now().astimezone() + timedelta(milliseconds=200)
        )
        await asyncio.wait_for(arrived.wait(), timeout=5)
    finally:
        sched.shutdown(wait=False)

    assert delivered[0].id == "task-9"
    assert delivered[0].message == "Now"
