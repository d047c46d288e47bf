"""Tests for record lifecycle reminder hooks."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from src.core.entities import Appointment, Event, RecordKind, Task
from src.core.services import NotificationStore, ReminderLifecycleHooks, ReminderRules

from tests.conftest import TZ, InMemoryNotificationBackend


@pytest.fixture
def hooks(notification_store: NotificationStore, rules: ReminderRules, now: datetime):
    return ReminderLifecycleHooks(notification_store, rules=rules, clock=lambda: now)


class TestOnSaved:
    async def test_cancels_before_scheduling(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend, now
    ):
        task = Task(id="1", title="Report", due_date=now + timedelta(hours=4))

        reminder = await hooks.on_created(task)

        assert reminder is not None
        assert fake_backend.calls == [("remove", "task-1"), ("add", "task-1")]

    async def test_update_keeps_single_notification(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend, now
    ):
        task = Task(id="1", title="Report", due_date=now + timedelta(hours=4))
        await hooks.on_created(task)

        moved = task.model_copy(update={"due_date": now + timedelta(days=2, hours=3)})
        await hooks.on_updated(moved)
        await hooks.on_updated(moved)

        assert list(fake_backend.pending_by_id) == ["task-1"]
        assert fake_backend.pending_by_id["task-1"].fire_at == now + timedelta(days=2, hours=3)

    async def test_completing_task_cancels(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend, now
    ):
        task = Task(id="1", title="Report", due_date=now + timedelta(hours=4))
        await hooks.on_created(task)

        result = await hooks.on_updated(task.model_copy(update={"is_completed": True}))

        assert result is None
        assert fake_backend.pending_by_id == {}

    async def test_clearing_due_date_cancels(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend, now
    ):
        task = Task(id="1", title="Report", due_date=now + timedelta(hours=4))
        await hooks.on_created(task)

        await hooks.on_updated(task.model_copy(update={"due_date": None}))

        assert fake_backend.pending_by_id == {}

    async def test_moving_into_past_cancels(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend, now
    ):
        appt = Appointment(id="9", title="Vet", date=now + timedelta(hours=2))
        await hooks.on_created(appt)
        assert "appt-9" in fake_backend.pending_by_id

        await hooks.on_updated(appt.model_copy(update={"date": now - timedelta(hours=1)}))

        assert fake_backend.pending_by_id == {}

    async def test_event_gets_lead_time(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend
    ):
        start = datetime(2025, 3, 12, 20, 0, tzinfo=TZ)
        await hooks.on_created(Event(id="e", title="Show", start_date=start, end_date=start))

        assert fake_backend.pending_by_id["event-e"].fire_at == start - timedelta(minutes=15)

    async def test_never_raises(self, rules: ReminderRules, now):
        backend = AsyncMock()
        backend.remove.side_effect = RuntimeError("boom")
        backend.add.side_effect = RuntimeError("boom")
        hooks = ReminderLifecycleHooks(
            NotificationStore(backend, clock=lambda: now), rules=rules, clock=lambda: now
        )

        task = Task(id="1", title="Report", due_date=now + timedelta(hours=4))

        assert await hooks.on_saved(task) is None

    async def test_unexpected_store_error_is_swallowed(self, rules: ReminderRules, now):
        notifications = AsyncMock(spec=NotificationStore)
        notifications.cancel.side_effect = RuntimeError("boom")
        hooks = ReminderLifecycleHooks(notifications, rules=rules, clock=lambda: now)

        task = Task(id="1", title="Report", due_date=now + timedelta(hours=4))

        assert await hooks.on_saved(task) is None
        notifications.schedule_reminder.assert_not_called()


class TestOnDeleted:
    async def test_delete_cancels(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend, now
    ):
        await hooks.on_created(Task(id="1", title="Report", due_date=now + timedelta(hours=4)))

        await hooks.on_deleted(RecordKind.TASK, "1")

        assert fake_backend.pending_by_id == {}

    async def test_delete_without_notification(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend
    ):
        await hooks.on_deleted(RecordKind.APPOINTMENT, "nothing")

        assert fake_backend.calls == [("remove", "appt-nothing")]

    async def test_delete_swallows_errors(self, now):
        notifications = AsyncMock(spec=NotificationStore)
        notifications.cancel.side_effect = RuntimeError("boom")
        hooks = ReminderLifecycleHooks(notifications, clock=lambda: now)

        await hooks.on_deleted(RecordKind.EVENT, "1")


async def test_full_lifecycle_sequence(
    hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend, now
):
    task = Task(id="42", title="Taxes", due_date=now + timedelta(days=1))

    await hooks.on_created(task)
    for hours in (5, 7):
        task = task.model_copy(update={"due_date": now + timedelta(hours=hours)})
        await hooks.on_updated(task)
        assert len(fake_backend.pending_by_id) == 1

    await hooks.on_deleted(RecordKind.TASK, task.id)

    assert fake_backend.pending_by_id == {}


class TestScenarios:
    async def test_date_only_task_created_for_tomorrow(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend
    ):
        task = Task(id="t1", title="Pay rent", due_date=datetime(2025, 3, 11, 0, 0, tzinfo=TZ))

        await hooks.on_created(task)

        assert fake_backend.pending_by_id["task-t1"].fire_at == datetime(2025, 3, 11, 9, 0, tzinfo=TZ)

    async def test_completing_task_removes_its_reminder(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend
    ):
        task = Task(id="t1", title="Pay rent", due_date=datetime(2025, 3, 11, 0, 0, tzinfo=TZ))
        await hooks.on_created(task)

        await hooks.on_updated(task.model_copy(update={"is_completed": True}))

        assert "task-t1" not in fake_backend.pending_by_id

    async def test_appointment_in_forty_minutes_fires_in_ten(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend, now
    ):
        await hooks.on_created(Appointment(id="a1", title="Dentist", date=now + timedelta(minutes=40)))

        assert fake_backend.pending_by_id["appt-a1"].fire_at == now + timedelta(minutes=10)

    async def test_appointment_in_ten_minutes_is_not_scheduled(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend, now
    ):
        result = await hooks.on_created(
            Appointment(id="a1", title="Dentist", date=now + timedelta(minutes=10))
        )

        assert result is None
        assert fake_backend.pending_by_id == {}

    async def test_event_hook_uses_event_prefix(
        self, hooks: ReminderLifecycleHooks, fake_backend: InMemoryNotificationBackend, now
    ):
        start = now + timedelta(hours=2)
        await hooks.on_created(Event(id="e1", title="Match", start_date=start, end_date=start))

        assert list(fake_backend.pending_by_id) == ["event-e1"]
