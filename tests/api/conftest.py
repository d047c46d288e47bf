"""API test fixtures: real SQLite stores, in-memory notification backend."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import (
    get_appointment_use_case,
    get_event_use_case,
    get_notifications,
    get_reset_use_case,
    get_runner,
    get_task_use_case,
)
from src.api.main import app
from src.application.background import BackgroundTaskRunner
from src.application.use_cases import (
    ManageAppointmentsUseCase,
    ManageEventsUseCase,
    ManageTasksUseCase,
    RescanRemindersUseCase,
    ResetDataUseCase,
)
from src.core.services import ReminderLifecycleHooks
from src.infrastructure.storage.sqlite import (
    SQLiteAppointmentStore,
    SQLiteEventStore,
    SQLiteTaskStore,
)


@pytest.fixture
def stores(pool) -> dict:
    return {
        "task_store": SQLiteTaskStore(pool),
        "event_store": SQLiteEventStore(pool),
        "appointment_store": SQLiteAppointmentStore(pool),
    }


@pytest.fixture
def runner(stores, notification_store, rules, now) -> BackgroundTaskRunner:
    async def scan():
        return await RescanRemindersUseCase(
            notification_store, rules=rules, clock=lambda: now, **stores
        ).execute()

    return BackgroundTaskRunner(scan, task_id="test.rescan", timeout_seconds=5)


@pytest.fixture
async def client(stores, notification_store, runner, rules, now) -> AsyncGenerator[AsyncClient, None]:
    """Async client with use cases bound to the test database."""
    hooks = ReminderLifecycleHooks(notification_store, rules=rules, clock=lambda: now)

    app.dependency_overrides[get_task_use_case] = lambda: ManageTasksUseCase(
        stores["task_store"], hooks
    )
    app.dependency_overrides[get_event_use_case] = lambda: ManageEventsUseCase(
        stores["event_store"], hooks
    )
    app.dependency_overrides[get_appointment_use_case] = lambda: ManageAppointmentsUseCase(
        stores["appointment_store"], hooks
    )
    app.dependency_overrides[get_notifications] = lambda: notification_store
    app.dependency_overrides[get_runner] = lambda: runner
    app.dependency_overrides[get_reset_use_case] = lambda: ResetDataUseCase(
        notification_store, **stores
    )

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
