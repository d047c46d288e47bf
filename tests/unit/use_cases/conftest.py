"""Fixtures for record use case tests: real SQLite stores, in-memory scheduler."""

import pytest

from src.core.services import ReminderLifecycleHooks
from src.infrastructure.storage.sqlite import (
    SQLiteAppointmentStore,
    SQLiteEventStore,
    SQLiteTaskStore,
)


@pytest.fixture
def hooks(notification_store, rules, now) -> ReminderLifecycleHooks:
    return ReminderLifecycleHooks(notification_store, rules=rules, clock=lambda: now)


@pytest.fixture
def task_store(pool) -> SQLiteTaskStore:
    return SQLiteTaskStore(pool)


@pytest.fixture
def event_store(pool) -> SQLiteEventStore:
    return SQLiteEventStore(pool)


@pytest.fixture
def appointment_store(pool) -> SQLiteAppointmentStore:
    return SQLiteAppointmentStore(pool)
