"""Pytest fixtures for SQLite storage tests."""

from datetime import datetime, timedelta
from pathlib import Path

import pytest

from src.core.entities import Appointment, Event, Task
from src.infrastructure.storage.sqlite import (
    SQLiteAppointmentStore,
    SQLiteEventStore,
    SQLiteTaskStore,
)

from tests.conftest import TZ


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Path of a database that does not exist yet."""
    return tmp_path / "test.db"


@pytest.fixture
def task_store(pool) -> SQLiteTaskStore:
    return SQLiteTaskStore(pool)


@pytest.fixture
def event_store(pool) -> SQLiteEventStore:
    return SQLiteEventStore(pool)


@pytest.fixture
def appointment_store(pool) -> SQLiteAppointmentStore:
    return SQLiteAppointmentStore(pool)


@pytest.fixture
def sample_task() -> Task:
    return Task(
        id="task-a",
        title="File taxes",
        description="Before the deadline",
        due_date=datetime(2025, 4, 15, 0, 0, tzinfo=TZ),
    )


@pytest.fixture
def sample_event() -> Event:
    start = datetime(2025, 3, 14, 19, 30, tzinfo=TZ)
    return Event(
        id="event-a",
        title="Theatre",
        start_date=start,
        end_date=start + timedelta(hours=2, minutes=30),
        location="Main street 1",
    )


@pytest.fixture
def sample_appointment() -> Appointment:
    return Appointment(
        id="appt-a",
        title="Dentist",
        date=datetime(2025, 3, 11, 8, 15, tzinfo=TZ),
        contact="Dr. Smile",
        notes="Check-up",
    )
