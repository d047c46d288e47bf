"""Reminder-bearing organizer records: tasks, events and appointments."""

from datetime import UTC, datetime
from enum import Enum
from typing import ClassVar
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RecordKind(str, Enum):
    """Kind of reminder-bearing record."""

    TASK = "task"
    EVENT = "event"
    APPOINTMENT = "appointment"

    @property
    def table(self) -> str:
        """Database table holding this kind of record."""
        return f"{self.value}s"

    @property
    def notification_prefix(self) -> str:
        """Prefix of the deterministic notification id."""
        return "appt" if self is RecordKind.APPOINTMENT else self.value


class Task(BaseModel):
    """
    A to-do item with an optional due date.

    A due date at exactly 00:00 means "some time that day".
    """

    kind: ClassVar[RecordKind] = RecordKind.TASK

    id: str = Field(default_factory=_new_id)
    title: str = Field(..., min_length=1)
    description: str | None = None
    due_date: datetime | None = None
    is_completed: bool = False
    created_at: datetime = Field(default_factory=_utcnow)


class Event(BaseModel):
    """Calendar event spanning start_date to end_date."""

    kind: ClassVar[RecordKind] = RecordKind.EVENT

    id: str = Field(default_factory=_new_id)
    title: str = Field(..., min_length=1)
    description: str | None = None
    start_date: datetime
    end_date: datetime
    location: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    @model_validator(mode="after")
    def check_range(self) -> "Event":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class Appointment(BaseModel):
    """Appointment at a single point in time."""

    kind: ClassVar[RecordKind] = RecordKind.APPOINTMENT

    id: str = Field(default_factory=_new_id)
    title: str = Field(..., min_length=1)
    date: datetime
    contact: str | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)


Record = Task | Event | Appointment
