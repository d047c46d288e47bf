"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Datetimes without an offset are read as device-local wall-clock time.
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator


class CreateTaskRequest(BaseModel):
    """Request to create a task."""

    title: str = Field(..., min_length=1, description="Task title")
    description: str | None = Field(default=None, description="Free-text details")
    due_date: datetime | None = Field(
        default=None,
        description="Due date. Exactly 00:00 means 'some time that day'.",
        examples=["2025-03-10T00:00:00", "2025-03-10T14:30:00"],
    )


class UpdateTaskRequest(BaseModel):
    """Partial task update. Only fields that are sent are changed."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    due_date: datetime | None = None
    is_completed: bool | None = None


class CreateEventRequest(BaseModel):
    """Request to create a calendar event."""

    title: str = Field(..., min_length=1, description="Event title")
    description: str | None = None
    start_date: datetime = Field(..., description="Event start")
    end_date: datetime = Field(..., description="Event end")
    location: str | None = None

    @model_validator(mode="after")
    def check_range(self) -> "CreateEventRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class UpdateEventRequest(BaseModel):
    """Partial event update. Only fields that are sent are changed."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    location: str | None = None


class CreateAppointmentRequest(BaseModel):
    """Request to create an appointment."""

    title: str = Field(..., min_length=1, description="Appointment title")
    date: datetime = Field(..., description="Appointment time")
    contact: str | None = Field(default=None, description="Who the appointment is with")
    notes: str | None = None


class UpdateAppointmentRequest(BaseModel):
    """Partial appointment update. Only fields that are sent are changed."""

    title: str | None = Field(default=None, min_length=1)
    date: datetime | None = None
    contact: str | None = None
    notes: str | None = None
