"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.core.entities import Appointment, Event, PendingNotification, Task


class TaskResponse(BaseModel):
    """Task as returned by the API."""

    id: str
    title: str
    description: str | None = None
    due_date: datetime | None = None
    is_completed: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResponse":
        return cls.model_validate(task.model_dump())


class TaskListResponse(BaseModel):
    tasks: list[TaskResponse]
    total: int


class EventResponse(BaseModel):
    """Calendar event as returned by the API."""

    id: str
    title: str
    description: str | None = None
    start_date: datetime
    end_date: datetime
    location: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, event: Event) -> "EventResponse":
        return cls.model_validate(event.model_dump())


class EventListResponse(BaseModel):
    events: list[EventResponse]
    total: int


class AppointmentResponse(BaseModel):
    """Appointment as returned by the API."""

    id: str
    title: str
    date: datetime
    contact: str | None = None
    notes: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls.model_validate(appointment.model_dump())


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentResponse]
    total: int


class PendingNotificationResponse(BaseModel):
    """A notification waiting to be delivered."""

    id: str = Field(..., description="Deterministic id, e.g. task-<id> or appt-<id>")
    fire_at: datetime
    title: str
    message: str
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_entity(cls, pending: PendingNotification) -> "PendingNotificationResponse":
        return cls.model_validate(pending.model_dump())


class NotificationListResponse(BaseModel):
    notifications: list[PendingNotificationResponse]
    total: int


class RescanResponse(BaseModel):
    """Outcome of one background rescan."""

    status: str = Field(..., description="completed, timed_out, failed or deferred")
    scanned: int = 0
    scheduled: int = 0
    outside_window: int = 0
    not_warranted: int = 0
    failed: int = 0
    scheduled_ids: list[str] = Field(default_factory=list)
    started_at: datetime | None = None
    duration_ms: float | None = None


class ResetResponse(BaseModel):
    """Counts removed by a full data reset."""

    tasks: int
    events: int
    appointments: int
    notifications: int


class ComponentHealthResponse(BaseModel):
    """Health of one runtime component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ComponentHealthResponse | None = None
    scheduler: ComponentHealthResponse | None = None
    background_task: str | None = Field(
        default=None, description="Background task state: idle or running"
    )


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. TASK_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
