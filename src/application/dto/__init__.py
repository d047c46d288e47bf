"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    CreateAppointmentRequest,
    CreateEventRequest,
    CreateTaskRequest,
    UpdateAppointmentRequest,
    UpdateEventRequest,
    UpdateTaskRequest,
)
from src.application.dto.responses import (
    AppointmentListResponse,
    AppointmentResponse,
    ComponentHealthResponse,
    ErrorResponse,
    EventListResponse,
    EventResponse,
    HealthResponse,
    NotificationListResponse,
    PendingNotificationResponse,
    RescanResponse,
    ResetResponse,
    TaskListResponse,
    TaskResponse,
)

__all__ = [
    # Requests
    "CreateTaskRequest",
    "UpdateTaskRequest",
    "CreateEventRequest",
    "UpdateEventRequest",
    "CreateAppointmentRequest",
    "UpdateAppointmentRequest",
    # Responses
    "TaskResponse",
    "TaskListResponse",
    "EventResponse",
    "EventListResponse",
    "AppointmentResponse",
    "AppointmentListResponse",
    "PendingNotificationResponse",
    "NotificationListResponse",
    "RescanResponse",
    "ResetResponse",
    "ComponentHealthResponse",
    "HealthResponse",
    "ErrorResponse",
]
