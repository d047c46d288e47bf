"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services
3. Providing factory functions for dependency injection
4. Running the background reminder rescan

Use cases are the only entry point for API handlers.
"""

from src.application.background import (
    BackgroundTaskConfig,
    BackgroundTaskRunner,
    TaskState,
    TriggerSource,
    get_background_runner,
    register_background_task,
    reset_background_runner,
    standalone_rescan,
)
from src.application.dto.requests import (
    CreateAppointmentRequest,
    CreateEventRequest,
    CreateTaskRequest,
    UpdateAppointmentRequest,
    UpdateEventRequest,
    UpdateTaskRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    RescanResponse,
)
from src.application.services import (
    build_notification_store,
    build_reminder_hooks,
    get_notification_store,
    get_reminder_hooks,
    get_scheduler,
    reset_services,
)
from src.application.use_cases import (
    ManageAppointmentsUseCase,
    ManageEventsUseCase,
    ManageTasksUseCase,
    RescanRemindersUseCase,
    RescanResult,
    RescanStatus,
    ResetDataUseCase,
)

__all__ = [
    # Request DTOs
    "CreateTaskRequest",
    "UpdateTaskRequest",
    "CreateEventRequest",
    "UpdateEventRequest",
    "CreateAppointmentRequest",
    "UpdateAppointmentRequest",
    # Response DTOs
    "ErrorResponse",
    "HealthResponse",
    "RescanResponse",
    # Use Cases
    "ManageTasksUseCase",
    "ManageEventsUseCase",
    "ManageAppointmentsUseCase",
    "RescanRemindersUseCase",
    "RescanResult",
    "RescanStatus",
    "ResetDataUseCase",
    # Background task
    "BackgroundTaskConfig",
    "BackgroundTaskRunner",
    "TaskState",
    "TriggerSource",
    "register_background_task",
    "get_background_runner",
    "reset_background_runner",
    "standalone_rescan",
    # Service factories
    "get_scheduler",
    "get_notification_store",
    "get_reminder_hooks",
    "build_notification_store",
    "build_reminder_hooks",
    "reset_services",
]
