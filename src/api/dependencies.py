"""
Dependency injection container for FastAPI.

Provides use cases and services to route handlers. Tests replace these
through app.dependency_overrides.
"""

from functools import lru_cache

from src.application.background import BackgroundTaskRunner, get_background_runner
from src.application.services import get_notification_store
from src.application.use_cases import (
    ManageAppointmentsUseCase,
    ManageEventsUseCase,
    ManageTasksUseCase,
    ResetDataUseCase,
)
from src.config import Settings, get_settings
from src.core.services import NotificationStore
from src.infrastructure.storage.sqlite import (
    get_appointment_store,
    get_event_store,
    get_task_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Service dependencies
def get_notifications() -> NotificationStore:
    """Get the notification store bound to the process scheduler."""
    return get_notification_store()


def get_runner() -> BackgroundTaskRunner:
    """Get the background rescan runner."""
    return get_background_runner()


# Use case dependencies
def get_task_use_case() -> ManageTasksUseCase:
    return ManageTasksUseCase()


def get_event_use_case() -> ManageEventsUseCase:
    return ManageEventsUseCase()


def get_appointment_use_case() -> ManageAppointmentsUseCase:
    return ManageAppointmentsUseCase()


async def get_reset_use_case() -> ResetDataUseCase:
    """Get reset use case wired to the global stores."""
    return ResetDataUseCase(
        notifications=get_notification_store(),
        task_store=await get_task_store(),
        event_store=await get_event_store(),
        appointment_store=await get_appointment_store(),
    )
