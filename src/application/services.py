"""
Service factory functions for dependency injection.

This module provides factory functions that wire infrastructure
implementations to core services. Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from src.config import Settings, get_logger, get_settings
from src.core.services import (
    MessageCatalog,
    NotificationStore,
    ReminderLifecycleHooks,
    ReminderRules,
)

if TYPE_CHECKING:
    from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = get_logger(__name__)


# Singleton service instances
_scheduler: "AsyncIOScheduler | None" = None
_notification_store: NotificationStore | None = None
_reminder_hooks: ReminderLifecycleHooks | None = None


def get_reminder_rules(settings: Settings | None = None) -> ReminderRules:
    """Reminder rules from configuration."""
    return ReminderRules.from_settings(settings or get_settings())


def get_message_catalog(settings: Settings | None = None) -> MessageCatalog:
    """Message catalog for the configured locale."""
    return MessageCatalog((settings or get_settings()).locale)


def get_scheduler(persistent: bool = True) -> "AsyncIOScheduler":
    """
    Get or create the process-wide scheduler.

    The scheduler is returned unstarted the first time; whoever owns the
    process lifecycle (API lifespan, headless entry point) starts it.
    """
    global _scheduler

    if _scheduler is None:
        # Lazy import infrastructure to avoid circular imports
        from src.infrastructure.notifications import create_scheduler

        _scheduler = create_scheduler(get_settings(), persistent=persistent)
    return _scheduler


def build_notification_store(
    scheduler: "AsyncIOScheduler",
    settings: Settings | None = None,
) -> NotificationStore:
    """Build a NotificationStore over the given scheduler."""
    from src.infrastructure.notifications import APSchedulerNotificationBackend

    settings = settings or get_settings()
    backend = APSchedulerNotificationBackend(scheduler, settings=settings)
    return NotificationStore(backend, tz=settings.local_tz)


def get_notification_store() -> NotificationStore:
    """Get or create the NotificationStore bound to the process scheduler."""
    global _notification_store

    if _notification_store is None:
        _notification_store = build_notification_store(get_scheduler())
    return _notification_store


def build_reminder_hooks(
    notifications: NotificationStore,
    settings: Settings | None = None,
) -> ReminderLifecycleHooks:
    settings = settings or get_settings()
    return ReminderLifecycleHooks(
        notifications,
        rules=get_reminder_rules(settings),
        catalog=get_message_catalog(settings),
    )


def get_reminder_hooks() -> ReminderLifecycleHooks:
    """Get or create the lifecycle hooks used by the record use cases."""
    global _reminder_hooks

    if _reminder_hooks is None:
        _reminder_hooks = build_reminder_hooks(get_notification_store())
    return _reminder_hooks


def shutdown_scheduler(wait: bool = False) -> None:
    """Stop the process scheduler if it is running."""
    if _scheduler is not None and _scheduler.running:
        _scheduler.shutdown(wait=wait)
        logger.info("scheduler_shutdown")


def reset_services() -> None:
    """Reset all singleton services (useful for testing)."""
    global _scheduler, _notification_store, _reminder_hooks

    shutdown_scheduler()
    _scheduler = None
    _notification_store = None
    _reminder_hooks = None
