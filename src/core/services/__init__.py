"""Core business services."""

from src.core.services.messages import MessageCatalog, supported_locales
from src.core.services.notification_store import NotificationStore
from src.core.services.reminder_policy import (
    DEFAULT_RULES,
    ReminderRules,
    anchor_of,
    compute_reminder,
    fire_time_for,
    to_local,
)
from src.core.services.reminder_sync import ReminderLifecycleHooks

__all__ = [
    "MessageCatalog",
    "supported_locales",
    "NotificationStore",
    "ReminderLifecycleHooks",
    "ReminderRules",
    "DEFAULT_RULES",
    "anchor_of",
    "compute_reminder",
    "fire_time_for",
    "to_local",
]
