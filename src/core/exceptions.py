"""
Domain exceptions for the organizer reminder engine.

Storage errors propagate to the caller of a record operation. Notification
errors are raised by backends and swallowed (with logging) by the
NotificationStore facade, since reminders are best-effort.
"""

from typing import Any


class OrganizerError(Exception):
    """Base exception for all organizer errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(OrganizerError):
    """Base exception for storage operations."""

    pass


class RecordNotFoundError(StorageError):
    """Task, event or appointment not found."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(
            f"{kind.capitalize()} not found: {record_id}",
            code=f"{kind.upper()}_NOT_FOUND",
            details={"kind": kind, "record_id": record_id},
        )


class DuplicateRecordError(StorageError):
    """Record with the same id already exists."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(
            f"{kind.capitalize()} already exists: {record_id}",
            code="DUPLICATE_RECORD",
            details={"kind": kind, "record_id": record_id},
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Notification Exceptions
class NotificationError(OrganizerError):
    """Base exception for local notification operations."""

    pass


class NotificationPermissionError(NotificationError):
    """Notifications are disabled or permission was revoked."""

    def __init__(self, notification_id: str):
        super().__init__(
            f"Notification permission denied for {notification_id}",
            code="NOTIFICATION_PERMISSION_DENIED",
            details={"notification_id": notification_id},
        )


class SchedulerUnavailableError(NotificationError):
    """The notification scheduler backend is not running."""

    def __init__(self, reason: str | None = None):
        super().__init__(
            "Notification scheduler unavailable" + (f": {reason}" if reason else ""),
            code="SCHEDULER_UNAVAILABLE",
            details={"reason": reason},
        )


# Reminder Exceptions
class ReminderPolicyError(OrganizerError):
    """A record could not be evaluated by the reminder policy."""

    def __init__(self, kind: str, record_id: str, reason: str):
        super().__init__(
            f"Cannot compute reminder for {kind} {record_id}: {reason}",
            code="REMINDER_POLICY_ERROR",
            details={"kind": kind, "record_id": record_id, "reason": reason},
        )


class RescanTimeoutError(OrganizerError):
    """Background rescan exceeded its time budget."""

    def __init__(self, task_id: str, timeout: float):
        super().__init__(
            f"Rescan {task_id} timed out after {timeout} seconds",
            code="RESCAN_TIMEOUT",
            details={"task_id": task_id, "timeout": timeout},
        )


# Validation Exceptions
class ValidationError(OrganizerError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value else None,
            },
        )


class ConfigurationError(OrganizerError):
    """Configuration error."""

    pass
