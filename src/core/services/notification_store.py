"""
Notification Store.

Facade over the platform local-notification scheduler. One instance is
built per entry point (API process or headless rescan) and passed to
whatever needs it.

Every operation is best-effort: backend failures are logged and reported
through the return value, never raised. Reminders must not be able to
break the record operation that triggered them.
"""

from collections.abc import Callable
from datetime import UTC, datetime, tzinfo
from typing import Any

from src.config import get_logger
from src.core.entities.notification import PendingNotification, ScheduledReminder
from src.core.interfaces.notifications import INotificationBackend
from src.core.services.reminder_policy import to_local

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class NotificationStore:
    """Idempotent schedule/cancel keyed by notification id."""

    def __init__(
        self,
        backend: INotificationBackend,
        clock: Callable[[], datetime] = _utcnow,
        tz: tzinfo | None = None,
    ) -> None:
        self._backend = backend
        self._clock = clock
        # Zone for naive fire times; None = system local
        self._tz = tz

    @property
    def backend(self) -> INotificationBackend:
        return self._backend

    async def schedule(
        self,
        notification_id: str,
        title: str,
        body: str,
        fire_at: datetime,
        metadata: dict[str, Any] | None = None,
    ) -> bool:
        """
        Schedule a notification, replacing any pending one with the same id.

        Returns:
            True if the backend accepted it. False for past fire times
            (dropped, not an error) and for backend failures.
        """
        fire_at = to_local(fire_at, self._tz)
        now = to_local(self._clock(), self._tz)
        if fire_at <= now:
            logger.info(
                "notification_in_past_skipped",
                notification_id=notification_id,
                fire_at=fire_at.isoformat(),
            )
            return False

        try:
            await self._backend.add(
                notification_id,
                title=title,
                message=body,
                fire_at=fire_at,
                metadata=metadata,
            )
        except Exception:
            logger.warning(
                "notification_schedule_failed",
                notification_id=notification_id,
                exc_info=True,
            )
            return False

        logger.info(
            "notification_scheduled",
            notification_id=notification_id,
            fire_at=fire_at.isoformat(),
        )
        return True

    async def schedule_reminder(self, reminder: ScheduledReminder) -> bool:
        """Schedule the output of the reminder policy."""
        return await self.schedule(
            reminder.notification_id,
            title=reminder.title,
            body=reminder.body,
            fire_at=reminder.fire_at,
            metadata=reminder.metadata,
        )

    async def cancel(self, notification_id: str) -> bool:
        """
        Cancel a pending notification.

        Cancelling an id with nothing pending is a no-op. Returns False
        only on backend failure.
        """
        try:
            removed = await self._backend.remove(notification_id)
        except Exception:
            logger.warning(
                "notification_cancel_failed",
                notification_id=notification_id,
                exc_info=True,
            )
            return False

        logger.debug(
            "notification_cancelled",
            notification_id=notification_id,
            was_pending=removed,
        )
        return True

    async def cancel_all(self) -> int:
        """Clear every pending notification (full data reset only)."""
        try:
            count = await self._backend.remove_all()
        except Exception:
            logger.warning("notification_cancel_all_failed", exc_info=True)
            return 0

        logger.info("notifications_cleared", count=count)
        return count

    async def pending(self) -> list[PendingNotification]:
        """List pending notifications; empty on backend failure."""
        try:
            return await self._backend.list_pending()
        except Exception:
            logger.warning("notification_list_failed", exc_info=True)
            return []
