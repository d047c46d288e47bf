"""
Record lifecycle hooks.

Called after a task, event or appointment write has committed. Keeps at
most one live notification per record by always cancelling before
rescheduling.
"""

from collections.abc import Callable
from datetime import UTC, datetime, tzinfo

from src.config import get_logger
from src.core.entities.notification import ScheduledReminder, notification_id_for
from src.core.entities.record import Record, RecordKind
from src.core.services.messages import MessageCatalog
from src.core.services.notification_store import NotificationStore
from src.core.services.reminder_policy import (
    DEFAULT_RULES,
    ReminderRules,
    compute_reminder,
    to_local,
)

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ReminderLifecycleHooks:
    """
    Re-syncs a record's notification after it is created, edited or deleted.

    Never raises: a failure here is logged and the record operation that
    triggered it still succeeds.
    """

    def __init__(
        self,
        notifications: NotificationStore,
        rules: ReminderRules = DEFAULT_RULES,
        catalog: MessageCatalog | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._notifications = notifications
        self._rules = rules
        self._catalog = catalog or MessageCatalog()
        self._clock = clock

    @property
    def tz(self) -> tzinfo | None:
        """Zone the rules read local wall-clock times in (None = system local)."""
        return self._rules.tz

    def now(self) -> datetime:
        """Current time from the hooks' clock, in the rules' zone."""
        return to_local(self._clock(), self._rules.tz)

    async def on_saved(self, record: Record) -> ScheduledReminder | None:
        """
        Handle create or update (including completion toggles).

        Returns:
            The reminder that was scheduled, or None.
        """
        notification_id = notification_id_for(record.kind, record.id)
        try:
            await self._notifications.cancel(notification_id)

            reminder = compute_reminder(
                record, self._clock(), rules=self._rules, catalog=self._catalog
            )
            if reminder is None:
                logger.debug(
                    "reminder_not_warranted",
                    kind=record.kind.value,
                    record_id=record.id,
                )
                return None

            scheduled = await self._notifications.schedule_reminder(reminder)
            return reminder if scheduled else None

        except Exception:
            logger.warning(
                "reminder_sync_failed",
                kind=record.kind.value,
                record_id=record.id,
                exc_info=True,
            )
            return None

    on_created = on_saved
    on_updated = on_saved

    async def on_deleted(self, kind: RecordKind, record_id: str) -> None:
        """Handle delete: cancel unconditionally."""
        try:
            await self._notifications.cancel(notification_id_for(kind, record_id))
        except Exception:
            logger.warning(
                "reminder_cancel_on_delete_failed",
                kind=kind.value,
                record_id=record_id,
                exc_info=True,
            )
