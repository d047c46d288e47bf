"""
Rescan Reminders Use Case.

Periodic safety net for reminders. Reads open tasks, appointments and
(optionally) events straight from the database and re-schedules the
reminder of every record whose anchor falls within the look-ahead window
[now, now + 24h]. Because notification ids are deterministic, re-running
the scan overwrites rather than duplicates.

Runs without any UI or request context: the background runner calls it
from the API process and the headless entry point calls it on its own.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum

from src.config import get_logger
from src.core.entities.record import Record
from src.core.interfaces.storage import IAppointmentStore, IEventStore, ITaskStore
from src.core.services.messages import MessageCatalog
from src.core.services.notification_store import NotificationStore
from src.core.services.reminder_policy import (
    DEFAULT_RULES,
    ReminderRules,
    anchor_of,
    compute_reminder,
    to_local,
)

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RescanStatus(str, Enum):
    """How a rescan run ended."""

    COMPLETED = "completed"
    TIMED_OUT = "timed_out"
    FAILED = "failed"
    DEFERRED = "deferred"


@dataclass
class RescanResult:
    """Result of one rescan run."""

    status: RescanStatus = RescanStatus.COMPLETED
    scanned: int = 0
    scheduled: int = 0
    outside_window: int = 0
    not_warranted: int = 0
    failed: int = 0
    scheduled_ids: list[str] = field(default_factory=list)
    started_at: datetime | None = None
    duration_ms: float | None = None
    error: str | None = None


class RescanRemindersUseCase:
    """
    Re-schedule reminders for every record anchored in the next 24 hours.

    Per-record failures are logged and counted; the scan moves on to the
    next record. Failing to read a table fails the whole run, which the
    caller reports as a failed task.
    """

    def __init__(
        self,
        notifications: NotificationStore,
        task_store: ITaskStore | None = None,
        event_store: IEventStore | None = None,
        appointment_store: IAppointmentStore | None = None,
        rules: ReminderRules = DEFAULT_RULES,
        catalog: MessageCatalog | None = None,
        look_ahead: timedelta = timedelta(hours=24),
        include_events: bool = True,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._notifications = notifications
        self._task_store = task_store
        self._event_store = event_store
        self._appointment_store = appointment_store
        self._rules = rules
        self._catalog = catalog or MessageCatalog()
        self._look_ahead = look_ahead
        self._include_events = include_events
        self._clock = clock

    async def _get_task_store(self) -> ITaskStore:
        if self._task_store is None:
            from src.infrastructure.storage.sqlite import get_task_store

            self._task_store = await get_task_store()
        return self._task_store

    async def _get_event_store(self) -> IEventStore:
        if self._event_store is None:
            from src.infrastructure.storage.sqlite import get_event_store

            self._event_store = await get_event_store()
        return self._event_store

    async def _get_appointment_store(self) -> IAppointmentStore:
        if self._appointment_store is None:
            from src.infrastructure.storage.sqlite import get_appointment_store

            self._appointment_store = await get_appointment_store()
        return self._appointment_store

    async def _load_records(self) -> list[Record]:
        task_store = await self._get_task_store()
        appointment_store = await self._get_appointment_store()

        records: list[Record] = []
        records.extend(await task_store.list_pending())
        records.extend(await appointment_store.list_all())
        if self._include_events:
            event_store = await self._get_event_store()
            records.extend(await event_store.list_all())
        return records

    async def execute(self) -> RescanResult:
        """
        Run one scan.

        Returns:
            RescanResult with per-outcome counts and the scheduled ids.
        """
        started = time.perf_counter()
        # One clock reading for the whole scan
        now = to_local(self._clock(), self._rules.tz)
        window_end = now + self._look_ahead
        result = RescanResult(started_at=now)

        logger.info(
            "rescan_started",
            window_start=now.isoformat(),
            window_end=window_end.isoformat(),
            include_events=self._include_events,
        )

        records = await self._load_records()
        result.scanned = len(records)

        for record in records:
            try:
                anchor = anchor_of(record)
                if anchor is None:
                    result.not_warranted += 1
                    continue

                local_anchor = to_local(anchor, self._rules.tz)
                if not now <= local_anchor <= window_end:
                    result.outside_window += 1
                    continue

                reminder = compute_reminder(
                    record, now, rules=self._rules, catalog=self._catalog
                )
                if reminder is None:
                    result.not_warranted += 1
                    continue

                if await self._notifications.schedule_reminder(reminder):
                    result.scheduled += 1
                    result.scheduled_ids.append(reminder.notification_id)
                else:
                    result.failed += 1

            except Exception:
                result.failed += 1
                logger.warning(
                    "rescan_record_failed",
                    kind=record.kind.value,
                    record_id=record.id,
                    exc_info=True,
                )

        result.duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            "rescan_complete",
            scanned=result.scanned,
            scheduled=result.scheduled,
            outside_window=result.outside_window,
            not_warranted=result.not_warranted,
            failed=result.failed,
            duration_ms=result.duration_ms,
        )
        return result
