"""
Reminder Policy.

Pure mapping from a record and the current time to the notification that
should be scheduled for it, if any. No I/O: the same functions serve the
foreground lifecycle hooks and the headless background rescan.

Rules:
    Task         due_date at 00:00 local -> all_day_hour (09:00) that day,
                 otherwise the exact due instant. None if completed or
                 without due date.
    Event        start_date - 15 minutes
    Appointment  date - 30 minutes

Whatever the kind, nothing is returned unless fire_at > now.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta, tzinfo
from typing import TYPE_CHECKING

from src.core.entities.notification import ScheduledReminder, notification_id_for
from src.core.entities.record import Appointment, Event, Record, RecordKind, Task
from src.core.exceptions import ReminderPolicyError
from src.core.services.messages import MessageCatalog

if TYPE_CHECKING:
    from src.config.settings import Settings

# (title key, body key) per record kind
_MESSAGE_KEYS: dict[RecordKind, tuple[str, str]] = {
    RecordKind.TASK: ("taskReminderTitle", "taskReminderMessage"),
    RecordKind.EVENT: ("eventReminder", "eventReminderMessage"),
    RecordKind.APPOINTMENT: ("appointmentReminder", "appointmentReminderMessage"),
}


@dataclass(frozen=True)
class ReminderRules:
    """Lead times and local-time conventions used by the policy."""

    event_lead: timedelta = timedelta(minutes=15)
    appointment_lead: timedelta = timedelta(minutes=30)
    all_day_hour: int = 9
    tz: tzinfo | None = field(default=None)  # None = system local time

    @classmethod
    def from_settings(cls, settings: Settings) -> ReminderRules:
        return cls(
            event_lead=timedelta(minutes=settings.reminders.event_lead_minutes),
            appointment_lead=timedelta(minutes=settings.reminders.appointment_lead_minutes),
            all_day_hour=settings.reminders.all_day_task_hour,
            tz=settings.local_tz,
        )


DEFAULT_RULES = ReminderRules()


def to_local(value: datetime, tz: tzinfo | None = None) -> datetime:
    """
    Express a timestamp as an aware datetime in local time.

    Naive values are taken to already be local wall-clock time.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=tz) if tz is not None else value.astimezone()
    return value.astimezone(tz) if tz is not None else value.astimezone()


def anchor_of(record: Record) -> datetime | None:
    """Timestamp the record's reminder is computed relative to."""
    if isinstance(record, Task):
        return record.due_date
    if isinstance(record, Event):
        return record.start_date
    if isinstance(record, Appointment):
        return record.date
    raise ReminderPolicyError(
        getattr(record, "kind", type(record).__name__),
        str(getattr(record, "id", "?")),
        "unsupported record type",
    )


def is_all_day(due: datetime) -> bool:
    """A due time of exactly midnight means no time of day was given."""
    return due.hour == 0 and due.minute == 0


def _minus(anchor: datetime, lead: timedelta, tz: tzinfo | None) -> datetime:
    # Subtract in UTC so DST transitions do not shift the lead time
    return to_local((anchor.astimezone(UTC) - lead), tz)


def fire_time_for(record: Record, rules: ReminderRules = DEFAULT_RULES) -> datetime | None:
    """
    Compute when the record's notification should fire, ignoring "now".

    Returns None when the record has no anchor or is a completed task.
    """
    anchor = anchor_of(record)
    if anchor is None:
        return None

    local_anchor = to_local(anchor, rules.tz)

    if isinstance(record, Task):
        if record.is_completed:
            return None
        if is_all_day(local_anchor):
            # Re-localize: the offset at 09:00 can differ from midnight's
            morning = local_anchor.replace(
                tzinfo=None, hour=rules.all_day_hour, minute=0, second=0, microsecond=0
            )
            return to_local(morning, rules.tz)
        return local_anchor

    if isinstance(record, Event):
        return _minus(local_anchor, rules.event_lead, rules.tz)

    return _minus(local_anchor, rules.appointment_lead, rules.tz)


def compute_reminder(
    record: Record,
    now: datetime,
    rules: ReminderRules = DEFAULT_RULES,
    catalog: MessageCatalog | None = None,
) -> ScheduledReminder | None:
    """
    Map a record to the notification that should be pending for it.

    Args:
        record: Task, Event or Appointment
        now: Current time (naive values are local time)
        rules: Lead times and timezone
        catalog: Localized titles/bodies, English if omitted

    Returns:
        ScheduledReminder, or None if no notification is warranted.
    """
    fire_at = fire_time_for(record, rules)
    if fire_at is None:
        return None

    if fire_at <= to_local(now, rules.tz):
        return None

    catalog = catalog or MessageCatalog()
    title_key, body_key = _MESSAGE_KEYS[record.kind]

    return ScheduledReminder(
        notification_id=notification_id_for(record.kind, record.id),
        fire_at=fire_at,
        title=catalog.t(title_key),
        body=catalog.t(body_key, title=record.title),
        source_type=record.kind,
        source_id=record.id,
    )
