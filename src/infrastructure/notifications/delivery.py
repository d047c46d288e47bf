"""
Notification delivery.

`deliver_notification` is what the scheduler runs when a reminder comes
due. It is a module-level coroutine so persistent job stores can save a
textual reference to it and restore the job in a later process.

Delivery fans out to registered sinks. The log sink is always active;
anything else (a desktop notifier, a push gateway, a test collector)
registers itself with `register_sink`.
"""

import inspect
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from src.config import get_logger

logger = get_logger(__name__)


class DeliveredNotification(BaseModel):
    """A notification at the moment it is shown to the user."""

    id: str
    title: str
    message: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    channel_id: str = "organext-reminders"
    importance: str = "high"
    allow_while_idle: bool = True
    delivered_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


NotificationSink = Callable[[DeliveredNotification], Awaitable[None] | None]

_sinks: list[NotificationSink] = []


def register_sink(sink: NotificationSink) -> None:
    """Add a delivery sink. Registering the same sink twice is a no-op."""
    if sink not in _sinks:
        _sinks.append(sink)


def unregister_sink(sink: NotificationSink) -> None:
    if sink in _sinks:
        _sinks.remove(sink)


def clear_sinks() -> None:
    _sinks.clear()


async def deliver_notification(
    notification_id: str,
    title: str,
    message: str,
    metadata: dict[str, Any] | None = None,
    channel_id: str = "organext-reminders",
    importance: str = "high",
    allow_while_idle: bool = True,
) -> DeliveredNotification:
    """Deliver a due notification to the log and every registered sink."""
    notification = DeliveredNotification(
        id=notification_id,
        title=title,
        message=message,
        metadata=metadata or {},
        channel_id=channel_id,
        importance=importance,
        allow_while_idle=allow_while_idle,
    )

    logger.info(
        "notification_delivered",
        notification_id=notification_id,
        title=title,
        channel_id=channel_id,
        source_type=notification.metadata.get("type"),
        source_id=notification.metadata.get("id"),
    )

    for sink in list(_sinks):
        try:
            result = sink(notification)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.warning(
                "notification_sink_failed",
                notification_id=notification_id,
                sink=getattr(sink, "__name__", repr(sink)),
                exc_info=True,
            )

    return notification
