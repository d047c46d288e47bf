"""Local notification scheduling and delivery."""

from src.infrastructure.notifications.apscheduler_backend import (
    NOTIFICATION_JOBSTORE,
    APSchedulerNotificationBackend,
    create_scheduler,
    start_jobstore_polling,
)
from src.infrastructure.notifications.delivery import (
    DeliveredNotification,
    NotificationSink,
    clear_sinks,
    deliver_notification,
    register_sink,
    unregister_sink,
)

__all__ = [
    "NOTIFICATION_JOBSTORE",
    "APSchedulerNotificationBackend",
    "create_scheduler",
    "start_jobstore_polling",
    "DeliveredNotification",
    "NotificationSink",
    "deliver_notification",
    "register_sink",
    "unregister_sink",
    "clear_sinks",
]
