"""
APScheduler-backed local notification scheduler.

Each pending notification is a one-off DateTrigger job whose job id is
the notification id, so adding again replaces and removing needs no
lookup. Notification jobs live in their own job store (persisted to a
separate SQLite file by default) so clearing them never touches the
scheduler's own housekeeping jobs.
"""

from datetime import datetime
from typing import Any

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.jobstores.sqlalchemy import SQLAlchemyJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from src.config import Settings, get_logger, get_settings
from src.core.entities.notification import PendingNotification
from src.core.exceptions import NotificationPermissionError, SchedulerUnavailableError
from src.core.interfaces.notifications import INotificationBackend
from src.infrastructure.notifications.delivery import deliver_notification

logger = get_logger(__name__)

NOTIFICATION_JOBSTORE = "notifications"


def create_scheduler(
    settings: Settings | None = None,
    persistent: bool = True,
) -> AsyncIOScheduler:
    """
    Build the scheduler used for notifications and the background task.

    Args:
        settings: Application settings (defaults to global settings)
        persistent: Keep notification jobs in the SQLite job store. Pass
            False for an in-memory store (tests, dry runs).

    Returns:
        An unstarted AsyncIOScheduler
    """
    settings = settings or get_settings()

    if persistent:
        settings.jobstore_path.parent.mkdir(parents=True, exist_ok=True)
        notification_store = SQLAlchemyJobStore(url=f"sqlite:///{settings.jobstore_path}")
    else:
        notification_store = MemoryJobStore()

    scheduler = AsyncIOScheduler(
        jobstores={
            "default": MemoryJobStore(),
            NOTIFICATION_JOBSTORE: notification_store,
        },
        job_defaults={
            "coalesce": True,
            "misfire_grace_time": settings.notifications.misfire_grace_seconds,
        },
        timezone=settings.local_tz,
    )
    logger.info(
        "scheduler_created",
        persistent=persistent,
        jobstore_path=str(settings.jobstore_path) if persistent else None,
    )
    return scheduler


def start_jobstore_polling(scheduler: AsyncIOScheduler, interval_seconds: int = 60) -> None:
    """
    Wake the scheduler periodically so notifications written to the shared
    job store by another process (the headless rescan) are picked up.
    """
    scheduler.add_job(
        scheduler.wakeup,
        trigger=IntervalTrigger(seconds=interval_seconds),
        id="notification_jobstore_polling",
        name="Poll notification job store",
        jobstore="default",
        replace_existing=True,
    )
    logger.info("jobstore_polling_started", interval_seconds=interval_seconds)


class APSchedulerNotificationBackend(INotificationBackend):
    """INotificationBackend on top of an AsyncIOScheduler."""

    def __init__(
        self,
        scheduler: AsyncIOScheduler,
        settings: Settings | None = None,
        jobstore: str = NOTIFICATION_JOBSTORE,
    ) -> None:
        self._scheduler = scheduler
        self._settings = settings or get_settings()
        self._jobstore = jobstore

    @property
    def scheduler(self) -> AsyncIOScheduler:
        return self._scheduler

    def _ensure_running(self) -> None:
        if not self._scheduler.running:
            raise SchedulerUnavailableError("scheduler is not running")

    async def add(
        self,
        notification_id: str,
        title: str,
        message: str,
        fire_at: datetime,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        notify = self._settings.notifications
        if not notify.enabled:
            raise NotificationPermissionError(notification_id)
        self._ensure_running()

        self._scheduler.add_job(
            deliver_notification,
            trigger=DateTrigger(run_date=fire_at),
            kwargs={
                "notification_id": notification_id,
                "title": title,
                "message": message,
                "metadata": dict(metadata or {}),
                "channel_id": notify.channel_id,
                "importance": notify.importance,
                "allow_while_idle": notify.allow_while_idle,
            },
            id=notification_id,
            name=f"notification:{title[:30]}",
            jobstore=self._jobstore,
            replace_existing=True,
        )

    async def remove(self, notification_id: str) -> bool:
        self._ensure_running()
        try:
            self._scheduler.remove_job(notification_id, jobstore=self._jobstore)
        except JobLookupError:
            return False
        return True

    async def remove_all(self) -> int:
        self._ensure_running()
        count = len(self._scheduler.get_jobs(jobstore=self._jobstore))
        self._scheduler.remove_all_jobs(jobstore=self._jobstore)
        return count

    async def list_pending(self) -> list[PendingNotification]:
        self._ensure_running()
        jobs = self._scheduler.get_jobs(jobstore=self._jobstore)
        pending = [self._job_to_pending(job) for job in jobs]
        return sorted(pending, key=lambda p: p.fire_at)

    @staticmethod
    def _job_to_pending(job: Job) -> PendingNotification:
        kwargs = job.kwargs
        fire_at = job.next_run_time or job.trigger.run_date
        return PendingNotification(
            id=job.id,
            fire_at=fire_at,
            title=kwargs.get("title", job.name),
            message=kwargs.get("message", ""),
            metadata=kwargs.get("metadata") or {},
        )
