"""
Background reminder rescan task.

`BackgroundTaskRunner` is the Idle -> Running -> Idle state machine around
one rescan. Each run ends with exactly one `finish` signal, on the success
path as well as on the timeout path. A trigger that arrives while a run is
in progress is reported as deferred and dropped.

`register_background_task` wires the runner into the scheduler: a
periodic interval job, plus an immediate run at process start when
`start_on_boot` is set.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass
from datetime import timedelta
from enum import Enum
from typing import TYPE_CHECKING

from src.application.services import (
    get_message_catalog,
    get_notification_store,
    get_reminder_rules,
)
from src.application.use_cases.rescan_reminders import (
    RescanRemindersUseCase,
    RescanResult,
    RescanStatus,
)
from src.config import Settings, get_logger, get_settings
from src.core.exceptions import RescanTimeoutError
from src.core.services.notification_store import NotificationStore

if TYPE_CHECKING:
    from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = get_logger(__name__)

ScanFunc = Callable[[], Awaitable[RescanResult]]
FinishCallback = Callable[[str, RescanResult], None]


class TaskState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class TriggerSource(str, Enum):
    """What started a run."""

    PERIODIC = "periodic"
    BOOT = "boot"
    MANUAL = "manual"
    HEADLESS = "headless"


@dataclass(frozen=True)
class BackgroundTaskConfig:
    """Scheduling options for the rescan task."""

    task_id: str = "com.organext.reminders.task"
    minimum_interval_minutes: int = 60
    timeout_seconds: float = 30.0
    stop_on_terminate: bool = False
    enable_headless: bool = True
    start_on_boot: bool = True
    required_network: str = "none"
    requires_charging: bool = False
    requires_device_idle: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackgroundTaskConfig":
        bg = settings.background
        return cls(
            task_id=bg.task_id,
            minimum_interval_minutes=bg.minimum_interval_minutes,
            timeout_seconds=bg.timeout_seconds,
            stop_on_terminate=bg.stop_on_terminate,
            enable_headless=bg.enable_headless,
            start_on_boot=bg.start_on_boot,
            required_network=bg.required_network,
            requires_charging=bg.requires_charging,
            requires_device_idle=bg.requires_device_idle,
        )


def standalone_rescan(
    notifications: NotificationStore,
    settings: Settings | None = None,
) -> ScanFunc:
    """
    Build a scan function that opens its own database connection per run.

    The background task shares no warm state with the request path: every
    run reads the database from scratch.
    """
    settings = settings or get_settings()

    async def scan() -> RescanResult:
        from src.infrastructure.storage.sqlite import (
            SQLiteAppointmentStore,
            SQLiteEventStore,
            SQLiteTaskStore,
            open_pool,
        )

        async with open_pool(settings.storage.db_path) as pool:
            use_case = RescanRemindersUseCase(
                notifications,
                task_store=SQLiteTaskStore(pool),
                event_store=SQLiteEventStore(pool),
                appointment_store=SQLiteAppointmentStore(pool),
                rules=get_reminder_rules(settings),
                catalog=get_message_catalog(settings),
                look_ahead=timedelta(hours=settings.reminders.look_ahead_hours),
                include_events=settings.reminders.include_events,
            )
            return await use_case.execute()

    return scan


class BackgroundTaskRunner:
    """Runs the rescan with a deadline and signals completion exactly once."""

    def __init__(
        self,
        scan: ScanFunc,
        task_id: str = "com.organext.reminders.task",
        timeout_seconds: float = 30.0,
        on_finish: FinishCallback | None = None,
    ):
        self._scan = scan
        self._task_id = task_id
        self._timeout = timeout_seconds
        self._on_finish = on_finish
        self._state = TaskState.IDLE
        self._last_result: RescanResult | None = None
        self._finished: list[tuple[str, RescanStatus]] = []

    @property
    def task_id(self) -> str:
        return self._task_id

    @property
    def state(self) -> TaskState:
        return self._state

    @property
    def last_result(self) -> RescanResult | None:
        return self._last_result

    @property
    def finished(self) -> list[tuple[str, RescanStatus]]:
        """(task_id, status) for every finish signal sent so far."""
        return list(self._finished)

    async def on_event(
        self,
        task_id: str | None = None,
        source: TriggerSource | str = TriggerSource.MANUAL,
    ) -> RescanResult:
        """Handle a trigger: run one scan unless one is already running."""
        task_id = task_id or self._task_id
        source = TriggerSource(source)

        if self._state is TaskState.RUNNING:
            logger.info("background_task_deferred", task_id=task_id, source=source.value)
            return RescanResult(status=RescanStatus.DEFERRED)

        self._state = TaskState.RUNNING
        logger.info("background_task_started", task_id=task_id, source=source.value)
        try:
            result = await asyncio.wait_for(self._scan(), timeout=self._timeout)
        except TimeoutError:
            return self.on_timeout(task_id)
        except Exception as e:
            logger.error(
                "background_task_failed",
                task_id=task_id,
                error=str(e),
                exc_info=True,
            )
            result = RescanResult(status=RescanStatus.FAILED, error=str(e))
        finally:
            self._state = TaskState.IDLE

        self.finish(task_id, result)
        return result

    def on_timeout(self, task_id: str) -> RescanResult:
        """Deadline path: give up on the scan and still signal completion."""
        error = RescanTimeoutError(task_id, self._timeout)
        logger.warning("background_task_timeout", task_id=task_id, timeout=self._timeout)
        result = RescanResult(status=RescanStatus.TIMED_OUT, error=error.message)
        self.finish(task_id, result)
        return result

    def finish(self, task_id: str, result: RescanResult) -> None:
        """Signal that the run identified by task_id is over."""
        self._last_result = result
        self._finished.append((task_id, result.status))
        logger.info(
            "background_task_finished",
            task_id=task_id,
            status=result.status.value,
            scheduled=result.scheduled,
        )
        if self._on_finish is not None:
            self._on_finish(task_id, result)


def register_background_task(
    scheduler: "AsyncIOScheduler",
    runner: BackgroundTaskRunner,
    config: BackgroundTaskConfig | None = None,
) -> BackgroundTaskConfig:
    """
    Schedule the runner on the given scheduler.

    Returns:
        The configuration that was applied
    """
    from apscheduler.triggers.date import DateTrigger
    from apscheduler.triggers.interval import IntervalTrigger

    config = config or BackgroundTaskConfig.from_settings(get_settings())

    scheduler.add_job(
        runner.on_event,
        trigger=IntervalTrigger(minutes=config.minimum_interval_minutes),
        kwargs={"task_id": config.task_id, "source": TriggerSource.PERIODIC.value},
        id=config.task_id,
        name="Reminder rescan",
        jobstore="default",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    if config.start_on_boot:
        scheduler.add_job(
            runner.on_event,
            trigger=DateTrigger(),
            kwargs={"task_id": config.task_id, "source": TriggerSource.BOOT.value},
            id=f"{config.task_id}.boot",
            name="Reminder rescan (boot)",
            jobstore="default",
            replace_existing=True,
        )

    logger.info("background_task_registered", **asdict(config))
    return config


_runner: BackgroundTaskRunner | None = None


def get_background_runner() -> BackgroundTaskRunner:
    """Get or create the process-wide runner, scanning through the shared store."""
    global _runner

    if _runner is None:
        settings = get_settings()
        config = BackgroundTaskConfig.from_settings(settings)
        _runner = BackgroundTaskRunner(
            standalone_rescan(get_notification_store(), settings),
            task_id=config.task_id,
            timeout_seconds=config.timeout_seconds,
        )
    return _runner


def reset_background_runner() -> None:
    global _runner
    _runner = None
