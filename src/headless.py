"""
Headless reminder rescan.

Runs exactly one rescan in a fresh process and exits. Meant for an OS
timer (cron, systemd, launchd) while the API process is not running:

    python -m src.headless

Notifications are written to the persistent job store and delivered by
whichever process next runs the scheduler. The scheduler is started
paused here, so this process never delivers anything itself.
"""

import asyncio
import sys

from src.application.background import (
    BackgroundTaskConfig,
    BackgroundTaskRunner,
    TriggerSource,
    standalone_rescan,
)
from src.application.services import build_notification_store
from src.application.use_cases.rescan_reminders import RescanResult
from src.config import configure_logging, get_logger, get_settings
from src.infrastructure.notifications import create_scheduler
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database

logger = get_logger(__name__)


async def run_headless() -> RescanResult | None:
    """Run one rescan. Returns None when headless runs are disabled."""
    settings = get_settings()
    config = BackgroundTaskConfig.from_settings(settings)

    if not config.enable_headless:
        logger.info("headless_disabled", task_id=config.task_id)
        return None

    await initialize_database(settings.storage.db_path)

    scheduler = create_scheduler(settings)
    scheduler.start(paused=True)
    try:
        notifications = build_notification_store(scheduler, settings)
        runner = BackgroundTaskRunner(
            standalone_rescan(notifications, settings),
            task_id=config.task_id,
            timeout_seconds=config.timeout_seconds,
        )
        return await runner.on_event(source=TriggerSource.HEADLESS)
    finally:
        scheduler.shutdown(wait=False)


def main() -> int:
    configure_logging()
    try:
        result = asyncio.run(run_headless())
    except Exception:
        # The OS timer only cares that we finished
        logger.error("headless_rescan_crashed", exc_info=True)
        return 0

    if result is not None:
        logger.info(
            "headless_rescan_exit",
            status=result.status.value,
            scheduled=result.scheduled,
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
