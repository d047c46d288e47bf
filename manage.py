#!/usr/bin/env python3
"""
Organext Reminders management CLI.

Usage:
    python manage.py init-db     Apply pending database migrations
    python manage.py serve       Start the API server (scheduler included)
    python manage.py rescan      Run one background rescan now
    python manage.py pending     List pending notifications
    python manage.py reset       Delete all records and notifications
"""

import argparse
import asyncio
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent


async def _init_db() -> int:
    from src.infrastructure.storage.sqlite.migrations.migrator import (
        get_migration_status,
        initialize_database,
    )

    results = await initialize_database()
    for r in results:
        state = "ok" if r.success else f"FAILED: {r.error}"
        print(f"  v{r.version} {r.name} ({r.execution_time_ms} ms) {state}")
    if not results:
        print("Database is up to date.")

    status = await get_migration_status()
    print(f"Schema version: {status['current_version']}")
    return 0 if all(r.success for r in results) else 1


class _PausedScheduler:
    """Scheduler started paused for the length of one CLI command."""

    async def __aenter__(self):
        from src.application.services import get_scheduler

        self.scheduler = get_scheduler()
        self.scheduler.start(paused=True)
        return self.scheduler

    async def __aexit__(self, *exc_info) -> None:
        self.scheduler.shutdown(wait=False)


async def _rescan() -> int:
    from src.headless import run_headless

    result = await run_headless()
    if result is None:
        print("Headless rescans are disabled (BACKGROUND_ENABLE_HEADLESS=false).")
        return 0
    print(
        f"Rescan {result.status.value}: scanned={result.scanned} "
        f"scheduled={result.scheduled} outside_window={result.outside_window} "
        f"not_warranted={result.not_warranted} failed={result.failed}"
    )
    for notification_id in result.scheduled_ids:
        print(f"  {notification_id}")
    return 0


async def _pending() -> int:
    from src.application.services import get_notification_store

    async with _PausedScheduler():
        pending = await get_notification_store().pending()

    if not pending:
        print("No pending notifications.")
        return 0
    for p in pending:
        print(f"{p.fire_at.isoformat()}  {p.id:<40}  {p.title}: {p.message}")
    return 0


async def _reset() -> int:
    from src.application.services import get_notification_store
    from src.application.use_cases import ResetDataUseCase
    from src.config import get_settings
    from src.infrastructure.storage.sqlite import (
        SQLiteAppointmentStore,
        SQLiteEventStore,
        SQLiteTaskStore,
        open_pool,
    )
    from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database

    settings = get_settings()
    await initialize_database(settings.storage.db_path)

    async with _PausedScheduler(), open_pool(settings.storage.db_path) as pool:
        result = await ResetDataUseCase(
            notifications=get_notification_store(),
            task_store=SQLiteTaskStore(pool),
            event_store=SQLiteEventStore(pool),
            appointment_store=SQLiteAppointmentStore(pool),
        ).execute()

    print(
        f"Deleted {result.tasks} tasks, {result.events} events, "
        f"{result.appointments} appointments; cancelled {result.notifications} notifications."
    )
    return 0


def cmd_init_db(args: argparse.Namespace) -> None:
    sys.exit(asyncio.run(_init_db()))


def cmd_serve(args: argparse.Namespace) -> None:
    """Start uvicorn in the foreground."""
    import uvicorn

    print(f"Starting server on {args.host}:{args.port}...")
    uvicorn.run(
        "src.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        app_dir=str(ROOT_DIR),
    )


def cmd_rescan(args: argparse.Namespace) -> None:
    sys.exit(asyncio.run(_rescan()))


def cmd_pending(args: argparse.Namespace) -> None:
    sys.exit(asyncio.run(_pending()))


def cmd_reset(args: argparse.Namespace) -> None:
    """Wipe all data after confirmation."""
    if not args.yes:
        answer = input("Delete ALL tasks, events, appointments and reminders? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted.")
            sys.exit(1)
    sys.exit(asyncio.run(_reset()))


def main() -> None:
    from src.config import configure_logging, get_settings

    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Organext Reminders management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    # init-db
    p_init = sub.add_parser("init-db", help="Apply pending database migrations")
    p_init.set_defaults(func=cmd_init_db)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument(
        "--host", default=settings.api.host, help=f"Bind host (default: {settings.api.host})"
    )
    p_serve.add_argument(
        "--port", type=int, default=settings.api.port,
        help=f"Bind port (default: {settings.api.port})",
    )
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # rescan
    p_rescan = sub.add_parser("rescan", help="Run one background rescan now")
    p_rescan.set_defaults(func=cmd_rescan)

    # pending
    p_pending = sub.add_parser("pending", help="List pending notifications")
    p_pending.set_defaults(func=cmd_pending)

    # reset
    p_reset = sub.add_parser("reset", help="Delete all records and pending notifications")
    p_reset.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    p_reset.set_defaults(func=cmd_reset)

    args = parser.parse_args()
    configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
