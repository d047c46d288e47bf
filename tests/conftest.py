"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from src.config import reset_settings
from src.core.entities import PendingNotification
from src.core.interfaces import INotificationBackend
from src.core.services import MessageCatalog, NotificationStore, ReminderRules

# Fixed offset keeps wall-clock assertions independent of the host timezone
TZ = timezone(timedelta(hours=1), "CET")


class InMemoryNotificationBackend(INotificationBackend):
    """Dict-backed scheduler double with the platform's replace-by-id semantics."""

    def __init__(self) -> None:
        self.pending_by_id: dict[str, PendingNotification] = {}
        self.calls: list[tuple[str, str]] = []

    async def add(
        self,
        notification_id: str,
        title: str,
        message: str,
        fire_at: datetime,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        self.calls.append(("add", notification_id))
        self.pending_by_id[notification_id] = PendingNotification(
            id=notification_id,
            fire_at=fire_at,
            title=title,
            message=message,
            metadata=metadata or {},
        )

    async def remove(self, notification_id: str) -> bool:
        self.calls.append(("remove", notification_id))
        return self.pending_by_id.pop(notification_id, None) is not None

    async def remove_all(self) -> int:
        self.calls.append(("remove_all", "*"))
        count = len(self.pending_by_id)
        self.pending_by_id.clear()
        return count

    async def list_pending(self) -> list[PendingNotification]:
        return sorted(self.pending_by_id.values(), key=lambda p: p.fire_at)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point every test at its own data directory and clear singletons."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("STORAGE_DATA_DIR", str(data_dir))
    reset_settings()

    yield data_dir

    from src.application.background import reset_background_runner
    from src.application.services import reset_services
    from src.infrastructure.notifications import clear_sinks
    from src.infrastructure.storage.sqlite import reset_stores

    reset_background_runner()
    reset_services()
    reset_stores()
    clear_sinks()
    reset_settings()


@pytest.fixture
def rules() -> ReminderRules:
    return ReminderRules(tz=TZ)


@pytest.fixture
def catalog() -> MessageCatalog:
    return MessageCatalog("en")


@pytest.fixture
def fake_backend() -> InMemoryNotificationBackend:
    return InMemoryNotificationBackend()


@pytest.fixture
def now() -> datetime:
    """Monday 10 March 2025, 10:00 local."""
    return datetime(2025, 3, 10, 10, 0, tzinfo=TZ)


@pytest.fixture
def notification_store(fake_backend: InMemoryNotificationBackend, now: datetime) -> NotificationStore:
    return NotificationStore(fake_backend, clock=lambda: now)


@pytest.fixture
async def db_path(isolated_settings: Path) -> Path:
    """Migrated temporary records database."""
    from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database

    path = isolated_settings / "organext.db"
    await initialize_database(path)
    return path


@pytest.fixture
async def pool(db_path: Path) -> AsyncGenerator[Any, None]:
    """Private connection pool on the temporary database."""
    from src.infrastructure.storage.sqlite import open_pool

    async with open_pool(db_path, pool_size=2) as p:
        yield p
