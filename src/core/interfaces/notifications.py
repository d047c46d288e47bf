"""
Abstract interface for the platform local-notification scheduler.

Implementations replace by id on add and treat removal of an unknown id
as a no-op. They may raise NotificationError subclasses; callers go
through NotificationStore, which logs and swallows those.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from src.core.entities.notification import PendingNotification


class INotificationBackend(ABC):
    """Platform scheduler holding pending local notifications."""

    @abstractmethod
    async def add(
        self,
        notification_id: str,
        title: str,
        message: str,
        fire_at: datetime,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Schedule (or replace) a notification."""
        pass

    @abstractmethod
    async def remove(self, notification_id: str) -> bool:
        """Remove a pending notification. Returns False if none was pending."""
        pass

    @abstractmethod
    async def remove_all(self) -> int:
        """Remove every pending notification. Returns the count removed."""
        pass

    @abstractmethod
    async def list_pending(self) -> list[PendingNotification]:
        """List pending notifications ordered by fire time."""
        pass
