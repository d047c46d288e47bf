"""
Abstract interfaces for storage providers.

Defines contracts for task, event, and appointment stores. Every write is
single-row and atomic; listings are ordered by creation time, newest first.
"""

from abc import ABC, abstractmethod
from datetime import datetime, tzinfo

from src.core.entities.record import Appointment, Event, Task


class ITaskStore(ABC):
    """Abstract interface for task storage."""

    @abstractmethod
    async def create(self, task: Task) -> Task:
        """Insert a new task."""
        pass

    @abstractmethod
    async def get(self, task_id: str) -> Task | None:
        """Get task by ID."""
        pass

    @abstractmethod
    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        pass

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task by ID. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_all(self) -> list[Task]:
        """List all tasks, newest first."""
        pass

    @abstractmethod
    async def list_pending(self) -> list[Task]:
        """List tasks that are not completed and have a due date."""
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Delete every task. Returns the number of rows removed."""
        pass


class IEventStore(ABC):
    """Abstract interface for calendar event storage."""

    @abstractmethod
    async def create(self, event: Event) -> Event:
        """Insert a new event."""
        pass

    @abstractmethod
    async def get(self, event_id: str) -> Event | None:
        """Get event by ID."""
        pass

    @abstractmethod
    async def update(self, event: Event) -> Event:
        """Update an existing event."""
        pass

    @abstractmethod
    async def delete(self, event_id: str) -> bool:
        """Delete an event by ID."""
        pass

    @abstractmethod
    async def list_all(self) -> list[Event]:
        """List all events, newest first."""
        pass

    @abstractmethod
    async def list_between(
        self, start: datetime, end: datetime, tz: tzinfo | None = None
    ) -> list[Event]:
        """List events overlapping [start, end), ordered by start date.

        Naive timestamps are read as wall-clock time in `tz` (system local
        when None).
        """
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Delete every event."""
        pass


class IAppointmentStore(ABC):
    """Abstract interface for appointment storage."""

    @abstractmethod
    async def create(self, appointment: Appointment) -> Appointment:
        """Insert a new appointment."""
        pass

    @abstractmethod
    async def get(self, appointment_id: str) -> Appointment | None:
        """Get appointment by ID."""
        pass

    @abstractmethod
    async def update(self, appointment: Appointment) -> Appointment:
        """Update an existing appointment."""
        pass

    @abstractmethod
    async def delete(self, appointment_id: str) -> bool:
        """Delete an appointment by ID."""
        pass

    @abstractmethod
    async def list_all(self) -> list[Appointment]:
        """List all appointments, newest first."""
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Delete every appointment."""
        pass
