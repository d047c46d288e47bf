"""SQLite storage implementations."""

from src.infrastructure.storage.sqlite.appointment_store import SQLiteAppointmentStore
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    open_pool,
)
from src.infrastructure.storage.sqlite.event_store import SQLiteEventStore
from src.infrastructure.storage.sqlite.task_store import SQLiteTaskStore

# Singleton instances
_task_store: SQLiteTaskStore | None = None
_event_store: SQLiteEventStore | None = None
_appointment_store: SQLiteAppointmentStore | None = None


async def get_task_store() -> SQLiteTaskStore:
    """Get singleton task store instance."""
    global _task_store
    if _task_store is None:
        _task_store = SQLiteTaskStore()
    return _task_store


async def get_event_store() -> SQLiteEventStore:
    """Get singleton event store instance."""
    global _event_store
    if _event_store is None:
        _event_store = SQLiteEventStore()
    return _event_store


async def get_appointment_store() -> SQLiteAppointmentStore:
    """Get singleton appointment store instance."""
    global _appointment_store
    if _appointment_store is None:
        _appointment_store = SQLiteAppointmentStore()
    return _appointment_store


def reset_stores() -> None:
    """Drop singleton stores (used after the global pool is closed)."""
    global _task_store, _event_store, _appointment_store
    _task_store = None
    _event_store = None
    _appointment_store = None


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "open_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteTaskStore",
    "SQLiteEventStore",
    "SQLiteAppointmentStore",
    # Factory functions
    "get_task_store",
    "get_event_store",
    "get_appointment_store",
    "reset_stores",
]
