"""Storage infrastructure implementations."""

from src.infrastructure.storage.sqlite import (
    SQLiteAppointmentStore,
    SQLiteEventStore,
    SQLiteTaskStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    open_pool,
)

__all__ = [
    # SQLite stores
    "SQLiteTaskStore",
    "SQLiteEventStore",
    "SQLiteAppointmentStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "open_pool",
    "get_connection",
    "get_transaction",
]
