"""
Shared plumbing for the SQLite record stores.

Stores use an explicitly injected pool when given one (headless rescan,
tests) and the global pool otherwise.
"""

import sqlite3
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import TypeVar

import aiosqlite

from src.config import get_logger
from src.core.exceptions import DatabaseError, DuplicateRecordError
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)

T = TypeVar("T")


def to_db_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def from_db_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 column, accepting the trailing 'Z' JS clients write."""
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


class SQLiteStoreBase:
    """Connection handling and error translation for one table."""

    kind: str = "record"

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

    def _convert_rows(
        self,
        rows: Iterable[aiosqlite.Row],
        converter: Callable[[aiosqlite.Row], T],
    ) -> list[T]:
        """Convert rows, skipping (and logging) any that fail to parse."""
        entities: list[T] = []
        for row in rows:
            try:
                entities.append(converter(row))
            except (ValueError, TypeError, KeyError) as e:
                logger.warning(
                    "skipping_malformed_row",
                    kind=self.kind,
                    row_id=row["id"] if "id" in row.keys() else None,
                    error=str(e),
                )
        return entities

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._pool is not None:
            async with self._pool.acquire() as conn:
                yield conn
        else:
            async with get_connection() as conn:
                yield conn

    @asynccontextmanager
    async def _transaction(
        self, operation: str, record_id: str | None = None
    ) -> AsyncIterator[aiosqlite.Connection]:
        """Transaction that maps sqlite errors to domain storage errors."""
        try:
            if self._pool is not None:
                async with self._pool.transaction() as conn:
                    yield conn
            else:
                async with get_transaction() as conn:
                    yield conn
        except sqlite3.IntegrityError as e:
            if record_id is not None and "UNIQUE" in str(e):
                raise DuplicateRecordError(self.kind, record_id) from e
            raise DatabaseError(operation, str(e)) from e
        except sqlite3.Error as e:
            raise DatabaseError(operation, str(e)) from e
