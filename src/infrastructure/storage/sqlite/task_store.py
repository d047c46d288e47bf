"""
SQLite implementation of task storage.

Handles CRUD plus the pending-task query used by the background rescan.
"""

import aiosqlite

from src.config import get_logger
from src.core.entities.record import Task
from src.core.exceptions import RecordNotFoundError
from src.core.interfaces.storage import ITaskStore
from src.infrastructure.storage.sqlite.base import (
    SQLiteStoreBase,
    from_db_timestamp,
    to_db_timestamp,
)

logger = get_logger(__name__)


class SQLiteTaskStore(SQLiteStoreBase, ITaskStore):
    """SQLite implementation of task storage."""

    kind = "task"

    async def create(self, task: Task) -> Task:
        """Insert a new task."""
        async with self._transaction("create_task", task.id) as conn:
            await conn.execute(
                """
                INSERT INTO tasks (
                    id, title, description, due_date, is_completed, created_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    task.id,
                    task.title,
                    task.description,
                    to_db_timestamp(task.due_date),
                    1 if task.is_completed else 0,
                    to_db_timestamp(task.created_at),
                ),
            )
        logger.info("task_created", task_id=task.id)
        return task

    async def get(self, task_id: str) -> Task | None:
        """Get task by ID."""
        async with self._connection() as conn:
            cursor = await conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
            row = await cursor.fetchone()
            return self._row_to_entity(row) if row else None

    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        async with self._transaction("update_task") as conn:
            cursor = await conn.execute(
                """
                UPDATE tasks SET
                    title = ?, description = ?, due_date = ?, is_completed = ?
                WHERE id = ?
                """,
                (
                    task.title,
                    task.description,
                    to_db_timestamp(task.due_date),
                    1 if task.is_completed else 0,
                    task.id,
                ),
            )
            if cursor.rowcount == 0:
                raise RecordNotFoundError(self.kind, task.id)
        logger.info("task_updated", task_id=task.id, is_completed=task.is_completed)
        return task

    async def delete(self, task_id: str) -> bool:
        """Delete a task by ID."""
        async with self._transaction("delete_task") as conn:
            cursor = await conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("task_deleted", task_id=task_id)
        return deleted

    async def list_all(self) -> list[Task]:
        """List all tasks, newest first."""
        async with self._connection() as conn:
            cursor = await conn.execute("SELECT * FROM tasks ORDER BY created_at DESC")
            rows = await cursor.fetchall()
            return self._convert_rows(rows, self._row_to_entity)

    async def list_pending(self) -> list[Task]:
        """List open tasks that have a due date."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM tasks
                WHERE is_completed = 0 AND due_date IS NOT NULL
                ORDER BY created_at DESC
                """
            )
            rows = await cursor.fetchall()
            return self._convert_rows(rows, self._row_to_entity)

    async def delete_all(self) -> int:
        async with self._transaction("delete_all_tasks") as conn:
            cursor = await conn.execute("DELETE FROM tasks")
            count = cursor.rowcount
        logger.info("tasks_cleared", count=count)
        return count

    @staticmethod
    def _row_to_entity(row: aiosqlite.Row) -> Task:
        """Convert a database row to a Task entity."""
        return Task(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            due_date=from_db_timestamp(row["due_date"]),
            is_completed=bool(row["is_completed"]),
            created_at=from_db_timestamp(row["created_at"]),
        )
