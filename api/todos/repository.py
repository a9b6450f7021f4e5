"""
Todo persistence (raw SQL).

`TaskRepository` is the Store handle the app is constructed with. It keeps no
state of its own; all queries go through the shared pool in `core.db`.
"""

from __future__ import annotations

import logging

from core import db
from core.errors import NotFoundError

from .models import Stats, Task

logger = logging.getLogger(__name__)


class TaskRepository:
    async def ensure_schema(self) -> None:
        await db.execute(
            """
            CREATE TABLE IF NOT EXISTS todos (
              id BIGSERIAL PRIMARY KEY,
              title TEXT NOT NULL CHECK (btrim(title) <> ''),
              completed BOOLEAN NOT NULL DEFAULT false,
              created_at TIMESTAMPTZ NOT NULL DEFAULT now()
            )
            """
        )

    async def create(self, title: str) -> Task:
        row = await db.fetch_one(
            """
            INSERT INTO todos (title)
            VALUES ($1)
            RETURNING id, title, completed, created_at
            """,
            title,
        )
        if row is None:
            raise RuntimeError("Failed to insert todo.")
        logger.info("todo_created id=%s", row["id"])
        return Task.from_row(row)

    async def get_all(self) -> list[Task]:
        rows = await db.fetch_all(
            """
            SELECT id, title, completed, created_at
            FROM todos
            ORDER BY created_at DESC, id DESC
            """
        )
        return [Task.from_row(r) for r in rows]

    async def get_by_id(self, task_id: int) -> Task:
        row = await db.fetch_one(
            """
            SELECT id, title, completed, created_at
            FROM todos
            WHERE id = $1
            """,
            task_id,
        )
        if row is None:
            raise NotFoundError("Task not found.")
        return Task.from_row(row)

    async def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        completed: bool | None = None,
    ) -> int:
        # COALESCE keeps the column when the parameter is NULL, so only the
        # supplied fields change.
        status = await db.execute(
            """
            UPDATE todos
            SET title = COALESCE($2, title),
                completed = COALESCE($3, completed)
            WHERE id = $1
            """,
            task_id,
            title,
            completed,
        )
        changes = db.rows_affected(status)
        if changes == 0:
            raise NotFoundError("Task not found.")
        logger.info("todo_updated id=%s changes=%s", task_id, changes)
        return changes

    async def delete(self, task_id: int) -> int:
        status = await db.execute("DELETE FROM todos WHERE id = $1", task_id)
        changes = db.rows_affected(status)
        if changes == 0:
            raise NotFoundError("Task not found.")
        logger.info("todo_deleted id=%s", task_id)
        return changes

    async def stats(self) -> Stats:
        row = await db.fetch_one(
            """
            SELECT
              count(*) AS total,
              count(*) FILTER (WHERE completed) AS completed
            FROM todos
            """
        )
        if row is None:
            return Stats(total=0, completed=0)
        return Stats(total=int(row["total"]), completed=int(row["completed"]))
