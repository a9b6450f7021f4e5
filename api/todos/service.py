"""
Todo business logic.

Every function takes the Store handle explicitly and issues at most one Store
call. Validation and not-found are resolved here; store failures propagate
untouched as `StoreError`.
"""

from __future__ import annotations

from typing import Protocol

from core.errors import ValidationError

from . import schemas
from .models import Stats, Task


class TaskStore(Protocol):
    async def create(self, title: str) -> Task: ...

    async def get_all(self) -> list[Task]: ...

    async def get_by_id(self, task_id: int) -> Task: ...

    async def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        completed: bool | None = None,
    ) -> int: ...

    async def delete(self, task_id: int) -> int: ...

    async def stats(self) -> Stats: ...


def _clean_title(title: str | None) -> str:
    title = (title or "").strip()
    if not title:
        raise ValidationError("Task title is required.")
    return title


async def list_todos(store: TaskStore) -> list[schemas.TaskResponse]:
    tasks = await store.get_all()
    return [schemas.to_task_response(t) for t in tasks]


async def get_todo(store: TaskStore, task_id: int) -> schemas.TaskResponse:
    task = await store.get_by_id(task_id)
    return schemas.to_task_response(task)


async def create_todo(store: TaskStore, payload: schemas.CreateTodoRequest) -> schemas.CreateTodoResponse:
    title = _clean_title(payload.title)
    task = await store.create(title)
    return schemas.CreateTodoResponse(
        id=task.id,
        title=task.title,
        completed=schemas.completed_flag(task.completed),
        message="Task created.",
    )


async def update_todo(
    store: TaskStore,
    task_id: int,
    payload: schemas.UpdateTodoRequest,
) -> schemas.UpdateTodoResponse:
    if payload.title is None and payload.completed is None:
        raise ValidationError("Nothing to update.")

    # A supplied title must still satisfy the non-empty invariant.
    title = _clean_title(payload.title) if payload.title is not None else None

    changes = await store.update(task_id, title=title, completed=payload.completed)
    return schemas.UpdateTodoResponse(message="Task updated.", changes=changes)


async def delete_todo(store: TaskStore, task_id: int) -> schemas.DeleteTodoResponse:
    await store.delete(task_id)
    return schemas.DeleteTodoResponse(message="Task deleted.", id=task_id)


async def todo_stats(store: TaskStore) -> schemas.StatsResponse:
    return schemas.to_stats_response(await store.stats())
