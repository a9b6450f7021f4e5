"""
Todo API endpoints (mounted under /api).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from . import schemas, service
from .dependencies import get_repository
from .service import TaskStore

router = APIRouter()

# Ids are BIGSERIAL; anything outside that range cannot name a row.
MAX_TASK_ID = 2**63 - 1
TaskId = Annotated[int, Path(ge=1, le=MAX_TASK_ID)]


@router.get("/todos")
async def list_todos(
    store: TaskStore = Depends(get_repository),
) -> list[schemas.TaskResponse]:
    return await service.list_todos(store)


@router.get("/todos/{task_id}")
async def get_todo(
    task_id: TaskId,
    store: TaskStore = Depends(get_repository),
) -> schemas.TaskResponse:
    return await service.get_todo(store, task_id)


@router.post("/todos", status_code=status.HTTP_201_CREATED)
async def create_todo(
    request: schemas.CreateTodoRequest,
    store: TaskStore = Depends(get_repository),
) -> schemas.CreateTodoResponse:
    return await service.create_todo(store, request)


@router.put("/todos/{task_id}")
async def update_todo(
    task_id: TaskId,
    request: schemas.UpdateTodoRequest,
    store: TaskStore = Depends(get_repository),
) -> schemas.UpdateTodoResponse:
    return await service.update_todo(store, task_id, request)


@router.delete("/todos/{task_id}")
async def delete_todo(
    task_id: TaskId,
    store: TaskStore = Depends(get_repository),
) -> schemas.DeleteTodoResponse:
    return await service.delete_todo(store, task_id)


@router.get("/stats")
async def stats(
    store: TaskStore = Depends(get_repository),
) -> schemas.StatsResponse:
    return await service.todo_stats(store)
