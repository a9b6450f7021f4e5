"""
Pydantic schemas for the todo endpoints.

The wire shape encodes `completed` as 0/1; `to_task_response` is the only
place a domain `Task` is turned into that shape.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from .models import Stats, Task


class CreateTodoRequest(BaseModel):
    # Optional here so a missing title is reported by the service as a 400
    # with the same message as an empty one.
    title: str | None = None


class UpdateTodoRequest(BaseModel):
    title: str | None = None
    completed: bool | None = None


class TaskResponse(BaseModel):
    id: int
    title: str
    completed: Literal[0, 1]
    created_at: datetime


class CreateTodoResponse(BaseModel):
    id: int
    title: str
    completed: Literal[0, 1]
    message: str


class UpdateTodoResponse(BaseModel):
    message: str
    changes: int


class DeleteTodoResponse(BaseModel):
    message: str
    id: int


class StatsResponse(BaseModel):
    total: int
    completed: int
    active: int


def completed_flag(value: bool) -> Literal[0, 1]:
    return 1 if value else 0


def to_task_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        completed=completed_flag(task.completed),
        created_at=task.created_at,
    )


def to_stats_response(stats: Stats) -> StatsResponse:
    return StatsResponse(total=stats.total, completed=stats.completed, active=stats.active)
