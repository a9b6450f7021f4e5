"""
HTML rendering for the task list.

Pure functions of (tasks, filter): no I/O, no state. Titles are always
HTML-escaped.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from enum import Enum
from html import escape

from todos.models import Stats, Task


class Filter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


EMPTY_STATE = '<div class="empty-state show">No tasks here yet.</div>'


def visible_tasks(tasks: Sequence[Task], task_filter: Filter) -> list[Task]:
    if task_filter is Filter.ACTIVE:
        return [t for t in tasks if not t.completed]
    if task_filter is Filter.COMPLETED:
        return [t for t in tasks if t.completed]
    return list(tasks)


def format_date(value: datetime) -> str:
    # Aware timestamps are shown in the viewer's local zone.
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%d.%m.%Y")


def render_task(task: Task) -> str:
    completed_cls = " completed" if task.completed else ""
    checked = " checked" if task.completed else ""
    return (
        f'<div class="todo-item{completed_cls}" data-id="{task.id}">'
        f'<input type="checkbox" class="todo-checkbox"{checked}'
        f' data-action="toggle" data-id="{task.id}">'
        f'<span class="todo-text">{escape(task.title)}</span>'
        f'<span class="todo-date">{format_date(task.created_at)}</span>'
        f'<button class="delete-btn" data-action="remove" data-id="{task.id}">Delete</button>'
        "</div>"
    )


def render_tasks(tasks: Sequence[Task], task_filter: Filter) -> str:
    """
    Render the visible subset, or the empty-state indicator when nothing matches.
    """
    shown = visible_tasks(tasks, task_filter)
    if not shown:
        return EMPTY_STATE
    items = "".join(render_task(t) for t in shown)
    return f'<div class="todo-list">{items}</div>'


def stats_for(tasks: Sequence[Task]) -> Stats:
    return Stats(total=len(tasks), completed=sum(1 for t in tasks if t.completed))


def render_page(tasks: Sequence[Task], task_filter: Filter) -> str:
    stats = stats_for(tasks)
    buttons = "".join(
        f'<a class="filter-btn{" active" if f is task_filter else ""}"'
        f' data-filter="{f.value}" href="?filter={f.value}">{f.value.capitalize()}</a>'
        for f in Filter
    )
    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8"><title>Todos</title></head><body>'
        '<div class="stats">'
        f'<span id="totalTodos">{stats.total}</span>'
        f'<span id="activeTodos">{stats.active}</span>'
        f'<span id="completedTodos">{stats.completed}</span>'
        "</div>"
        f'<nav class="filters">{buttons}</nav>'
        f"{render_tasks(tasks, task_filter)}"
        "</body></html>"
    )
