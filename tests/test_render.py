# tests/test_render.py

from __future__ import annotations

from datetime import datetime

from client.render import EMPTY_STATE, Filter, render_page, render_tasks, visible_tasks
from todos.models import Task

# Naive timestamps are formatted as-is, which keeps date assertions stable.
_TS = datetime(2024, 3, 9, 12, 0, 0)


def _tasks() -> list[Task]:
    return [
        Task(id=3, title="write report", completed=False, created_at=_TS),
        Task(id=2, title="buy milk", completed=True, created_at=_TS),
        Task(id=1, title="call mom", completed=False, created_at=_TS),
    ]


def test_visible_tasks_by_filter() -> None:
    tasks = _tasks()

    assert [t.id for t in visible_tasks(tasks, Filter.ALL)] == [3, 2, 1]
    assert [t.id for t in visible_tasks(tasks, Filter.ACTIVE)] == [3, 1]
    assert [t.id for t in visible_tasks(tasks, Filter.COMPLETED)] == [2]


def test_render_escapes_titles() -> None:
    tasks = [Task(id=1, title='<script>alert("x")</script>', completed=False, created_at=_TS)]

    html = render_tasks(tasks, Filter.ALL)

    assert "<script>" not in html
    assert "&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt;" in html


def test_render_row_has_controls_and_date() -> None:
    html = render_tasks(_tasks(), Filter.COMPLETED)

    assert 'data-action="toggle" data-id="2"' in html
    assert 'data-action="remove" data-id="2"' in html
    assert "checked" in html
    assert "09.03.2024" in html
    assert "write report" not in html


def test_empty_visible_set_shows_empty_state() -> None:
    tasks = [Task(id=1, title="open", completed=False, created_at=_TS)]

    assert render_tasks(tasks, Filter.COMPLETED) == EMPTY_STATE
    assert render_tasks([], Filter.ALL) == EMPTY_STATE


def test_render_page_counters_and_active_filter() -> None:
    html = render_page(_tasks(), Filter.ACTIVE)

    assert '<span id="totalTodos">3</span>' in html
    assert '<span id="activeTodos">2</span>' in html
    assert '<span id="completedTodos">1</span>' in html
    assert 'class="filter-btn active" data-filter="active"' in html
