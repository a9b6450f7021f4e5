# tests/fakes.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from core.errors import NotFoundError, StoreError
from todos.models import Stats, Task


class FakeTaskRepo:
    """
    In-memory Store with the same contract as `TaskRepository`.

    - Records every call in `calls` so tests can assert one Store call per request
    - Set `error` to make every call fail with `StoreError(error)`
    - `created_at` is the wall clock, nudged forward so it is strictly increasing
    """

    def __init__(self) -> None:
        self.rows: dict[int, Task] = {}
        self.calls: list[str] = []
        self.error: str | None = None
        self._next_id = 1
        self._last_ts: datetime | None = None

    def _enter(self, op: str) -> None:
        self.calls.append(op)
        if self.error is not None:
            raise StoreError(self.error)

    def _now(self) -> datetime:
        now = datetime.now(timezone.utc)
        if self._last_ts is not None and now <= self._last_ts:
            now = self._last_ts + timedelta(microseconds=1)
        self._last_ts = now
        return now

    def seed(self, title: str, *, completed: bool = False) -> Task:
        task = Task(id=self._next_id, title=title, completed=completed, created_at=self._now())
        self._next_id += 1
        self.rows[task.id] = task
        return task

    async def create(self, title: str) -> Task:
        self._enter("create")
        return self.seed(title)

    async def get_all(self) -> list[Task]:
        self._enter("get_all")
        return sorted(self.rows.values(), key=lambda t: (t.created_at, t.id), reverse=True)

    async def get_by_id(self, task_id: int) -> Task:
        self._enter("get_by_id")
        task = self.rows.get(task_id)
        if task is None:
            raise NotFoundError("Task not found.")
        return task

    async def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        completed: bool | None = None,
    ) -> int:
        self._enter("update")
        task = self.rows.get(task_id)
        if task is None:
            raise NotFoundError("Task not found.")
        if title is not None:
            task.title = title
        if completed is not None:
            task.completed = completed
        return 1

    async def delete(self, task_id: int) -> int:
        self._enter("delete")
        if self.rows.pop(task_id, None) is None:
            raise NotFoundError("Task not found.")
        return 1

    async def stats(self) -> Stats:
        self._enter("stats")
        return Stats(
            total=len(self.rows),
            completed=sum(1 for t in self.rows.values() if t.completed),
        )


class Notifications:
    """
    Captures (message, level) pairs from the client controller.
    """

    def __init__(self) -> None:
        self.items: list[tuple[str, str]] = []

    def __call__(self, message: str, level: str) -> None:
        self.items.append((message, level))

    @property
    def levels(self) -> list[str]:
        return [level for _, level in self.items]
