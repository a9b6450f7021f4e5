"""
Client-side state for the task list.

`TodoController` holds a local mirror of the server's tasks plus the active
filter, and keeps it in sync by polling and by applying the result of each
successful user action. The mirror is only a cache: the next `load()` replaces
it with whatever the server returns.

Failure policy for every action: a non-2xx status or a transport error raises
one error notification and leaves the mirror untouched. No retries.

Known limitation: a poll can race a user action, and whichever response
arrives last overwrites the mirror.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import httpx

from todos.models import Stats, Task

from .render import Filter, render_tasks, stats_for

logger = logging.getLogger(__name__)

NotifyFn = Callable[[str, str], None]
ConfirmFn = Callable[[str], bool]
RenderFn = Callable[[list[Task], Filter], None]


class TodoClientError(RuntimeError):
    pass


def api_url() -> str:
    return os.environ.get("TODO_API_URL", "http://localhost:5000/api").strip() or "http://localhost:5000/api"


def poll_interval_s() -> float:
    raw = os.environ.get("TODO_POLL_INTERVAL_S", "").strip()
    try:
        value = float(raw) if raw else 30.0
    except ValueError:
        return 30.0
    return value if value > 0 else 30.0


def _log_notification(message: str, level: str) -> None:
    logger.info("notify level=%s message=%s", level, message)


def _deny(_: str) -> bool:
    # Without an interactive confirmation step nothing is deleted.
    return False


def _parse_task(data: Any) -> Task:
    if not isinstance(data, dict):
        raise TodoClientError(f"expected a task object, got {type(data).__name__}")
    created_at = data.get("created_at")
    try:
        return Task(
            id=int(data["id"]),
            title=str(data["title"]),
            completed=bool(data.get("completed")),
            created_at=(
                datetime.fromisoformat(created_at)
                if isinstance(created_at, str)
                else datetime.now(timezone.utc)
            ),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise TodoClientError(f"malformed task: {exc!r}") from exc


def _parse_tasks(data: Any) -> list[Task]:
    if not isinstance(data, list):
        raise TodoClientError(f"expected a task list, got {type(data).__name__}")
    return [_parse_task(item) for item in data]


class TodoController:
    def __init__(
        self,
        http: httpx.AsyncClient,
        *,
        notify: NotifyFn | None = None,
        confirm: ConfirmFn | None = None,
        render: RenderFn | None = None,
        poll_interval: float | None = None,
    ) -> None:
        self.http = http
        self.tasks: list[Task] = []
        self.current_filter: Filter = Filter.ALL
        self.html: str = ""
        self.poll_interval = poll_interval if poll_interval is not None else poll_interval_s()
        self._notify = notify or _log_notification
        self._confirm = confirm or _deny
        self._render = render
        self._poller: asyncio.Task[None] | None = None

    # ---- lifecycle ----

    async def start(self) -> None:
        await self.load()
        if self._poller is None:
            self._poller = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        if self._poller is None:
            return
        self._poller.cancel()
        try:
            await self._poller
        except asyncio.CancelledError:
            pass
        self._poller = None

    async def _poll_loop(self) -> None:
        while True:
            await asyncio.sleep(self.poll_interval)
            try:
                await self.load()
            except Exception:
                # A failing render callback must not end polling.
                logger.exception("todo_client_poll_failed")

    # ---- transport ----

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = await self.http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise TodoClientError(f"{method} {path} failed: {exc}") from exc
        if not resp.is_success:
            raise TodoClientError(f"{method} {path} returned {resp.status_code}")
        try:
            return resp.json()
        except ValueError as exc:
            raise TodoClientError(f"{method} {path} returned invalid JSON") from exc

    def _fail(self, message: str, exc: TodoClientError) -> None:
        logger.warning("todo_client_error error=%s", exc)
        self._notify(message, "error")

    # ---- state ----

    def rerender(self) -> None:
        self.html = render_tasks(self.tasks, self.current_filter)
        if self._render is not None:
            self._render(self.tasks, self.current_filter)

    def set_filter(self, task_filter: Filter | str) -> bool:
        """
        Switch the visible subset. An unknown filter name is rejected with a
        warning and leaves the current filter in place.
        """
        try:
            self.current_filter = Filter(task_filter)
        except ValueError:
            logger.warning("todo_client_unknown_filter filter=%r", task_filter)
            self._notify(f"Unknown filter: {task_filter}", "warning")
            return False
        self.rerender()
        return True

    def stats(self) -> Stats:
        return stats_for(self.tasks)

    def find(self, task_id: int) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    # ---- actions ----

    async def load(self) -> bool:
        try:
            # Parse fully before touching the mirror so a bad body leaves it intact.
            tasks = _parse_tasks(await self._request("GET", "/todos"))
        except TodoClientError as exc:
            self._fail("Failed to load tasks.", exc)
            return False
        self.tasks = tasks
        self.rerender()
        return True

    async def add(self, title: str) -> Task | None:
        title = (title or "").strip()
        if not title:
            self._notify("Enter a task title.", "warning")
            return None

        try:
            task = _parse_task(await self._request("POST", "/todos", json={"title": title}))
        except TodoClientError as exc:
            self._fail("Failed to add task.", exc)
            return None

        # The create response has no created_at; newest-first order puts the
        # record at the front either way.
        self.tasks.insert(0, task)
        self.rerender()
        self._notify("Task added.", "success")
        return task

    async def toggle(self, task_id: int) -> bool:
        task = self.find(task_id)
        if task is None:
            return False

        new_completed = not task.completed
        try:
            await self._request("PUT", f"/todos/{task_id}", json={"completed": new_completed})
        except TodoClientError as exc:
            self._fail("Failed to update task.", exc)
            return False

        task.completed = new_completed
        self.rerender()
        return True

    async def remove(self, task_id: int) -> bool:
        if not self._confirm("Delete this task?"):
            return False

        try:
            await self._request("DELETE", f"/todos/{task_id}")
        except TodoClientError as exc:
            self._fail("Failed to delete task.", exc)
            return False

        self.tasks = [t for t in self.tasks if t.id != task_id]
        self.rerender()
        self._notify("Task deleted.", "success")
        return True


def create_controller(**kwargs: Any) -> TodoController:
    """
    Build a controller talking to `TODO_API_URL`. The caller owns closing
    `controller.http`.
    """
    return TodoController(httpx.AsyncClient(base_url=api_url()), **kwargs)
