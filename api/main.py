from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from client.render import Filter, render_page
from core import db
from core.errors import TodoError
from core.logging_setup import setup_logging
from todos import router as todos_router
from todos.repository import TaskRepository
from todos.service import TaskStore

logger = logging.getLogger(__name__)


def cors_origins() -> list[str]:
    raw = os.environ.get("TODO_CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
    return [o.strip() for o in raw.split(",") if o.strip()]


async def _todo_error_handler(_: Request, exc: TodoError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed status=%s error=%s", exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # An id that cannot be parsed or is out of range matches no row.
    if any(tuple(err.get("loc", ()))[:1] == ("path",) for err in exc.errors()):
        return JSONResponse(status_code=404, content={"error": "Task not found."})

    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ()))
    message = f"{where}: {first.get('msg', 'invalid request')}" if where else "Invalid request."
    return JSONResponse(status_code=400, content={"error": message})


def create_app(repository: TaskStore | None = None) -> FastAPI:
    """
    Build the API app around a Store handle.

    Without an explicit repository the asyncpg-backed one is used, and the
    DB pool is opened (and the table created) on startup.
    """
    owns_pool = repository is None
    store = repository if repository is not None else TaskRepository()

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if not owns_pool:
            yield
            return
        # Initialize the DB pool once per process.
        await db.init_pool()
        try:
            await store.ensure_schema()
            yield
        finally:
            await db.close_pool()

    app = FastAPI(lifespan=lifespan)
    app.state.repository = store

    # Allow local frontend dev server to call this API from the browser.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TodoError, _todo_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    app.include_router(todos_router.router, prefix="/api", tags=["todos"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/", response_class=HTMLResponse)
    async def index(task_filter: Filter = Query(Filter.ALL, alias="filter")) -> HTMLResponse:
        tasks = await store.get_all()
        return HTMLResponse(render_page(tasks, task_filter))

    return app


setup_logging()
app = create_app()
