# api/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from taskapi import __version__
from taskapi.db import Database, TaskRepository
from .endpoints import health, tasks
from .handlers import register_exception_handlers
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The pool lives exactly as long as the application
    db = app.state.db
    try:
        await db.connect()
        if app.state.settings.DATABASE_INIT_SCHEMA:
            await TaskRepository(db).init_schema()
        yield
    finally:
        await db.close()


def create_app(settings: Settings = None, database: Database = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title=settings.PROJECT_NAME, version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.db = database or Database.from_settings(settings)

    register_exception_handlers(app)

    # Routers
    app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
    app.include_router(health.router, prefix="/health", tags=["health"])
    return app
