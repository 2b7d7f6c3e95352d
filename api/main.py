from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from activity_logs import router as logs_router
from auth import router as auth_router
from auth import service as auth_service
from auth.repository import UserRepository
from core import db, errors
from core.config import Settings
from core.logging import configure_logging
from quick_tasks import router as quick_tasks_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: db.Database = app.state.db
    settings: Settings = app.state.settings
    # One pool per process; schema and admin account are created idempotently.
    await database.connect()
    try:
        await database.ensure_schema()
        await auth_service.bootstrap_admin(users=UserRepository(database), settings=settings)
        yield
    finally:
        await database.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="activity-log-api", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = db.Database(
        settings.database_url,
        min_size=settings.db_pool_min,
        max_size=settings.db_pool_max,
        command_timeout=settings.db_command_timeout_s,
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    errors.install_exception_handlers(app)

    app.include_router(auth_router.router, tags=["auth"])
    app.include_router(logs_router.router, tags=["logs"])
    app.include_router(quick_tasks_router.router, tags=["quick-tasks"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


def run() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    logger.info("starting host=%s port=%s", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
