"""Application factory for the Taskboard API."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard import __version__
from taskboard.c1_database_session.database_manager import DatabaseManager
from taskboard.c2_auth_service.auth_service import AuthService
from taskboard.c2_credential_store.credential_store import CredentialStore
from taskboard.c2_task_service.task_service import TaskService
from taskboard.c2_task_store.task_store import TaskStore
from taskboard.c3_auth_routes.auth_routes import create_auth_router
from taskboard.c3_health_routes.health_routes import router as health_router
from taskboard.c3_task_routes.task_routes import create_task_router
from taskboard.core.config import Settings, get_settings
from taskboard.core.errors import InternalError, TaskboardError

logger = logging.getLogger(__name__)


class ServerState:
    """Wires one DatabaseManager into the stores and services.

    ``open()`` prepares the schema; ``close()`` releases the database.
    """

    def __init__(self, settings: Settings, db_manager: Optional[DatabaseManager] = None):
        self.settings = settings
        self.db_manager = db_manager or DatabaseManager(
            settings.database.url, echo=settings.database.echo
        )
        self.credential_store = CredentialStore(self.db_manager)
        self.task_store = TaskStore(self.db_manager)
        self.auth_service = AuthService(self.credential_store, settings.auth)
        self.task_service = TaskService(
            self.task_store,
            self.credential_store,
            enforce_ownership=settings.auth.enforce_task_ownership,
        )

    def open(self):
        self.db_manager.create_tables()

    def close(self):
        self.db_manager.close()


def _field_name(loc) -> str:
    # ("body", "title") -> "title"; a missing body reports as "body"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or str(loc[-1])


def register_exception_handlers(app: FastAPI, settings: Settings):
    """Render every failure as {"message": ..., "errors": [...]}."""

    @app.exception_handler(TaskboardError)
    async def taskboard_error_handler(request: Request, exc: TaskboardError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": _field_name(error.get("loc", ())), "message": error.get("msg", "Invalid value")}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"message": "Validation failed", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        error = InternalError()
        content = error.to_dict()
        if settings.server.expose_error_details:
            content["error"] = str(exc)
        return JSONResponse(status_code=error.status_code, content=content)


def create_app(
    settings: Optional[Settings] = None,
    db_manager: Optional[DatabaseManager] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to the global settings)
        db_manager: Pre-built database manager, e.g. an in-memory one for tests

    Returns:
        FastAPI: App whose lifespan opens and closes the database
    """
    settings = settings or get_settings()
    server_state = ServerState(settings, db_manager)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        server_state.open()
        logger.info("Taskboard API started")
        try:
            yield
        finally:
            server_state.close()
            logger.info("Taskboard API stopped")

    app = FastAPI(
        title="Taskboard API",
        description="Multi-user task tracking",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.server_state = server_state

    if settings.server.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.server.cors_origins,
            allow_credentials="*" not in settings.server.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app, settings)

    prefix = settings.server.api_prefix
    app.include_router(health_router)
    app.include_router(create_auth_router(server_state), prefix=prefix)
    app.include_router(create_task_router(server_state), prefix=prefix)

    return app
