from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__, config
from .database import Database, create_database, start_schema_initializer
from .errors import TaskValidationError
from .logger import logger
from .routers import health, tasks


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts) or "Invalid request"


def create_app(
    database: Optional[Database] = None,
    schema_policy: Optional[str] = None,
    expose_error_details: Optional[bool] = None,
) -> FastAPI:
    """Build the API around a database handle.

    When no database is given one is created from config, and the app
    disposes of its pool on shutdown. A database passed in stays owned by
    the caller.
    """
    owns_database = database is None
    if database is None:
        database = create_database()
    if schema_policy is None:
        schema_policy = config.SCHEMA_INIT_POLICY
    if expose_error_details is None:
        expose_error_details = config.EXPOSE_ERROR_DETAILS

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle startup and shutdown events"""
        # Under "strict" the DDL blocks, so keep it off the event loop.
        app.state.schema_initializer = await run_in_threadpool(
            start_schema_initializer, database, schema_policy
        )
        logger.info("Task tracker API started")

        yield

        if owns_database:
            database.dispose()
        logger.info("Task tracker API stopped")

    app = FastAPI(
        title="Task Tracker API",
        description="Create and list tasks persisted in a relational store",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.expose_error_details = expose_error_details
    app.state.schema_initializer = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TaskValidationError)
    async def task_validation_handler(request: Request, exc: TaskValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": _validation_message(exc)},
        )

    app.include_router(health.router, tags=["health"])
    app.include_router(tasks.router, prefix="/api", tags=["tasks"])

    return app
