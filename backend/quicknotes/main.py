"""
QuickNotes Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn imports `quicknotes.main:app`; tests call create_app() with
       their own store.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Req ID → Logging → CORS               │
    │                                                     │
    │  Routes (under /api):                               │
    │   /notes  /notes/{id}  /health                      │
    │                                                     │
    │  Exception Handlers:                                │
    │   ValidationError→400 │ NotFound→404 │ DB→500       │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the NoteStore (unless one was injected)
    3. Readiness gate: ping the store under the RetryPolicy;
       failure aborts startup and the process exits non-zero
    Shutdown:
    1. Dispose the store's engine (only when the app built it)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quicknotes import __version__
from quicknotes.config import Settings, settings as default_settings
from quicknotes.database import build_engine
from quicknotes.exceptions import DatabaseError, NotFoundError, QuickNotesError, ValidationError
from quicknotes.middleware.logging import RequestLoggingMiddleware
from quicknotes.middleware.request_id import RequestIDMiddleware, request_id_var
from quicknotes.routes import health, notes
from quicknotes.services.readiness import RetryPolicy, await_readiness
from quicknotes.store import NoteStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(app_settings: Optional[Settings] = None) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before any other initialization.
    """
    app_settings = app_settings or default_settings

    logging.basicConfig(
        level=getattr(logging, app_settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def build_lifespan(app_settings: Settings, store: Optional[NoteStore]):
    """
    Lifespan bound to the given settings and optional pre-built store.

    An injected store is owned by the caller: it is neither gated nor
    closed here.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(app_settings)
        logger.info("QuickNotes Backend %s starting up...", __version__)

        owned = store is None
        if owned:
            app.state.store = NoteStore(build_engine(app_settings))
            try:
                await await_readiness(
                    app.state.store.ping,
                    RetryPolicy.from_settings(app_settings),
                )
            except QuickNotesError:
                await app.state.store.close()
                logger.critical("Could not connect to the database. Shutting down.")
                raise

        logger.info(
            "Server ready at http://%s:%d%s",
            app_settings.host,
            app_settings.port,
            app_settings.api_prefix,
        )

        yield

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("QuickNotes Backend shutting down...")
        if owned:
            await app.state.store.close()
        logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP status codes and error bodies.

    Handler hierarchy:
        ValidationError        → 400 Bad Request
        RequestValidationError → 400 for body errors, 422 for path/query
        NotFoundError          → 404 Not Found
        DatabaseError          → 500 (fixed message; context logged only)
        QuickNotesError        → 500 (catch-all for custom errors)
        Exception              → 500 (unexpected; stack trace logged)

    Responses never include stack traces, SQL, or driver messages.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """
        A missing body, a non-object body or a mistyped field answers 400 like
        a missing title. Path and query errors keep FastAPI's 422.
        """
        body_errors = [err for err in exc.errors() if err.get("loc", ())[:1] == ("body",)]
        if not body_errors:
            return await request_validation_exception_handler(request, exc)

        rid = request_id_var.get("")
        if any(tuple(err["loc"]) in (("body",), ("body", "title")) for err in body_errors):
            message, field = "Title is required", "title"
        else:
            message, field = "Invalid request body", str(body_errors[0]["loc"][-1])
        logger.warning("[%s] Validation error: %s", rid, message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": message,
                "details": {"field": field},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(QuickNotesError)
    async def handle_application_error(request: Request, exc: QuickNotesError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500 body, full stack trace in the server log."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[NoteStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the module-level settings.
        store:        Pre-built NoteStore. When given it is attached to
                      app.state immediately and the readiness gate is
                      skipped (tests pass an in-memory store here).

    Returns: Fully configured FastAPI instance.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="QuickNotes API",
        description="Create, list, edit and delete notes.",
        version=__version__,
        lifespan=build_lifespan(app_settings, store),
    )
    if store is not None:
        app.state.store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → CORS
    origins = app_settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(
        RequestLoggingMiddleware,
        skip_paths={f"{app_settings.api_prefix}/health"},
    )
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router, prefix=app_settings.api_prefix)
    app.include_router(health.router, prefix=app_settings.api_prefix)

    return app


# uvicorn expects `quicknotes.main:app` to be importable
app = create_app()
