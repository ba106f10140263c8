"""
NotesApp Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers.
Who:   uvicorn (`uvicorn notesapp.main:app`) and the API tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                     FastAPI App                      │
    │                                                      │
    │  Middleware:  Request ID → Logging → GZip → CORS     │
    │                                                      │
    │  Routes:                                             │
    │    /api/auth/*   /api/categories/*   /api/notes/*    │
    │    /health                                           │
    │                                                      │
    │  Exception Handlers:                                 │
    │    NotFound→404  Unauthorized→401                    │
    │    InvalidOperation / Note- / CategoryOperation→400  │
    │    SQLAlchemyError→500  Exception→500                │
    └──────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from notesapp import __version__
from notesapp.config import settings
from notesapp.database import dispose_engine
from notesapp.exceptions import (
    CategoryOperationError,
    InvalidOperationError,
    NoteOperationError,
    NotesAppError,
    NotFoundError,
    UnauthorizedError,
)
from notesapp.middleware.logging import RequestLoggingMiddleware
from notesapp.middleware.request_id import RequestIDMiddleware, request_id_var
from notesapp.routes import auth, categories, health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once from the lifespan, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("NotesApp Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving; the misconfiguration stays visible in the logs
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("NotesApp Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str) -> dict:
    return {"error": error, "message": message, "request_id": request_id_var.get("")}


def _domain_error_response(status_code: int, exc: NotesAppError) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=_error_body(exc.error_code, exc.message))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map error kinds to HTTP responses with the body
    {"error": <code>, "message": <text>, "request_id": <id>}.

    Server-side failures return a generic message; details go to the log only.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _domain_error_response(404, exc)

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return _domain_error_response(401, exc)

    @app.exception_handler(InvalidOperationError)
    async def handle_invalid_operation(request: Request, exc: InvalidOperationError):
        logger.warning("[%s] Invalid operation: %s", request_id_var.get(""), exc.message)
        return _domain_error_response(400, exc)

    @app.exception_handler(NoteOperationError)
    async def handle_note_operation(request: Request, exc: NoteOperationError):
        return _domain_error_response(400, exc)

    @app.exception_handler(CategoryOperationError)
    async def handle_category_operation(request: Request, exc: CategoryOperationError):
        return _domain_error_response(400, exc)

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error on %s %s: %s", rid, request.method, request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", "An internal error occurred. Please try again later."),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="NotesApp API",
        description="Multi-user notes with categories, behind cookie sessions.",
        version=__version__,
        lifespan=lifespan,
    )

    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(categories.router)
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()
