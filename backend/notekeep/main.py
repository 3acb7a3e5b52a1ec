"""
NoteKeep — FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn notekeep.main:app),
       or through the `notekeep` console script (run()).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │  Req ID  │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ /notes  /note  /note/read/…  │ │ GET /health  │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Rejected→404/409 │ BadBody→409 │ Storage→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging setup → configuration check → log state file location
    Shutdown: log shutdown (the state file holds no open handles between requests)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from notekeep import __version__
from notekeep.config import settings
from notekeep.exceptions import NoteKeepError, RequestRejectedError, StorageError
from notekeep.middleware.logging import RequestLoggingMiddleware
from notekeep.middleware.request_id import RequestIDMiddleware, request_id_var
from notekeep.routes import health, notes

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Unexpected error"

# Generic messages for request bodies that fail schema validation
BAD_BODY_MESSAGES = {
    "POST": "Cannot create note",
    "PUT": "Cannot update note",
}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("NoteKeep %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: /health reports the problem and requests answer 500
        logger.error("Configuration error: %s", str(e))

    logger.info("State file: %s", settings.notes_path.resolve())
    logger.info("Notes service listening on port %d", settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("NoteKeep shutting down...")
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestRejectedError    → status chosen by the route (404 / 409)
        RequestValidationError  → 409 (malformed note body counts as missing input)
        StorageError            → 500 Internal Server Error
        NoteKeepError (base)    → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Responses only carry a coarse category and a generic message. Context
    and stack traces are logged server-side.
    """

    @app.exception_handler(RequestRejectedError)
    async def handle_rejected(request: Request, exc: RequestRejectedError):
        rid = request_id_var.get("")
        logger.warning(
            "[%s] %s %s rejected (%d): %s | Context: %s",
            rid, request.method, request.url.path, exc.status_code, exc.message, exc.context,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error,
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid request body: %s", rid, exc.errors())
        return JSONResponse(
            status_code=409,
            content={
                "error": "validation_error",
                "message": BAD_BODY_MESSAGES.get(request.method, "Invalid request"),
                "request_id": rid,
            },
        )

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Storage error (%s): %s | Context: %s",
            rid, exc.reason.value, exc.message, exc.context,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": UNEXPECTED_ERROR_MESSAGE,
                "request_id": rid,
            },
        )

    @app.exception_handler(NoteKeepError)
    async def handle_app_error(request: Request, exc: NoteKeepError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": UNEXPECTED_ERROR_MESSAGE,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": UNEXPECTED_ERROR_MESSAGE,
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="NoteKeep API",
        description="Create, read, update and delete short text notes.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition (last added runs first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured host/port."""
    uvicorn.run(
        "notekeep.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
