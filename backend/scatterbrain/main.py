"""
ScatterBrain Backend - FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(processor) returns a configured FastAPI
       instance with the processor stored on app.state.
Who:   uvicorn (`scatterbrain.main:app`, or the `scatterbrain` console script)
       and the test suite, which injects its own processor.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌─────────────────┐               │
    │  │   Req ID     │→│  Access Logging │               │
    │  └──────────────┘ └─────────────────┘               │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────┐ ┌────────┐ ┌──────────┐  │
    │  │ /ping    │ │ thoughts │ │ labels │ │ thought- │  │
    │  │          │ │          │ │        │ │ labels   │  │
    │  └──────────┘ └──────────┘ └────────┘ └──────────┘  │
    │  Anything else → static files (public/)             │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Decode/ID→400 │ NotFound/NoRow→404 │ DB→500  │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Build the processor from settings unless one was injected
    3. Create missing tables; any failure aborts startup (non-zero exit)

    Shutdown:
    1. Dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from scatterbrain import __version__
from scatterbrain.config import Settings, settings
from scatterbrain.exceptions import ErrorKind, StorageError, ValidationError
from scatterbrain.middleware.logging import RequestLoggingMiddleware
from scatterbrain.middleware.request_id import RequestIDMiddleware, request_id_var
from scatterbrain.routes import labels, ping, thought_labels, thoughts
from scatterbrain.services.processor import ThoughtProcessor

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(config: Settings = settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # These log every statement / request at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    A failure while connecting to the database or creating tables is logged
    and re-raised. uvicorn then reports "Application startup failed" and the
    process exits with a non-zero status.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    config: Settings = app.state.config
    setup_logging(config)
    logger.info("ScatterBrain Backend starting up...")

    processor: Optional[ThoughtProcessor] = app.state.processor
    if processor is None:
        processor = ThoughtProcessor.from_url(config=config)
        app.state.processor = processor

    try:
        await processor.init()
    except Exception:
        logger.critical("Unable to initialize the database schema. Exiting.", exc_info=True)
        await processor.close()
        raise

    logger.info("Server ready at http://%s:%d", config.host, config.port)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("ScatterBrain Backend shutting down...")
    await processor.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

STORAGE_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NO_ROW_UPDATED: 404,
    ErrorKind.INTERNAL: 500,
}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler table:
        RequestValidationError  → 400 (body or parameter could not be decoded)
        ValidationError         → 400 (malformed identifier)
        StorageError            → by kind: NOT_FOUND/NO_ROW_UPDATED 404, INTERNAL 500
        Exception (fallback)    → 500

    5xx responses carry a generic message; details go to the server log.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_decode_error(request: Request, exc: RequestValidationError):
        """FastAPI answers 422 by default; this API uses 400 for any decode failure."""
        rid = request_id_var.get("")
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        first = errors[0] if errors else {"loc": [], "msg": "invalid request"}
        message = f"Unable to decode: {'.'.join(first['loc'])} {first['msg']}".strip()
        logger.warning("[%s] Decode error: %s", rid, message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": message,
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

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

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError):
        rid = request_id_var.get("")
        status_code = STORAGE_STATUS[exc.kind]
        if status_code >= 500:
            logger.error(
                "[%s] Storage error: %s | Context: %s", rid, exc.message, exc.context
            )
            content = {
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            }
        else:
            content = {
                "error": exc.kind.value,
                "message": exc.message,
                "request_id": rid,
            }
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: the stack trace is logged, never returned."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    processor: Optional[ThoughtProcessor] = None,
    config: Settings = settings,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        processor: Storage facade used by every route. When None, the
                   lifespan builds one from `config.database_url`.
        config:    Settings for the static mount here and for logging and the
                   database engine during startup.

    Returns:
        Fully configured FastAPI instance.
    """
    app = FastAPI(
        title="ScatterBrain API",
        description="Store short thoughts, tag them with labels, and list them back.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.processor = processor
    app.state.config = config

    # Last added = first to execute: RequestID wraps Logging.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(ping.router)
    app.include_router(thoughts.router)
    app.include_router(labels.router)
    app.include_router(thought_labels.router)

    # Mounted last so every API route takes precedence.
    static_dir = Path(config.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.debug("Static directory %s not found; static serving disabled", static_dir)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve `app` on settings.host:settings.port."""
    uvicorn.run(
        "scatterbrain.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
