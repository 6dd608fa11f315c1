"""
ITR API: FastAPI Application Factory
====================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       the module-level `app` is what uvicorn serves (itr_api.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────────────────────┐ │
    │  │  Req ID  │→│ Logging  │→│ CORS                 │ │
    │  └──────────┘ └──────────┘ └──────────────────────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────────────────────────────┐ ┌─────────────┐  │
    │  │ /v1/create /v1/find/{id}      │ │ GET /health │  │
    │  │ /v1/update/{id} /v1/delete/.. │ └─────────────┘  │
    │  │ /v1/findall                   │                  │
    │  └───────────────────────────────┘                  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Persistence→500│  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Verify the database is reachable (startup fails if not)
    3. Create the employees table if missing (DB_CREATE_TABLES)

    Shutdown:
    1. Dispose the database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from itr_api import __version__
from itr_api.config import settings
from itr_api.database import create_tables, dispose_engine, verify_connection
from itr_api.exceptions import (
    ITRError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from itr_api.middleware.logging import RequestLoggingMiddleware
from itr_api.middleware.request_id import RequestIDMiddleware, request_id_var
from itr_api.routes import employees, health

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Accept", "Authorization", "Content-Type", "X-CSRF-Token", "X-Request-ID"]
CORS_EXPOSED_HEADERS = ["Link", "X-Request-ID"]


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = settings.log_level) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called by the entrypoint before uvicorn starts and again by the
    lifespan when the app is served by an external uvicorn command.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Replaced by our own access log; SQL is echoed only in DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level == "DEBUG" else logging.WARNING
    )


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: verify the database and create the table if needed.
    Shutdown: dispose the engine.

    Raising here aborts uvicorn's startup, so the process exits non-zero
    when the initial database connection fails.
    """
    setup_logging()
    logger.info("ITR API %s starting up...", __version__)

    try:
        await verify_connection()
    except Exception as e:
        logger.critical("Cannot connect to the database: %s", str(e))
        raise PersistenceError(
            message="Initial database connection failed",
            context={"error_type": type(e).__name__},
        ) from e
    logger.info("Database connection verified")

    if settings.db_create_tables:
        await create_tables()
        logger.info("Employee table ready")

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    logger.info("ITR API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def describe_request_errors(errors: List[dict]) -> str:
    """Flattens FastAPI/pydantic request errors into one readable sentence."""
    parts = []
    for err in errors:
        if err.get("type") == "json_invalid":
            detail = (err.get("ctx") or {}).get("error", "invalid JSON")
            return f"Error parsing JSON: {detail}"
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "Invalid request: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and `{"error": ...}` bodies.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (malformed JSON / body)
        NotFoundError           → 404 Not Found
        HTTPException           → its own status (unknown route, bad method)
        PersistenceError        → 500 Internal Server Error
        ITRError (base)         → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Internal details (driver messages, SQL, stack traces) are logged,
    never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", _request_id(request), exc.message)
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = describe_request_errors(exc.errors())
        logger.warning("[%s] Rejected request body: %s", _request_id(request), message)
        return _error(400, message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        logger.error(
            "[%s] Persistence error: %s | Context: %s",
            _request_id(request),
            exc.message,
            exc.context,
        )
        return _error(500, exc.message)

    @app.exception_handler(ITRError)
    async def handle_itr_error(request: Request, exc: ITRError):
        logger.error("[%s] %s | Context: %s", _request_id(request), exc.message, exc.context)
        return _error(500, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            _request_id(request),
            str(exc),
            exc_info=exc,
        )
        return _error(500, "An unexpected error occurred. Please try again later.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns a fresh instance on every call, so tests can build their own
    app and override dependencies without touching the module-level one.
    """
    app = FastAPI(
        title="ITR API",
        description="CRUD API over employee income-tax-return records.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        expose_headers=CORS_EXPOSED_HEADERS,
        max_age=settings.cors_max_age,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(employees.router)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
