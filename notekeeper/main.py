"""
Notekeeper Backend - FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn notekeeper.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐         │
    │  │  Req ID  │→│ Logging │→│ GZip │→│ CORS │         │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘         │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────┐ ┌──────────────┐ ┌─────────┐  │
    │  │ /api/register    │ │ /api/notes   │ │ /health │  │
    │  │ /api/login       │ │ /api/notes/id│ │         │  │
    │  └──────────────────┘ └──────────────┘ └─────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Auth→401 │ NotFound→404 │ 500 │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate configuration, log bind address
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional, Type

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notekeeper import __version__
from notekeeper.config import settings
from notekeeper.database import dispose_engine
from notekeeper.exceptions import (
    AuthenticationError,
    DatabaseError,
    DuplicateUserError,
    NotekeeperError,
    NotFoundError,
    ValidationError,
)
from notekeeper.middleware.logging import RequestLoggingMiddleware
from notekeeper.middleware.request_id import RequestIDMiddleware, request_id_var
from notekeeper.routes import auth, health, notes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Notekeeper Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving /health; authenticated routes will fail until fixed
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Notekeeper Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

# Looked up along the exception's MRO, so subclasses inherit their parent's code
STATUS_CODES: Dict[Type[NotekeeperError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    DuplicateUserError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DatabaseError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: NotekeeperError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    status_code: int,
    message: str,
    code: str,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build the `{"error", "code", "request_id"}` body shared by every failure."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "code": code, "request_id": request_id_var.get("")},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler mapping:
        ValidationError, DuplicateUserError → 400
        AuthenticationError                 → 401 (+ WWW-Authenticate: Bearer)
        NotFoundError                       → 404
        DatabaseError                       → 500, generic message
        RequestValidationError (FastAPI)    → 400
        Exception (fallback)                → 500, generic message

    Exception handlers never expose context dicts or stack traces; those
    go to the server log only.
    """

    @app.exception_handler(NotekeeperError)
    async def handle_app_error(request: Request, exc: NotekeeperError):
        rid = request_id_var.get("")
        status_code = status_code_for(exc)

        if status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            return error_response(
                status_code,
                "An internal error occurred. Please try again later.",
                exc.code,
            )

        logger.warning("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}
        return error_response(status_code, exc.message, exc.code, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Malformed JSON bodies and path parameters answer 400 like other bad input."""
        rid = request_id_var.get("")
        errors = exc.errors()
        message = "Invalid request"
        if any(tuple(err.get("loc", ()))[:2] == ("path", "note_id") for err in errors):
            message = "Invalid note ID format"
        elif errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            detail = first.get("msg", "invalid value")
            message = f"Invalid request: {location}: {detail}" if location else f"Invalid request: {detail}"
        logger.warning("[%s] Request validation failed: %s", rid, message)
        return error_response(status.HTTP_400_BAD_REQUEST, message, ValidationError.code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unknown routes and wrong methods use the same error envelope."""
        return error_response(
            exc.status_code,
            str(exc.detail),
            "http_error",
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An unexpected error occurred. Please try again later.",
            "internal_server_error",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Notekeeper API",
        description=(
            "Personal notes backend. Register or log in to obtain a session token, "
            "then manage your notes with `Authorization: Bearer <token>`."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()
