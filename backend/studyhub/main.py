"""
StudyHub FastAPI Application Entry Point.

Run with: uvicorn studyhub.main:app --reload
      or: python -m studyhub
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from studyhub import __version__
from studyhub.api.middleware import RequestLoggingMiddleware
from studyhub.api.responses import error_response
from studyhub.api.routes import auth, doubts, notes, system, timetable
from studyhub.config import AuthMode, get_settings, sanitize_error
from studyhub.db.session import dispose_engine, init_models
from studyhub.exceptions import AuthenticationError, StudyHubError

logger = logging.getLogger(__name__)

settings = get_settings()


def setup_logging() -> None:
    """Configure root logging once, at startup."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # Request logging middleware covers access logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown."""
    # Startup
    setup_logging()

    # Misconfiguration is fatal: let the exception stop the server
    settings.validate_required()

    if settings.auth_mode is AuthMode.BYPASS:
        logger.warning("Authentication is DISABLED (DISABLE_AUTH=true); every request is trusted")
    elif not settings.jwt_secret:
        logger.warning("JWT_SECRET not set; authenticated routes will answer 500")

    await init_models()
    logger.info(
        "%s %s ready [%s], CORS origins: %s",
        settings.app_name,
        __version__,
        settings.environment,
        ", ".join(settings.allowed_origins),
    )
    yield
    # Shutdown
    await dispose_engine()
    logger.info("Shutdown complete")


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as {"success": false, "message": ...}."""

    @app.exception_handler(StudyHubError)
    async def handle_app_error(request: Request, exc: StudyHubError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s %s", type(exc).__name__, request.method, request.url.path, exc.message, exc.context)
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return error_response(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if not errors:
            return error_response(400, "Invalid request")
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Routes raise StudyHubError, so a bare 404 here means no route matched
        if exc.status_code == 404:
            return error_response(404, "API endpoint not found")
        return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return error_response(500, sanitize_error(exc))


def create_app() -> FastAPI:
    """Build the application: middleware, exception handlers, routers."""
    app = FastAPI(
        title=settings.app_name,
        description="Student productivity API: notes, doubts and timetable",
        version=__version__,
        lifespan=lifespan,
    )

    # Added first so CORS wraps it and error envelopes carry CORS headers
    app.add_middleware(RequestLoggingMiddleware)
    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(system.router)
    app.include_router(auth.router)
    app.include_router(notes.router)
    app.include_router(doubts.router)
    app.include_router(timetable.router)

    return app


app = create_app()
