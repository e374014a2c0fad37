"""
Logo Designer Backend — FastAPI Application Factory
=====================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn logo_api.main:app`) and by the tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────────┐ ┌────────┐ ┌──────────────┐ ┌─────────┐  │
    │  │ Rate Limit │→│ Req ID │→│ Localization │→│ Logging │  │
    │  └────────────┘ └────────┘ └──────────────┘ └─────────┘  │
    │                                                          │
    │  Routes:                                                 │
    │  ┌───────────────────────────────┐ ┌──────────────────┐  │
    │  │ GET /api/logo/.../mobile[...] │ │ GET /health      │  │
    │  └───────────────────────────────┘ └──────────────────┘  │
    │                                                          │
    │  Exception Handlers (all → localized failure envelope):  │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ RateLimit→429 │ 500 │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from logo_api import __version__
from logo_api.config import settings
from logo_api.database import dispose_engine
from logo_api.exceptions import LogoAPIError, RateLimitExceededError
from logo_api.middleware.localization import LocalizationMiddleware, request_language
from logo_api.middleware.logging import RequestLoggingMiddleware
from logo_api.middleware.rate_limit import RateLimitMiddleware
from logo_api.middleware.request_id import RequestIDMiddleware, request_id_var
from logo_api.routes import health, logos
from logo_api.schemas.envelope import failure

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole process.

    Called once from the lifespan. Everything goes to stdout, where the
    container runtime collects it.

    Format: 2025-10-15T21:03:00 [INFO] logo_api.access: GET /api/logo/... 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every statement / connection at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncpg").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Logo Designer mobile API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving: health checks and error responses still work
        logger.error("Configuration error: %s", str(e))

    logger.info("Default language: %s", settings.default_language)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Logo Designer mobile API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _failure_response(
    request: Request,
    status_code: int,
    message_key: str,
    context=None,
    headers=None,
    **params,
) -> JSONResponse:
    lang = request_language(request)
    details = context if settings.expose_error_details and context else None
    body = failure(lang, message_key, details=details, **params)
    response_headers = {"Content-Language": lang}
    response_headers.update(headers or {})
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=response_headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Turn every error into the localized failure envelope.

    Handler hierarchy:
        RateLimitExceededError  → 429 with Retry-After
        LogoAPIError subclasses → their own status_code (400 / 404 / 500)
        RequestValidationError  → 400 (FastAPI would answer 422)
        Exception (fallback)    → 500

    The envelope message is always looked up by key in the request language.
    Internal details (SQL, stack traces) are logged, never returned, unless
    EXPOSE_ERROR_DETAILS is on.
    """

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return _failure_response(
            request,
            exc.status_code,
            exc.message_key,
            context=exc.context,
            headers={"Retry-After": str(exc.retry_after)},
            retry_after=exc.retry_after,
        )

    @app.exception_handler(LogoAPIError)
    async def handle_logo_api_error(request: Request, exc: LogoAPIError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.warning("[%s] %s", rid, exc.message)
        return _failure_response(request, exc.status_code, exc.message_key, context=exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Request validation failed: %s", rid, exc.errors())
        return _failure_response(
            request,
            400,
            "validationError",
            context={"errors": [error.get("msg") for error in exc.errors()]},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _failure_response(
            request, 500, "serverError", context={"error": type(exc).__name__}
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware executes in REVERSE order of addition, so the last one added
    (rate limiting) sees the request first.
    """
    app = FastAPI(
        title="Logo Designer Mobile API",
        description=(
            "Read path of the logo designer: assembles logos into nested mobile "
            "documents, in the canonical or the legacy wire format, localized "
            "to English or Arabic."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Content-Language", "Retry-After"],
    )
    # Documents with many layers compress well
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(LocalizationMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(RateLimitMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(logos.router)
    app.include_router(health.router)

    return app


# uvicorn expects `logo_api.main:app`
app = create_app()
