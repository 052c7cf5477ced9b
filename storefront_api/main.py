# storefront_api/main.py
"""
Entry point for the storefront HTTP API.

This module creates the FastAPI application, wires up middleware and error
handlers, and mounts the route groups under ``API_PREFIX``.

Intended usage:
    uvicorn storefront_api.main:create_app --factory --host 0.0.0.0 --port 3001
"""

from __future__ import annotations

import time
import traceback
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront_api import __version__
from storefront_api.config import Settings, get_settings
from storefront_api.container import Container, build_container
from storefront_api.db import Base, check_connection
from storefront_api.errors import DomainError
from storefront_api.logging import get_logger
from storefront_api.logging.config import configure_logging
from storefront_api.routers import admin, auth, health, newsletter, orders, public
from storefront_api.schemas.common import ErrorEnvelope

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Error bodies
# ---------------------------------------------------------------------------


def _error_response(
    status_code: int,
    message: str,
    *,
    errors: Optional[Dict[str, List[str]]] = None,
    stack: Optional[str] = None,
) -> JSONResponse:
    body = ErrorEnvelope(message=message, errors=errors, stack=stack)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _field_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    """
    Group pydantic errors by field path, dropping the leading ``body`` /
    ``query`` location.
    """
    grouped: Dict[str, List[str]] = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header", "cookie"):
            loc = loc[1:]
        field = ".".join(loc) or "body"
        grouped.setdefault(field, []).append(str(err.get("msg", "Invalid value")))
    return grouped


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def _domain_error(request: Request, exc: DomainError) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "request_failed",
            method=request.method,
            path=request.url.path,
            status_code=exc.status_code,
            error=exc.message,
        )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = _field_errors(exc)
        logger.info("request_invalid", method=request.method, path=request.url.path, fields=sorted(errors))
        return _error_response(400, "Validation error", errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _error_response(404, f"Not found — {request.url.path}")
        return _error_response(exc.status_code, str(exc.detail))


def unhandled_error_response(exc: Exception, settings: Settings) -> JSONResponse:
    stack = None
    if not settings.is_production:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return _error_response(500, "Internal server error", stack=stack)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    1. Startup: check the database (fail fast), optionally create tables.
    2. Shutdown: close the notifier client and the connection pool.
    """
    container: Container = app.state.container
    settings: Settings = container.settings()
    logger.info("app_startup", env=settings.APP_ENV.value, api_prefix=settings.API_PREFIX)

    engine = container.engine()
    check_connection(engine)
    logger.info("database_connected")

    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(engine)
        logger.info("database_tables_created")

    yield

    logger.info("app_shutdown")
    container.notifier().close()
    engine.dispose()


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    ``settings`` defaults to the environment-backed global settings, which
    raises ``ConfigurationError`` when required values are missing.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    docs_enabled = not settings.is_production
    app = FastAPI(
        title="Storefront API",
        version=__version__,
        lifespan=lifespan,
        openapi_url="/openapi.json" if docs_enabled else None,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
    )
    app.state.container = build_container(settings)

    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("unhandled_error", method=request.method, path=request.url.path)
            response = unhandled_error_response(exc, settings)
        duration_ms = round((time.perf_counter() - start) * 1000, 1)
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response

    # Added last so it wraps everything, error responses included.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    for module in (auth, public, orders, admin, newsletter):
        app.include_router(module.router, prefix=settings.API_PREFIX)

    return app


# ---------------------------------------------------------------------------
# Local development entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "storefront_api.main:create_app",
        host=_settings.HOST,
        port=_settings.PORT,
        factory=True,
        reload=not _settings.is_production,
    )
