"""FastAPI application factory wired with the shared error handling."""

from __future__ import annotations

import time
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from loguru import logger

from porest_core.api import api_router
from porest_core.api.exception_handlers import (
    GlobalExceptionHandler,
    install_exception_handlers,
)
from porest_core.core.config import settings
from porest_core.core.logging import setup_logging


async def request_logging_middleware(request: Request, call_next: Any) -> Response:
    """Log inbound requests with unique id and duration.

    Args:
        request: Incoming HTTP request.
        call_next: FastAPI middleware continuation callable.

    Returns:
        Response produced by downstream middleware/route handlers.

    Raises:
        Exception: Re-raises downstream exceptions after logging context.
    """
    request_id = request.headers.get("x-request-id") or str(uuid4())
    request.state.request_id = request_id
    started_at = time.perf_counter()
    log = logger.bind(
        request_id=request_id, method=request.method, path=request.url.path
    )

    log.info("Request started")

    try:
        response = await call_next(request)
    except Exception as exc:
        duration_ms = round((time.perf_counter() - started_at) * 1000, 2)
        log.error("Request failed", duration_ms=duration_ms, error=str(exc))
        raise

    duration_ms = round((time.perf_counter() - started_at) * 1000, 2)
    response.headers["X-Request-ID"] = request_id
    log.bind(status_code=response.status_code).info(
        "Request completed", duration_ms=duration_ms
    )
    return response


def create_app(exception_handler: GlobalExceptionHandler | None = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Args:
        exception_handler: Dispatcher to install; built from settings when omitted.

    Returns:
        Configured FastAPI application instance.
    """
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    )

    app.middleware("http")(request_logging_middleware)

    if settings.CORS_ORIGINS:
        allow_credentials = "*" not in settings.CORS_ORIGINS
        if not allow_credentials:
            logger.warning(
                "CORS_ORIGINS contains wildcard '*'; disabling credentialed CORS for security"
            )

        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=allow_credentials,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )

    install_exception_handlers(app, exception_handler)
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    logger.info(
        "Application configured",
        environment=settings.ENVIRONMENT,
        api_prefix=settings.API_V1_PREFIX,
        default_locale=settings.DEFAULT_LOCALE,
    )
    return app
