"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from betterauth.api.v1.router import api_router
from betterauth.config import settings
from betterauth.core.exceptions import AppException
from betterauth.database import check_database_connection, engine
from betterauth.middleware.error_handler import (
    app_exception_handler,
    general_exception_handler,
    http_exception_handler,
    integrity_error_handler,
)
from betterauth.middleware.logging import LoggingMiddleware, configure_logging

# Configure logging
configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    logger.info("application_startup", environment=settings.environment, url=settings.url)

    if await check_database_connection():
        logger.info("database_connected")
    else:
        logger.error("database_connection_failed", host=settings.database_host)

    yield

    logger.info("application_shutdown")

    await engine.dispose()
    logger.info("database_connections_closed")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="User and OAuth account storage service",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(LoggingMiddleware)

app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(IntegrityError, integrity_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """
    Root endpoint.

    Returns:
        Welcome message
    """
    return {
        "message": f"Hello from {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
    }


# uvicorn names its levels differently
_UVICORN_LEVELS = {
    "off": "critical",
    "trace": "trace",
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "error": "error",
}


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    logger.info("listening", url=settings.url)
    uvicorn.run(
        "betterauth.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=_UVICORN_LEVELS[settings.log_level],
    )


if __name__ == "__main__":
    run()
