"""Logging middleware and configuration."""

import logging
import sys
import time
from collections.abc import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from structlog.typing import Processor

from betterauth.config import Settings, settings

# Python logging has no TRACE level, it collapses into DEBUG
_LEVELS = {
    "off": logging.CRITICAL + 10,
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Loggers whose level configure_logging set
_configured_loggers: set[str] = set()


def resolve_level(name: str) -> int:
    """Translate a configured level name into a ``logging`` level."""
    return _LEVELS[name.lower()]


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    if log_format == "pretty":
        return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(config: Settings | None = None) -> None:
    """Configure structured logging."""
    config = config or settings
    level = resolve_level(config.log_level)

    shared_processors: list[Processor] = [structlog.contextvars.merge_contextvars]
    if config.log_format != "compact":
        shared_processors.append(structlog.stdlib.add_logger_name)
    shared_processors += [
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]
    if config.log_format != "compact":
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso"))
    shared_processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    processors = shared_processors + [_renderer(config.log_format)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.WARNING,
        force=True,
    )

    # Levels from an earlier call would otherwise outlive a changed module list
    while _configured_loggers:
        logging.getLogger(_configured_loggers.pop()).setLevel(logging.NOTSET)

    # Named modules get the level explicitly, otherwise only our own package does
    for name in config.log_modules or ["betterauth"]:
        logging.getLogger(name).setLevel(level)
        _configured_loggers.add(name)

    logging.disable(logging.CRITICAL if config.log_level == "off" else logging.NOTSET)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """
        Log request and response details.

        Args:
            request: Request object
            call_next: Next middleware in chain

        Returns:
            Response object
        """
        logger = structlog.get_logger("betterauth.http")

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            method=request.method,
            path=request.url.path,
            version=request.scope.get("http_version"),
            source=request.client.host if request.client else "<unknown>",
        )

        start_time = time.perf_counter()
        logger.info("request_started")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                error=str(e),
                latency_us=int((time.perf_counter() - start_time) * 1_000_000),
            )
            raise

        duration = time.perf_counter() - start_time

        logger.info(
            "request_completed",
            status_code=response.status_code,
            latency_us=int(duration * 1_000_000),
        )

        # Add duration header
        response.headers["X-Process-Time"] = str(duration)

        return response
