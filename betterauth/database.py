"""Database configuration and connection management."""

from sqlalchemy import create_engine, pool, text
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from betterauth.config import Settings, settings


def build_async_engine(config: Settings) -> AsyncEngine:
    """Create the pooled async engine used by the application."""
    return create_async_engine(
        config.async_database_url,
        echo=config.debug,
        pool_pre_ping=True,
        pool_size=config.database_pool_size,
        max_overflow=config.database_max_overflow,
        pool_recycle=3600,
        connect_args={
            "server_settings": {
                "application_name": config.app_name,
            },
        },
    )


def build_sync_engine(database_url: str | None = None) -> Engine:
    """Create the unpooled sync engine used for migrations."""
    return create_engine(database_url or settings.sync_database_url, poolclass=pool.NullPool)


# Create async engine with connection pooling
engine: AsyncEngine = build_async_engine(settings)


async def check_database_connection() -> bool:
    """Check if database connection is healthy."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
