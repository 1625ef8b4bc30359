"""Alembic migration environment."""

from logging.config import fileConfig

from sqlalchemy.engine import Connection

from alembic import context
from betterauth.config import settings
from betterauth.database import build_sync_engine
from betterauth.models import metadata

config = context.config

# Programmatic callers keep their own (structlog) logging setup
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name)

target_metadata = metadata


def get_url() -> str:
    """Database URL from alembic.ini, falling back to application settings."""
    return config.get_main_option("sqlalchemy.url") or settings.sync_database_url


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Emits SQL to the configured output instead of executing it.
    """
    context.configure(
        url=get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """Run migrations on an open connection."""
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Run migrations in 'online' mode.

    Reuses a connection passed through ``config.attributes`` when present.
    """
    connection = config.attributes.get("connection")
    if connection is not None:
        do_run_migrations(connection)
        return

    connectable = build_sync_engine(get_url())
    with connectable.connect() as connection:
        do_run_migrations(connection)
    connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
