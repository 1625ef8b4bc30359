"""Schema migration commands built on Alembic."""

import io
from pathlib import Path

import structlog

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from betterauth.config import settings
from betterauth.database import build_sync_engine

logger = structlog.get_logger()

PROJECT_ROOT = Path(__file__).resolve().parent.parent
ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"
SCRIPT_LOCATION = PROJECT_ROOT / "alembic"


def alembic_config(
    database_url: str | None = None,
    output_buffer: io.StringIO | None = None,
) -> Config:
    """
    Build an Alembic config for this project.

    Args:
        database_url: Sync database URL, defaults to the configured one
        output_buffer: Destination for SQL emitted in offline mode

    Returns:
        Alembic configuration
    """
    cfg = Config(str(ALEMBIC_INI), output_buffer=output_buffer)
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    url = database_url or settings.sync_database_url
    # ConfigParser interpolation treats % as special
    cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    cfg.attributes["configure_logger"] = False
    return cfg


def upgrade(revision: str = "head", database_url: str | None = None) -> None:
    """Apply migrations up to ``revision``."""
    logger.info("migration_upgrade_started", revision=revision)
    command.upgrade(alembic_config(database_url), revision)
    logger.info("migration_upgrade_completed", revision=revision)


def downgrade(revision: str = "base", database_url: str | None = None) -> None:
    """Revert migrations down to ``revision``."""
    logger.info("migration_downgrade_started", revision=revision)
    command.downgrade(alembic_config(database_url), revision)
    logger.info("migration_downgrade_completed", revision=revision)


def current(database_url: str | None = None) -> str | None:
    """Get the revision the database is currently at, or None if unversioned."""
    engine = build_sync_engine(database_url)
    try:
        with engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()
    finally:
        engine.dispose()


def create(message: str) -> None:
    """Autogenerate a new revision from the model metadata."""
    logger.info("migration_create_started", message=message)
    command.revision(alembic_config(), message=message, autogenerate=True)


def render_sql(revision: str = "head", downgrade_to: str | None = None) -> str:
    """
    Render migration SQL without a database connection.

    Args:
        revision: Target revision for an upgrade
        downgrade_to: When set, render the downgrade from ``revision`` to this one

    Returns:
        The SQL script
    """
    buffer = io.StringIO()
    # Offline mode only needs the dialect, not a reachable server
    cfg = alembic_config("postgresql+psycopg2://localhost/betterauth", output_buffer=buffer)
    if downgrade_to is None:
        command.upgrade(cfg, revision, sql=True)
    else:
        command.downgrade(cfg, f"{revision}:{downgrade_to}", sql=True)
    return buffer.getvalue()
