"""Tests for engine construction."""

from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool

from betterauth.config import settings
from betterauth.database import build_sync_engine


def test_sync_engine_uses_given_url_without_pooling():
    """Test migration engines connect through psycopg2 and hold no pool."""
    engine = build_sync_engine("postgresql+psycopg2://app:secret@pg:6543/accounts")
    try:
        assert engine.url.drivername == "postgresql+psycopg2"
        assert engine.url.database == "accounts"
        assert isinstance(engine.pool, NullPool)
    finally:
        engine.dispose()


def test_sync_engine_defaults_to_configured_database():
    """Test the configured database is used when no URL is passed."""
    engine = build_sync_engine()
    try:
        assert engine.url == make_url(settings.sync_database_url)
    finally:
        engine.dispose()
