"""OAuth account model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from betterauth.models.base import metadata

oauth_accounts = Table(
    "oauth_accounts",
    metadata,
    Column(
        "id",
        UUID(as_uuid=True),
        primary_key=True,
        server_default=text("gen_random_uuid()"),
    ),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE", name="oauth_accounts_user_id_fkey"),
        nullable=False,
    ),
    # Provider name, e.g. "google" or "github"
    Column("provider", String(50), nullable=False),
    Column("provider_user_id", String(255), nullable=False),
    Column("access_token", Text, nullable=True),
    Column("refresh_token", Text, nullable=True),
    # NULL when the provider did not report an expiry
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    UniqueConstraint(
        "provider",
        "provider_user_id",
        name="oauth_accounts_provider_provider_user_id_key",
    ),
    Index("idx_oauth_accounts_user_id", "user_id"),
)
