"""User model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    Column,
    Index,
    String,
    Table,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from betterauth.models.base import metadata

users = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True, server_default=text("gen_random_uuid()")),
    Column("email", String(255), nullable=False),
    # Absent for accounts that only sign in through an OAuth provider
    Column("password_hash", String(255), nullable=True),
    Column("name", String(255), nullable=True),
    Column("email_verified", Boolean, nullable=True, server_default=text("false")),
    # Audit
    Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
    Index("idx_users_email", "email", unique=True),
)
