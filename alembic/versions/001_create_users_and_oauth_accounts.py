"""Create users and oauth_accounts tables

Revision ID: 001
Revises:
Create Date: 2025-11-19 13:47:18.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# gen_random_uuid() is built in from PostgreSQL 13, before that it lives in pgcrypto
ENABLE_PGCRYPTO_BEFORE_PG13 = """
DO $$
BEGIN
    IF CAST(current_setting('server_version_num') AS integer) < 130000 THEN
        CREATE EXTENSION IF NOT EXISTS "pgcrypto";
    END IF;
END
$$
"""


def upgrade() -> None:
    """Create users and oauth_accounts tables."""
    op.execute(ENABLE_PGCRYPTO_BEFORE_PG13)

    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email_verified", sa.Boolean(), server_default=sa.text("false"), nullable=True),
        sa.Column("created_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_users_email", "users", ["email"], unique=True)

    op.create_table(
        "oauth_accounts",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("provider_user_id", sa.String(255), nullable=False),
        sa.Column("access_token", sa.Text(), nullable=True),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("expires_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("created_at", postgresql.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="oauth_accounts_user_id_fkey",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "provider",
            "provider_user_id",
            name="oauth_accounts_provider_provider_user_id_key",
        ),
    )

    op.create_index("idx_oauth_accounts_user_id", "oauth_accounts", ["user_id"])


def downgrade() -> None:
    """Drop users and oauth_accounts tables, tolerating missing objects."""
    op.drop_index("idx_users_email", table_name="users", if_exists=True)
    op.drop_index("idx_oauth_accounts_user_id", table_name="oauth_accounts", if_exists=True)

    # oauth_accounts references users, so it goes first
    op.drop_table("oauth_accounts", if_exists=True)
    op.drop_table("users", if_exists=True)
