"""Database models."""

from betterauth.models.base import metadata
from betterauth.models.oauth_accounts import oauth_accounts
from betterauth.models.users import users

__all__ = [
    "metadata",
    "oauth_accounts",
    "users",
]
