"""Application configuration."""

import os
from functools import lru_cache

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

from betterauth import __version__
from betterauth.core.exceptions import ConfigError

DEVELOPMENT = "development"
PRODUCTION = "production"
TESTING = "testing"

_ENVIRONMENT_ALIASES = {
    "dev": DEVELOPMENT,
    "development": DEVELOPMENT,
    "prod": PRODUCTION,
    "production": PRODUCTION,
    "test": TESTING,
    "testing": TESTING,
}

LOG_LEVELS = ("off", "trace", "debug", "info", "warn", "error")
LOG_FORMATS = ("compact", "full", "json", "pretty")


def normalize_environment(value: str) -> str:
    """
    Resolve an environment name.

    Known names and their short forms map to ``development``, ``production``
    or ``testing``. Anything else is kept (lowercased) as a custom name such
    as ``staging``.
    """
    name = value.strip().lower()
    if not name:
        return DEVELOPMENT
    return _ENVIRONMENT_ALIASES.get(name, name)


def current_environment() -> str:
    """Detect the active environment from ``APP_ENVIRONMENT`` or ``APP_ENV``."""
    value = os.environ.get("APP_ENVIRONMENT") or os.environ.get("APP_ENV") or DEVELOPMENT
    return normalize_environment(value)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    # Application
    app_name: str = Field(default="betterauth", alias="APP_NAME")
    app_version: str = Field(default=__version__, alias="APP_VERSION")
    environment: str = Field(
        default=DEVELOPMENT,
        validation_alias=AliasChoices("APP_ENVIRONMENT", "APP_ENV"),
    )
    debug: bool = Field(default=False, alias="DEBUG")
    api_v1_prefix: str = Field(default="/api/v1", alias="API_V1_PREFIX")

    # Server
    protocol: str = Field(default="http", alias="PROTOCOL")
    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    reload: bool = Field(default=False, alias="RELOAD")

    # Database: a full URL wins over the individual parts
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    database_protocol: str = Field(default="postgresql", alias="DATABASE_PROTOCOL")
    database_user: str = Field(default="postgres", alias="DATABASE_USER")
    database_password: str = Field(default="postgres", alias="DATABASE_PASSWORD")
    database_host: str = Field(default="localhost", alias="DATABASE_HOST")
    database_port: int = Field(default=5432, alias="DATABASE_PORT")
    database_name: str = Field(default="betterauth", alias="DATABASE_NAME")
    database_pool_size: int = Field(default=10, alias="DATABASE_POOL_SIZE")
    database_max_overflow: int = Field(default=20, alias="DATABASE_MAX_OVERFLOW")

    # Logging
    log_level: str = Field(default="info", alias="LOG_LEVEL")
    log_format: str = Field(default="pretty", alias="LOG_FORMAT")
    log_modules_str: str = Field(default="", alias="LOG_MODULES")

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: str) -> str:
        return normalize_environment(value)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level == "warning":
            level = "warn"
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        fmt = value.strip().lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"log format must be one of {', '.join(LOG_FORMATS)}")
        return fmt

    @property
    def log_modules(self) -> list[str]:
        """Get logger names that receive the configured level explicitly."""
        return [name.strip() for name in self.log_modules_str.split(",") if name.strip()]

    @property
    def url(self) -> str:
        """Public base URL of the HTTP server."""
        return f"{self.protocol}://{self.host}:{self.port}"

    @property
    def address(self) -> str:
        """Bind address of the HTTP server."""
        return f"{self.host}:{self.port}"

    @property
    def database_dsn(self) -> str:
        """Database URL, built from the individual parts when no URL is set."""
        if self.database_url:
            return self.database_url
        return URL.create(
            drivername=self.database_protocol,
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        ).render_as_string(hide_password=False)

    @property
    def sync_database_url(self) -> str:
        """Database URL using the psycopg2 driver (migrations)."""
        url = make_url(self.database_dsn).set(drivername="postgresql+psycopg2")
        return url.render_as_string(hide_password=False)

    @property
    def async_database_url(self) -> str:
        """Database URL using the asyncpg driver (application)."""
        url = make_url(self.database_dsn).set(drivername="postgresql+asyncpg")
        return url.render_as_string(hide_password=False)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == TESTING


def load_settings(environment: str | None = None) -> Settings:
    """
    Load settings for an environment.

    Reads ``.env`` and then ``.env.<environment>``, the latter taking
    precedence. Process environment variables override both files.

    Raises:
        ConfigError: If a value fails validation
    """
    env = normalize_environment(environment) if environment else current_environment()
    try:
        return Settings(  # type: ignore[call-arg]
            APP_ENVIRONMENT=env,
            _env_file=(".env", f".env.{env}"),
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration for environment '{env}': {e}") from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()


# Global settings instance
settings = get_settings()
