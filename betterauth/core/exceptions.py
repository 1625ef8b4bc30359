"""Custom application exceptions."""

from sqlalchemy.exc import IntegrityError

# PostgreSQL SQLSTATE codes for integrity constraint violations
NOT_NULL_VIOLATION = "23502"
FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"

USERS_EMAIL_INDEX = "idx_users_email"
OAUTH_ACCOUNTS_USER_FK = "oauth_accounts_user_id_fkey"
OAUTH_ACCOUNTS_PROVIDER_UNIQUE = "oauth_accounts_provider_provider_user_id_key"


class ConfigError(Exception):
    """Invalid or unreadable configuration."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class ConflictException(AppException):
    """Conflict exception."""

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class DuplicateEmailException(ConflictException):
    """A user with this email already exists."""

    def __init__(self, message: str = "Email is already registered"):
        super().__init__(message)


class DuplicateOAuthAccountException(ConflictException):
    """The provider account is already linked to a user."""

    def __init__(self, message: str = "Provider account is already linked"):
        super().__init__(message)


class UnknownUserException(NotFoundException):
    """An OAuth account references a user that does not exist."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class MissingFieldException(BadRequestException):
    """A required column was left empty."""

    def __init__(self, message: str = "Required field is missing"):
        super().__init__(message)


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is None and orig is not None:
        # asyncpg keeps the driver error as the cause of the adapted one
        code = getattr(orig.__cause__, "sqlstate", None)
    return code


def _constraint_name(exc: IntegrityError) -> str | None:
    orig = exc.orig
    diag = getattr(orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name is None and orig is not None:
        name = getattr(orig.__cause__, "constraint_name", None)
    if name is None:
        text = str(orig)
        for known in (USERS_EMAIL_INDEX, OAUTH_ACCOUNTS_USER_FK, OAUTH_ACCOUNTS_PROVIDER_UNIQUE):
            if known in text:
                return known
    return name


def classify_integrity_error(exc: IntegrityError) -> AppException:
    """
    Map a database integrity error onto an application exception.

    Args:
        exc: Integrity error raised by SQLAlchemy

    Returns:
        The matching application exception, or a generic conflict
    """
    code = _sqlstate(exc)
    constraint = _constraint_name(exc)

    if constraint == USERS_EMAIL_INDEX:
        return DuplicateEmailException()
    if constraint == OAUTH_ACCOUNTS_PROVIDER_UNIQUE:
        return DuplicateOAuthAccountException()
    if constraint == OAUTH_ACCOUNTS_USER_FK or code == FOREIGN_KEY_VIOLATION:
        return UnknownUserException()
    if code == NOT_NULL_VIOLATION:
        column = getattr(getattr(exc.orig, "diag", None), "column_name", None)
        if column is None and exc.orig is not None:
            column = getattr(exc.orig.__cause__, "column_name", None)
        if column:
            return MissingFieldException(f"Field '{column}' is required")
        return MissingFieldException()
    if code == UNIQUE_VIOLATION:
        return ConflictException("Value already exists")
    return ConflictException("Request conflicts with existing data")
