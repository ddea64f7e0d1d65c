"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic**: they never depend on Flask or
HTTP. Each carries a stable machine-readable ``code`` plus a human message;
the translation to RFC 7807 responses happens in
``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name in the driver message. SQLite only
    names the columns (``UNIQUE constraint failed: users.email``), so callers
    should pass the constraint name and treat a ``False`` result as "some
    other integrity problem".

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Database constraint name, e.g. ``uq_users_email``.
    :returns: ``True`` if the error message mentions the constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


def is_unique_violation(exc: IntegrityError) -> bool:
    """Return ``True`` when ``exc`` is a uniqueness failure on any backend."""
    message = str(exc.orig).lower() if exc.orig else ""
    sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    return sqlstate == "23505" or "unique" in message or "duplicate" in message


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``code`` is stable and safe to expose to clients; ``details`` holds
      optional structured context.
    """

    code: str = "bad_request"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# --------------------------------------------------------------------------- #
# Generic errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Raised when input is malformed or a required field is empty."""

    code = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, details={"errors": {field: [message]}})
        self.field = field


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Article").
    :param key: Identifier or search key.
    """

    entity: str
    key: str | int
    code = "not_found"

    def __post_init__(self) -> None:
        ServiceError.__init__(self, str(self))

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :param detail: Short human-readable explanation.
    """

    entity: str
    detail: str
    code = "conflict"

    def __post_init__(self) -> None:
        ServiceError.__init__(self, str(self))

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class ForbiddenError(ServiceError):
    """Raised when the actor is authenticated but does not own the resource."""

    code = "forbidden"

    def __init__(self, message: str = "You do not have access to this resource") -> None:
        super().__init__(message)


# --------------------------------------------------------------------------- #
# Authentication errors
# --------------------------------------------------------------------------- #


class DuplicateEmailError(ServiceError):
    code = "duplicate_email"

    def __init__(self, email: str) -> None:
        super().__init__("Email is already registered")
        self.email = email


class UserNotFoundError(ServiceError):
    code = "user_not_found"

    def __init__(self, email: str) -> None:
        super().__init__("No account exists for this email")
        self.email = email


class InvalidPasswordError(ServiceError):
    code = "invalid_password"

    def __init__(self) -> None:
        super().__init__("Password does not match")


class MissingTokenError(ServiceError):
    code = "missing_token"

    def __init__(self) -> None:
        super().__init__("An access token is required")


class InvalidTokenError(ServiceError):
    """
    Raised when a presented token fails verification.

    :param reason: Codec failure kind: ``expired``, ``malformed`` or
        ``bad_signature``. Exposed in ``details`` so clients can tell an
        expired token from a forged one.
    """

    code = "invalid_token"

    def __init__(self, reason: str) -> None:
        super().__init__("Token is invalid or expired", details={"reason": reason})
        self.reason = reason


class UnknownRefreshTokenError(ServiceError):
    """Raised when a refresh token is not (or no longer) in the store."""

    code = "unknown_refresh_token"

    def __init__(self) -> None:
        super().__init__("Refresh token is unknown, expired or already used")
