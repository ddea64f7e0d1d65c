"""Base class shared by application services."""

from __future__ import annotations

from http import HTTPStatus

from blog.core import errors as api_errors
from blog.services._shared.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from blog.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize the translation of service errors into API errors.
    * Offer shared validation and ownership helpers.

    Notes
    -----
    - Services never touch the global session directly; they always go
      through a Unit of Work.
    - Services return DTOs, never ORM instances, so nothing lazy-loads after
      the transaction has ended.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        ``NotFoundError`` → 404, ``ForbiddenError`` → 403, ``ConflictError``
        → 409; every other :class:`ServiceError` (validation and the
        authentication failures) → 400 with its own stable ``code``.

        :param exc: Exception raised within the service.
        :returns: Translated exception ready to be re-raised; anything that
            is not a :class:`ServiceError` is returned untouched.
        """
        if not isinstance(exc, ServiceError):
            return exc

        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc), code=exc.code)
        if isinstance(exc, ForbiddenError):
            return api_errors.Forbidden(str(exc), code=exc.code)
        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc), code=exc.code)
        if isinstance(exc, ValidationError):
            return api_errors.APIError(
                "Validation failed",
                status_code=HTTPStatus.BAD_REQUEST,
                code=exc.code,
                details=exc.details,
            )
        return api_errors.APIError(
            str(exc),
            status_code=HTTPStatus.BAD_REQUEST,
            code=exc.code,
            details=exc.details or None,
        )

    # ----------------------- Validation utilities ---------------------------

    @staticmethod
    def require_text(field: str, value: str | None) -> str:
        """
        Return ``value`` stripped, rejecting ``None`` and blank strings.

        :raises ValidationError: If the value is missing or blank.
        """
        text = (value or "").strip()
        if not text:
            raise ValidationError(field, f"{field} must not be empty")
        return text

    @staticmethod
    def ensure_owner(actor_id: int, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the current actor owns the resource.

        :raises ForbiddenError: If ``actor_id`` differs from ``owner_id``.
        """
        if actor_id != owner_id:
            raise ForbiddenError(msg or "You can only modify your own content")
