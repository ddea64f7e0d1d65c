"""Mapping of service errors to RFC 7807 API errors."""

from __future__ import annotations

import pytest

from blog.core import errors as api_errors
from blog.services._shared.base import BaseService
from blog.services._shared.errors import (
    ConflictError,
    DuplicateEmailError,
    ForbiddenError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc, status, code",
    [
        (NotFoundError("Article", 1), 404, "not_found"),
        (ForbiddenError(), 403, "forbidden"),
        (ConflictError("User", "taken"), 409, "conflict"),
        (ValidationError("title", "title must not be empty"), 400, "validation_error"),
        (DuplicateEmailError("a@example.com"), 400, "duplicate_email"),
        (InvalidTokenError("expired"), 400, "invalid_token"),
    ],
)
def test_translate_exceptions(exc, status, code):
    translated = BaseService.translate_exceptions(exc)

    assert isinstance(translated, api_errors.APIError)
    assert translated.status_code == status
    assert translated.code == code


def test_non_service_errors_pass_through():
    exc = KeyError("x")
    assert BaseService.translate_exceptions(exc) is exc


def test_service_error_messages():
    assert str(NotFoundError("Article", 7)) == "Article not found: 7"
    assert InvalidTokenError("bad_signature").details == {"reason": "bad_signature"}
