"""Endpoints on the authenticated account."""

from __future__ import annotations

import logging

from flask import Blueprint

from blog.api.deps import (
    bearer_token,
    current_email,
    json_response,
    load_json,
    require_auth,
    timing,
    translate_service_errors,
)
from blog.schemas import BookmarkedArticleSchema, UserSchema, WithdrawSchema
from blog.services.auth import LogoutIn
from blog.services.identity import WithdrawIn
from blog.wiring import get_components

log = logging.getLogger(__name__)

bp = Blueprint("users", __name__)

user_schema = UserSchema()
withdraw_schema = WithdrawSchema()
bookmarked_schema = BookmarkedArticleSchema(many=True)


@bp.get("/me")
@require_auth
@timing
@translate_service_errors
def me():
    """Return the authenticated account."""

    user = get_components().identity.get_by_email(current_email())
    return json_response(user_schema.dump(user))


@bp.get("/me/bookmarks")
@require_auth
@timing
@translate_service_errors
def my_bookmarks():
    """Articles bookmarked by the caller, most recent first."""

    items = get_components().bookmarks.list_bookmarked(current_email())
    return json_response({"items": bookmarked_schema.dump(items)})


@bp.delete("/me")
@require_auth
@timing
@translate_service_errors
def withdraw():
    """Delete the account and its content, then end every session."""

    data = load_json(withdraw_schema)
    components = get_components()
    email = current_email()
    components.identity.withdraw(WithdrawIn(email=email, password=data["password"]))
    components.auth.logout(LogoutIn(token=bearer_token(), all_sessions=True))
    return "", 204
