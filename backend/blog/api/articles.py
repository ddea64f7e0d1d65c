"""Like and bookmark endpoints on articles."""

from __future__ import annotations

from flask import Blueprint

from blog.api.deps import current_email, json_response, require_auth, timing, translate_service_errors
from blog.schemas import BookmarkStateSchema, LikeStateSchema
from blog.services.engagement import ToggleService
from blog.wiring import get_components

bp = Blueprint("articles", __name__)

like_schema = LikeStateSchema()
bookmark_schema = BookmarkStateSchema()


def _add(service: ToggleService, article_id: int) -> dict:
    email = current_email()
    was_added = service.add(article_id, email)
    status = service.status(article_id, email)
    return {"active": True, "was_added": was_added, "count": status.count}


def _remove(service: ToggleService, article_id: int) -> dict:
    email = current_email()
    was_removed = service.remove(article_id, email)
    status = service.status(article_id, email)
    return {"active": False, "was_removed": was_removed, "count": status.count}


def _status(service: ToggleService, article_id: int) -> dict:
    status = service.status(article_id, current_email())
    return {"active": status.active, "count": status.count}


# ------------------------------- Likes -------------------------------- #


@bp.post("/<int:article_id>/like")
@require_auth
@timing
@translate_service_errors
def like(article_id: int):
    return json_response(like_schema.dump(_add(get_components().likes, article_id)))


@bp.delete("/<int:article_id>/like")
@require_auth
@timing
@translate_service_errors
def unlike(article_id: int):
    return json_response(like_schema.dump(_remove(get_components().likes, article_id)))


@bp.get("/<int:article_id>/like/status")
@require_auth
@timing
@translate_service_errors
def like_status(article_id: int):
    return json_response(like_schema.dump(_status(get_components().likes, article_id)))


# ----------------------------- Bookmarks ------------------------------ #


@bp.post("/<int:article_id>/bookmark")
@require_auth
@timing
@translate_service_errors
def bookmark(article_id: int):
    return json_response(bookmark_schema.dump(_add(get_components().bookmarks, article_id)))


@bp.delete("/<int:article_id>/bookmark")
@require_auth
@timing
@translate_service_errors
def unbookmark(article_id: int):
    return json_response(bookmark_schema.dump(_remove(get_components().bookmarks, article_id)))


@bp.get("/<int:article_id>/bookmark/status")
@require_auth
@timing
@translate_service_errors
def bookmark_status(article_id: int):
    return json_response(bookmark_schema.dump(_status(get_components().bookmarks, article_id)))
