"""Response schemas for likes and bookmarks.

Dumped from plain mappings with ``active`` and ``count`` keys, plus
``was_added`` or ``was_removed`` on the write endpoints; absent keys are
left out of the payload.
"""

from __future__ import annotations

from marshmallow import Schema, fields


class LikeStateSchema(Schema):
    active = fields.Boolean(required=True, data_key="liked")
    was_added = fields.Boolean(data_key="wasAdded")
    was_removed = fields.Boolean(data_key="wasRemoved")
    count = fields.Integer(required=True, data_key="likeCount")


class BookmarkStateSchema(Schema):
    active = fields.Boolean(required=True, data_key="bookmarked")
    was_added = fields.Boolean(data_key="wasAdded")
    was_removed = fields.Boolean(data_key="wasRemoved")
    count = fields.Integer(required=True, data_key="bookmarkCount")


class BookmarkedArticleSchema(Schema):
    article_id = fields.Integer(required=True, data_key="articleId")
    title = fields.String(required=True)
    like_count = fields.Integer(required=True, data_key="likeCount")
