"""Comment repository."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, or_

from blog.models.comment import Comment
from blog.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def _sortable_fields(self):
        return {"id": Comment.id, "created_at": Comment.created_at}

    def list_for_article(self, article_id: int) -> list[Comment]:
        return self.list(filters={"article_id": article_id}, sort=["created_at"])

    def delete_for(self, *, user_id: int | None = None, article_ids: Sequence[int] = ()) -> int:
        """Bulk-delete comments written by ``user_id`` or posted on ``article_ids``.

        :returns: Number of rows removed.
        """
        clauses = []
        if user_id is not None:
            clauses.append(Comment.user_id == user_id)
        if article_ids:
            clauses.append(Comment.article_id.in_(article_ids))
        if not clauses:
            return 0
        stmt = (
            delete(Comment)
            .where(or_(*clauses))
            .execution_options(synchronize_session=False)
        )
        return int(self.session.execute(stmt).rowcount or 0)
