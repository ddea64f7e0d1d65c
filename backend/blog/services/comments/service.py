"""CommentService: comments attached to articles."""

from __future__ import annotations

from blog.models.comment import Comment
from blog.services._shared.base import BaseService
from blog.services._shared.errors import NotFoundError
from blog.services.comments.dto import CommentOut


class CommentService(BaseService):
    def create(self, email: str, article_id: int, content: str) -> CommentOut:
        """
        Add a comment by ``email`` on ``article_id``.

        :raises ValidationError: If ``content`` is blank.
        :raises NotFoundError: If the account or the article does not exist.
        """
        text = self.require_text("content", content)
        with self.rw_uow() as uow:
            user_id = uow.users.id_by_email(email)
            if user_id is None:
                raise NotFoundError("User", email)
            if not uow.articles.exists(id=article_id):
                raise NotFoundError("Article", article_id)
            comment = uow.comments.add(
                Comment(content=text, user_id=user_id, article_id=article_id)
            )
            return self._to_out(comment)

    def list_for_article(self, article_id: int) -> list[CommentOut]:
        """Comments on ``article_id``, oldest first."""
        with self.ro_uow() as uow:
            if not uow.articles.exists(id=article_id):
                raise NotFoundError("Article", article_id)
            return [self._to_out(c) for c in uow.comments.list_for_article(article_id)]

    @staticmethod
    def _to_out(comment: Comment) -> CommentOut:
        return CommentOut(
            id=comment.id,
            article_id=comment.article_id,
            user_id=comment.user_id,
            content=comment.content,
            created_at=comment.created_at,
        )
