"""ArticleService: authoring articles and deleting them with their dependents."""

from __future__ import annotations

import logging

from blog.models.article import Article
from blog.services._shared.base import BaseService
from blog.services._shared.errors import NotFoundError
from blog.services.articles.dto import ArticleCreateIn, ArticleOut

log = logging.getLogger(__name__)


class ArticleService(BaseService):
    """
    Application service for the `Article` aggregate.

    Only the author may delete an article. Deleting removes its comments,
    likes and bookmarks first; nothing relies on database cascades.
    """

    def create(self, email: str, dto: ArticleCreateIn) -> ArticleOut:
        """
        Publish a new article for the account ``email``.

        :raises ValidationError: If the title or content is blank.
        :raises NotFoundError: If the account does not exist.
        """
        title = self.require_text("title", dto.title)
        content = self.require_text("content", dto.content)
        with self.rw_uow() as uow:
            user_id = uow.users.id_by_email(email)
            if user_id is None:
                raise NotFoundError("User", email)
            article = uow.articles.add(Article(title=title, content=content, user_id=user_id))
            out = self._to_out(article)
        log.info("article.created", extra={"event": "article.created", "article_id": out.id})
        return out

    def get(self, article_id: int) -> ArticleOut:
        with self.ro_uow() as uow:
            article = uow.articles.get(article_id)
            if article is None:
                raise NotFoundError("Article", article_id)
            return self._to_out(article)

    def list_by_author(self, email: str) -> list[ArticleOut]:
        with self.ro_uow() as uow:
            user_id = uow.users.id_by_email(email)
            if user_id is None:
                raise NotFoundError("User", email)
            rows = uow.articles.list(filters={"user_id": user_id}, sort=["-created_at"])
            return [self._to_out(a) for a in rows]

    def delete(self, article_id: int, email: str) -> None:
        """
        Delete an article owned by ``email``.

        :raises NotFoundError: If the article or the account does not exist.
        :raises ForbiddenError: If ``email`` is not the author.
        """
        with self.rw_uow() as uow:
            article = uow.articles.get(article_id)
            if article is None:
                raise NotFoundError("Article", article_id)
            actor_id = uow.users.id_by_email(email)
            if actor_id is None:
                raise NotFoundError("User", email)
            self.ensure_owner(actor_id, article.user_id, msg="You can only delete your own articles")

            ids = [article_id]
            uow.comments.delete_for(article_ids=ids)
            uow.likes.delete_for(article_ids=ids)
            uow.bookmarks.delete_for(article_ids=ids)
            uow.articles.delete(article)
        log.info("article.deleted", extra={"event": "article.deleted", "article_id": article_id})

    @staticmethod
    def _to_out(article: Article) -> ArticleOut:
        return ArticleOut(
            id=article.id,
            title=article.title,
            content=article.content,
            user_id=article.user_id,
            like_count=article.like_count,
            created_at=article.created_at,
        )
