"""
Idempotent like/bookmark toggles.

Concurrent requests from the same user may all see "absent" and all try to
insert. The unique constraint on ``(user_id, article_id)`` lets exactly one
insert through; the losers roll back only their SAVEPOINT, find the winner's
row and report success. The like counter moves in the same SAVEPOINT as the
association row, so the two can never drift apart.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import ClassVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from blog.repositories.engagement import AssociationRepository
from blog.services._shared.base import BaseService
from blog.services._shared.errors import NotFoundError, is_unique_violation
from blog.services.engagement.dto import BookmarkedArticleOut, ToggleStatus
from blog.uow.sqlalchemy_uow import SQLAlchemyRepositoryContainer

log = logging.getLogger(__name__)


class ToggleService(BaseService, ABC):
    """
    Shared add/remove/toggle engine for user-article associations.

    :param max_attempts: Attempts before giving up on a contended write.
    :param base_delay: Linear backoff unit in seconds (``attempt * base_delay``).
    :param sleep: Sleep function, replaceable in tests.
    """

    kind: ClassVar[str]

    def __init__(
        self,
        *,
        max_attempts: int = 3,
        base_delay: float = 0.01,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        super().__init__()
        self.max_attempts = max(1, int(max_attempts))
        self.base_delay = max(0.0, float(base_delay))
        self._sleep = sleep

    # ----------------------------- Hooks ---------------------------------

    @abstractmethod
    def _assoc(self, uow: SQLAlchemyRepositoryContainer) -> AssociationRepository: ...

    @abstractmethod
    def _count(self, uow: SQLAlchemyRepositoryContainer, article_id: int) -> int: ...

    def _on_added(self, uow: SQLAlchemyRepositoryContainer, article_id: int) -> None:
        return None

    def _on_removed(self, uow: SQLAlchemyRepositoryContainer, article_id: int) -> None:
        return None

    # ----------------------------- Commands ------------------------------

    def toggle(self, article_id: int, email: str) -> bool:
        """
        Flip the association.

        The presence check is advisory; :meth:`add` and :meth:`remove` stay
        correct if another request changes the state in between.

        :returns: ``True`` when the call leaves the association present (the
            add took effect, or a concurrent add won the race), ``False`` when
            it leaves it absent. A write that gave up on retries reports the
            state it left unchanged.
        :raises NotFoundError: If the user or the article does not exist.
        """
        with self.ro_uow() as uow:
            user_id = self._resolve(uow, article_id, email)
            present = self._assoc(uow).is_present(user_id, article_id)
        if present:
            if self.remove(article_id, email):
                return False
        elif self.add(article_id, email):
            return True
        with self.ro_uow() as uow:
            return self._assoc(uow).is_present(user_id, article_id)

    def add(self, article_id: int, email: str) -> bool:
        """
        Ensure the association exists.

        :returns: ``True`` if this call inserted the row, ``False`` if it was
            already there (or every attempt lost a race).
        :raises NotFoundError: If the user or the article does not exist.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                with self.rw_uow() as uow:
                    user_id = self._resolve(uow, article_id, email)
                    assoc = self._assoc(uow)
                    try:
                        with uow.session.begin_nested():
                            assoc.insert(user_id, article_id)
                            self._on_added(uow, article_id)
                    except IntegrityError as exc:
                        if not is_unique_violation(exc):
                            raise
                        if assoc.is_present(user_id, article_id):
                            return False
                    else:
                        return True
            except IntegrityError:
                raise
            except SQLAlchemyError as exc:
                self._log_retry("add", article_id, attempt, exc)
            self._backoff(attempt)

        log.warning(
            f"{self.kind}.add.exhausted",
            extra={"event": f"{self.kind}.add.exhausted", "article_id": article_id},
        )
        return False

    def remove(self, article_id: int, email: str) -> bool:
        """
        Ensure the association is absent.

        :returns: ``True`` if this call deleted the row.
        :raises NotFoundError: If the user or the article does not exist.
        """
        for attempt in range(1, self.max_attempts + 1):
            try:
                with self.rw_uow() as uow:
                    user_id = self._resolve(uow, article_id, email)
                    removed = self._assoc(uow).remove(user_id, article_id) > 0
                    if removed:
                        self._on_removed(uow, article_id)
                return removed
            except SQLAlchemyError as exc:
                self._log_retry("remove", article_id, attempt, exc)
            self._backoff(attempt)

        log.warning(
            f"{self.kind}.remove.exhausted",
            extra={"event": f"{self.kind}.remove.exhausted", "article_id": article_id},
        )
        return False

    # ----------------------------- Queries -------------------------------

    def status(self, article_id: int, email: str) -> ToggleStatus:
        """
        Read presence and count.

        :raises NotFoundError: If the user or the article does not exist.
        """
        with self.ro_uow() as uow:
            user_id = self._resolve(uow, article_id, email)
            return ToggleStatus(
                active=self._assoc(uow).is_present(user_id, article_id),
                count=self._count(uow, article_id),
            )

    # ----------------------------- Helpers -------------------------------

    @staticmethod
    def _resolve(uow: SQLAlchemyRepositoryContainer, article_id: int, email: str) -> int:
        user_id = uow.users.id_by_email(email)
        if user_id is None:
            raise NotFoundError("User", email)
        if not uow.articles.exists(id=article_id):
            raise NotFoundError("Article", article_id)
        return user_id

    def _backoff(self, attempt: int) -> None:
        if attempt < self.max_attempts and self.base_delay > 0:
            self._sleep(attempt * self.base_delay)

    def _log_retry(self, op: str, article_id: int, attempt: int, exc: Exception) -> None:
        log.warning(
            f"{self.kind}.{op}.retry",
            extra={
                "event": f"{self.kind}.{op}.retry",
                "article_id": article_id,
                "attempt": attempt,
                "error": exc.__class__.__name__,
            },
        )


class LikeService(ToggleService):
    """Likes also keep ``articles.like_count`` in step."""

    kind = "like"

    def _assoc(self, uow):
        return uow.likes

    def _count(self, uow, article_id):
        return int(uow.articles.get_like_count(article_id) or 0)

    def _on_added(self, uow, article_id):
        uow.articles.increment_like_count(article_id)

    def _on_removed(self, uow, article_id):
        uow.articles.decrement_like_count(article_id)


class BookmarkService(ToggleService):
    kind = "bookmark"

    def _assoc(self, uow):
        return uow.bookmarks

    def _count(self, uow, article_id):
        return uow.bookmarks.count_for_article(article_id)

    def list_bookmarked(self, email: str) -> list[BookmarkedArticleOut]:
        """Articles bookmarked by ``email``, most recent bookmark first."""
        with self.ro_uow() as uow:
            user_id = uow.users.id_by_email(email)
            if user_id is None:
                raise NotFoundError("User", email)
            return [
                BookmarkedArticleOut(
                    article_id=article.id,
                    title=article.title,
                    like_count=article.like_count,
                )
                for article in uow.articles.list_bookmarked_by(user_id)
            ]
