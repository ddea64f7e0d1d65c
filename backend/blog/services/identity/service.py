"""
IdentityService
===============

Aggregate service responsible for the `User` aggregate once it exists:

- Profile lookup by email (the JWT subject)
- Withdrawal: deleting an account together with everything it owns
"""

from __future__ import annotations

import logging

from blog.models.user import User
from blog.services._shared.base import BaseService
from blog.services._shared.errors import InvalidPasswordError, UserNotFoundError
from blog.services.identity.dto import UserOut, WithdrawIn, WithdrawOut

log = logging.getLogger(__name__)


class IdentityService(BaseService):
    """
    Application service for registered accounts.

    Signup and login live in :class:`~blog.services.auth.AuthService`; this
    service never issues or revokes tokens.
    """

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def get_by_email(self, email: str) -> UserOut:
        """
        Return the public view of the account identified by ``email``.

        :raises UserNotFoundError: If no account uses the email.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_email(email)
            if user is None:
                raise UserNotFoundError(email)
            return self._to_out(user)

    # --------------------------------------------------------------------- #
    # Withdrawal
    # --------------------------------------------------------------------- #

    def withdraw(self, dto: WithdrawIn) -> WithdrawOut:
        """
        Delete an account and everything that references it, atomically.

        Order matters for both foreign keys and the like counters:

        1. Decrement ``like_count`` of every article the user liked.
        2. Drop the user's own likes and bookmarks.
        3. Drop comments written by the user or posted on their articles.
        4. Drop likes and bookmarks other users left on their articles.
        5. Drop the user's articles, then the user.

        :raises UserNotFoundError: If no account uses the email.
        :raises InvalidPasswordError: If the password does not match.
        """
        with self.rw_uow() as uow:
            user = uow.users.get_by_email(dto.email)
            if user is None:
                raise UserNotFoundError(dto.email)
            if not user.verify_password(dto.password):
                raise InvalidPasswordError()
            user_id = user.id

            uow.articles.decrement_like_counts(uow.likes.article_ids_for_user(user_id))
            likes = uow.likes.delete_for(user_id=user_id)
            bookmarks = uow.bookmarks.delete_for(user_id=user_id)

            article_ids = uow.articles.ids_by_author(user_id)
            comments = uow.comments.delete_for(user_id=user_id, article_ids=article_ids)
            likes += uow.likes.delete_for(article_ids=article_ids)
            bookmarks += uow.bookmarks.delete_for(article_ids=article_ids)
            articles = uow.articles.delete_many(article_ids)

            uow.users.delete(user)

        out = WithdrawOut(
            user_id=user_id,
            articles=articles,
            comments=comments,
            likes=likes,
            bookmarks=bookmarks,
        )
        log.info(
            "user.withdrawn",
            extra={"event": "user.withdrawn", "user_id": user_id, "articles": articles},
        )
        return out

    # --------------------------------------------------------------------- #
    # Mapping
    # --------------------------------------------------------------------- #

    @staticmethod
    def _to_out(user: User) -> UserOut:
        return UserOut(
            id=user.id,
            email=user.email,
            nickname=user.nickname,
            created_at=user.created_at,
        )
