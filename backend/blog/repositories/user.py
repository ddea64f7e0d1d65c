"""User repository for credential lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from blog.models.user import User
from blog.repositories.base import BaseRepository


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never issues tokens or touches sessions in the key-value stores; it
    only manages account rows.
    """

    model = User

    def _sortable_fields(self):
        return {"id": User.id, "email": User.email, "created_at": User.created_at}

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :returns: User instance or ``None`` when not found.
        """
        stmt = select(User).where(User.email == normalize_email(email))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == normalize_email(email))
        return self.session.execute(stmt).first() is not None

    def id_by_email(self, email: str) -> int | None:
        """Return only the primary key for ``email``; cheaper than loading the row."""
        stmt = select(User.id).where(User.email == normalize_email(email))
        return cast(int | None, self.session.execute(stmt).scalar())
