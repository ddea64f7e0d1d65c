"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session, scoped_session

from blog.core.extensions import db
from blog.repositories import (
    ArticleRepository,
    BookmarkRepository,
    CommentRepository,
    LikeRepository,
    UserRepository,
)
from blog.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.articles = ArticleRepository(session=self.session)
        self.comments = CommentRepository(session=self.session)
        self.likes = LikeRepository(session=self.session)
        self.bookmarks = BookmarkRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent
    transaction. Leaving the block normally commits; an exception rolls back
    and propagates.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:

    - Installs write guards for its lifetime: ORM flushes with pending
      changes and DML/DDL statements raise :class:`RuntimeError`.
    - Rolls back on exit only when it started the session transaction
      itself; an outer transaction is left untouched.
    - Disallows ``commit()``.

    Callers should map ORM entities to DTOs before leaving the block, since
    the closing rollback expires loaded instances.
    """

    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "merge",
        "alter",
        "drop",
        "truncate",
        "create",
        "replace",
    )

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._owns_transaction = False
        self._target: Session | None = None
        self._conn: Connection | None = None
        self._before_flush: Any = None
        self._before_cursor_execute: Any = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # Listeners attach to the concrete Session, not the scoped proxy.
        session = self.session
        self._target = session() if isinstance(session, scoped_session) else session
        self._owns_transaction = not self._target.in_transaction()
        self._conn = self._target.connection()
        self._install_guards()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._owns_transaction:
                self.session.rollback()
        finally:
            self._remove_guards()
            self._conn = None

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ------------------------------------------------------------------ #
    # Guards
    # ------------------------------------------------------------------ #

    def _install_guards(self) -> None:
        def _before_flush(session, flush_context, instances):
            if session.new or session.dirty or session.deleted:
                raise RuntimeError("Read-only UnitOfWork: ORM flush blocked.")

        def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            first_token = statement.lstrip().split(None, 1)[0].lower() if statement else ""
            if first_token.startswith(self._WRITE_PREFIXES):
                raise RuntimeError(
                    f"Read-only UnitOfWork: SQL statement blocked: {first_token.upper()}"
                )

        event.listen(self._target, "before_flush", _before_flush)
        event.listen(self._conn, "before_cursor_execute", _before_cursor_execute)
        self._before_flush = _before_flush
        self._before_cursor_execute = _before_cursor_execute

    def _remove_guards(self) -> None:
        if self._before_flush is not None and self._target is not None:
            event.remove(self._target, "before_flush", self._before_flush)
            self._before_flush = None
        if self._before_cursor_execute is not None and self._conn is not None:
            event.remove(self._conn, "before_cursor_execute", self._before_cursor_execute)
        self._before_cursor_execute = None
        self._target = None
