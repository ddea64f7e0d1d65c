"""Generic repository base for SQLAlchemy 2.x.

Repositories stay persistence-only:

- They never implement use cases or domain policies.
- They never call commit/rollback; services own the Unit of Work.
- Sorting is opt-in per aggregate via a ``_sortable_fields`` whitelist, so
  public sort tokens can never reach raw SQL.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from blog.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


def apply_sorting(
    stmt: Select[Any],
    sortable_fields: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Apply ``ORDER BY`` clauses from public tokens such as ``"-created_at"``.

    Unknown tokens are ignored. The primary key is appended as a final
    tiebreaker so listings are deterministic.

    :param stmt: Base selectable.
    :param sortable_fields: Public field → ORM attribute whitelist.
    :param tokens: Public sort tokens; a leading ``-`` means descending.
    :param pk_attr: Primary-key attribute used as a tiebreaker.
    :returns: Select with ``ORDER BY`` applied.
    """
    orders: list[Any] = []
    for token in tokens:
        is_desc = token.startswith("-")
        col = sortable_fields.get(token.lstrip("-").strip())
        if isinstance(col, InstrumentedAttribute):
            orders.append(col.desc() if is_desc else col.asc())
    if pk_attr is not None:
        orders.append(pk_attr.asc())
    return stmt.order_by(*orders) if orders else stmt


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model``. They MAY override
    ``_sortable_fields`` and ``_default_eagerload``.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _where(self, stmt: Select[Any], filters: Mapping[str, Any]) -> Select[Any]:
        clauses = [getattr(self.model, k) == v for k, v in filters.items()]
        return stmt.where(and_(*clauses)) if clauses else stmt

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush so its primary key is materialized.

        :param instance: New entity instance.
        :returns: The same instance after ``flush()``.
        :raises sqlalchemy.exc.IntegrityError: On constraint violations.
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key, ``None`` when absent."""
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError("BaseRepository.get requires a detectable PK attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def find_one(self, **filters: Any) -> E | None:
        stmt = self._default_eagerload(self._where(select(self.model), filters))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists(self, **filters: Any) -> bool:
        """Return ``True`` when at least one row matches the equality filters."""
        stmt = self._where(select(func.count()).select_from(self.model), filters)
        return bool(self.session.execute(stmt.limit(1)).scalar())

    def count(self, **filters: Any) -> int:
        stmt = self._where(select(func.count()).select_from(self.model), filters)
        return int(self.session.execute(stmt).scalar_one())

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] | None = None,
        limit: int | None = None,
    ) -> list[E]:
        """List entities with equality filters and whitelisted sorting."""
        stmt = self._where(select(self.model), filters or {})
        stmt = self._default_eagerload(stmt)
        stmt = apply_sorting(stmt, self._sortable_fields(), sort or [], pk_attr=self._pk_attr())
        if limit is not None:
            stmt = stmt.limit(int(limit))
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()
