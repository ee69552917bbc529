"""Shared persistence helpers for the bookshop repositories (SQLAlchemy 2.x).

Repositories read and stage rows; they never commit. The unit of work that
owns the session decides when a purchase or an account change becomes
durable.

Two whitelists keep callers away from arbitrary columns:

* ``_ordering`` maps public order keys to mapped attributes.
* ``_writable`` names the attributes the generic :meth:`update` may assign.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from bookshop.core.extensions import db

M = TypeVar("M")


def order_clauses(
    keys: Iterable[str],
    columns: Mapping[str, InstrumentedAttribute[Any]],
) -> list[Any]:
    """Turn order keys such as ``["-created_at", "id"]`` into SQL clauses.

    A leading ``-`` sorts descending. Keys missing from ``columns`` are
    dropped rather than rejected.

    :param keys: Public order keys.
    :type keys: Iterable[str]
    :param columns: Allowed key to attribute mapping.
    :type columns: Mapping[str, InstrumentedAttribute]
    :returns: Clauses ready for ``Select.order_by``.
    :rtype: list
    """
    clauses: list[Any] = []
    for key in keys:
        name = key.lstrip("-").strip()
        column = columns.get(name)
        if column is None:
            continue
        clauses.append(column.desc() if key.startswith("-") else column.asc())
    return clauses


class BaseRepository(Generic[M]):
    """Row access for one mapped class.

    Subclasses set ``model`` and may override :meth:`_ordering`,
    :meth:`_matchable` and :meth:`_writable`.
    """

    model: type[M]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session of the enclosing unit of work. Falls back to
            the Flask-scoped ``db.session`` when omitted.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session = session

    @property
    def session(self) -> Session:
        if self._session is None:
            return cast(Session, db.session)
        return self._session

    # ----------------------------- Whitelists -----------------------------

    def _ordering(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {"id": self._id_column()}

    def _matchable(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _writable(self) -> frozenset[str]:
        return frozenset()

    def _id_column(self) -> InstrumentedAttribute[Any]:
        column = getattr(self.model, "id", None)
        if column is None:
            raise RuntimeError(f"{self.model.__name__} has no 'id' column.")
        return column

    def _by_id(self, entity_id: int) -> Select[Any]:
        return select(self.model).where(self._id_column() == entity_id)

    # ------------------------------- Reads --------------------------------

    def get(self, entity_id: int) -> M | None:
        """Return the row with primary key ``entity_id`` or ``None``."""
        return cast(M | None, self.session.execute(self._by_id(entity_id)).scalars().first())

    def get_for_update(self, entity_id: int) -> M | None:
        """Return the row with primary key ``entity_id``, locked for writing.

        The lock is released when the enclosing transaction ends. SQLite
        renders a plain ``SELECT`` and relies on its database-level write lock.

        :param entity_id: Primary key.
        :type entity_id: int
        :returns: Locked row or ``None``.
        :rtype: M | None
        """
        stmt = self._by_id(entity_id).with_for_update()
        return cast(M | None, self.session.execute(stmt).scalars().first())

    def list(
        self,
        *,
        match: Mapping[str, Any] | None = None,
        order_by: Iterable[str] = ("id",),
    ) -> list[M]:
        """Return rows equal on every ``match`` key, in ``order_by`` order.

        The primary key always closes the ordering so results are stable.

        :param match: Equality conditions on whitelisted keys. Unknown keys
            are ignored.
        :type match: Mapping[str, Any] | None
        :param order_by: Public order keys.
        :type order_by: Iterable[str]
        :returns: Matching rows, possibly empty.
        :rtype: list[M]
        """
        stmt: Select[Any] = select(self.model)
        allowed = self._matchable()
        for key, value in (match or {}).items():
            column = allowed.get(key)
            if column is not None:
                stmt = stmt.where(column == value)
        stmt = stmt.order_by(*order_clauses(order_by, self._ordering()), self._id_column().asc())
        return list(self.session.execute(stmt).scalars().all())

    # ------------------------------- Writes -------------------------------

    def add(self, instance: M) -> M:
        """Stage ``instance`` and flush so its primary key is assigned."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def delete(self, instance: M) -> None:
        self.session.delete(instance)
        self.session.flush()

    def update(self, instance: M, **changes: Any) -> M:
        """Assign whitelisted attributes on ``instance`` and flush.

        Assignment goes through ``setattr`` so model ``@validates`` hooks run.

        :param instance: Row to change.
        :type instance: M
        :param changes: Attribute values keyed by name.
        :returns: The same instance.
        :rtype: M
        :raises ValueError: If any key is not writable.
        """
        rejected = sorted(set(changes) - self._writable())
        if rejected:
            raise ValueError(f"Unknown or non-updatable fields: {rejected}")
        for name, value in changes.items():
            setattr(instance, name, value)
        self.session.flush()
        return instance
