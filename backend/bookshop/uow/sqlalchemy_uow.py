"""
SQLAlchemy units of work over the shop's repositories.

:class:`SQLAlchemyUnitOfWork` commits everything staged through its
repositories on a clean exit and rolls it all back otherwise. That is what
keeps a purchase's debit, ledger entry and ownership grant together.
:class:`SQLAlchemyReadOnlyUnitOfWork` serves the read paths (login, lookups,
ledger views) and refuses to write.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction

from bookshop.core.extensions import db
from bookshop.repositories import (
    BookRepository,
    TransactionRepository,
    UserBookRepository,
    UserRepository,
)
from bookshop.uow.base import UnitOfWork

logger = logging.getLogger(__name__)

# Leading SQL keywords rejected while a read-only unit of work is open
_MUTATING_KEYWORDS = frozenset(
    {
        "insert",
        "update",
        "delete",
        "merge",
        "replace",
        "create",
        "alter",
        "drop",
        "truncate",
        "grant",
        "revoke",
    }
)


class SQLAlchemyRepositoryContainer:
    """Every repository of the shop bound to one session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=session)
        self.books = BookRepository(session=session)
        self.transactions = TransactionRepository(session=session)
        self.user_books = UserBookRepository(session=session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-write unit of work.

    :param session: Explicit session for worker threads and scripts. Defaults
        to the Flask-scoped ``db.session``.
    :type session: :class:`sqlalchemy.orm.Session` | None
    """

    def __init__(self, session: Session | None = None) -> None:
        super().__init__(session=session if session is not None else db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on its first statement
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


class _WriteGuard:
    """Session and connection listeners that turn any write into ``RuntimeError``."""

    def __init__(self, session: Session, connection: Connection) -> None:
        self._session = session
        self._connection = connection
        self._armed = False

    def _on_flush(self, session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def _on_execute(self, conn, cursor, statement, parameters, context, executemany) -> None:
        words = statement.split(None, 1) if statement else []
        keyword = words[0].lower() if words else ""
        if keyword in _MUTATING_KEYWORDS:
            raise RuntimeError(f"Read-only UnitOfWork: SQL statement blocked: {keyword.upper()}")

    def arm(self) -> None:
        if self._armed:
            return
        event.listen(self._session, "before_flush", self._on_flush)
        event.listen(self._connection, "before_cursor_execute", self._on_execute)
        self._armed = True

    def disarm(self) -> None:
        if not self._armed:
            return
        with suppress(InvalidRequestError):
            event.remove(self._session, "before_flush", self._on_flush)
        with suppress(InvalidRequestError):
            event.remove(self._connection, "before_cursor_execute", self._on_execute)
        self._armed = False


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Unit of work for queries only.

    While open, ORM flushes carrying changes and raw DML both raise
    ``RuntimeError``. On exit the transaction it started is rolled back, so
    in-memory edits to loaded rows never persist.

    When it owns the transaction on PostgreSQL or MySQL/MariaDB it also sends
    ``SET TRANSACTION ISOLATION LEVEL`` and ``SET TRANSACTION READ ONLY``.
    SQLite gets the guards alone.

    :param session: Explicit session; defaults to ``db.session``.
    :param isolation_level: Isolation hint such as ``"READ COMMITTED"``.
        ``None`` keeps the connection default.
    :param enforce_db_readonly: Send ``SET TRANSACTION READ ONLY`` when
        supported.
    """

    _DIRECTIVE_DIALECTS = frozenset({"postgresql", "mysql", "mariadb"})
    _ISOLATION_LEVELS = frozenset(
        {"READ UNCOMMITTED", "READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE"}
    )

    def __init__(
        self,
        session: Session | None = None,
        *,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(session=session if session is not None else db.session)
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly
        self._owned_txn: SessionTransaction | None = None
        self._guard: _WriteGuard | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # Attach to an already running transaction instead of failing
        try:
            self._owned_txn = self.session.begin()
        except InvalidRequestError:
            self._owned_txn = None

        connection = self.session.connection()
        self._guard = _WriteGuard(self.session, connection)
        self._guard.arm()

        if self._owned_txn is not None and connection.dialect.name in self._DIRECTIVE_DIALECTS:
            self._send_directives()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._owned_txn is not None:
                self.session.rollback()
        finally:
            self._owned_txn = None
            if self._guard is not None:
                self._guard.disarm()
                self._guard = None

    def commit(self) -> None:
        """
        :raises RuntimeError: Always; nothing may be written here.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    def _send_directives(self) -> None:
        # Only valid before the first query of the transaction
        try:
            if self.isolation_level:
                level = self.isolation_level.strip().upper()
                if level not in self._ISOLATION_LEVELS:
                    logger.warning("Unknown isolation_level '%s'; attempting as-is.", level)
                self.session.execute(text(f"SET TRANSACTION ISOLATION LEVEL {level}"))
            if self.enforce_db_readonly:
                self.session.execute(text("SET TRANSACTION READ ONLY"))
        except SQLAlchemyError as exc:
            logger.warning("SET TRANSACTION directives failed (%s); guards only.", exc)
