"""
Unit tests for SQLAlchemyUnitOfWork (writer), using factories.
"""

from __future__ import annotations

import pytest

from bookshop.models import Book, User
from bookshop.uow import SQLAlchemyUnitOfWork
from tests.factories.user import UserFactory


class TestSQLAlchemyUnitOfWorkWriter:
    def test_writer_uow_commits_on_success(self, app, db, session):
        """
        GIVEN a writer UoW
        WHEN we create a user via repo inside the context and leave without exception
        THEN the transaction is committed and the row is visible afterwards.
        """
        initial = db.session.query(User).count()

        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())

        after = db.session.query(User).count()
        assert after == initial + 1

    def test_writer_uow_rolls_back_on_exception(self, app, db, session):
        """
        GIVEN a writer UoW
        WHEN an exception is raised inside the context
        THEN the transaction is rolled back and no rows are persisted.
        """
        initial = db.session.query(User).count()

        with pytest.raises(RuntimeError), SQLAlchemyUnitOfWork() as uow:
            uow.users.add(UserFactory.build())
            raise RuntimeError("boom")

        after = db.session.query(User).count()
        assert after == initial

    def test_repositories_share_the_session(self, app, db, session):
        uow = SQLAlchemyUnitOfWork()
        assert uow.users.session is uow.session
        assert uow.books.session is uow.session
        assert uow.transactions.session is uow.session
        assert uow.user_books.session is uow.session


class TestExecuteInTransaction:
    def test_returns_work_result_and_commits(self, app, db, session):
        """
        GIVEN a unit of work
        WHEN work adds rows through two repositories and returns a value
        THEN the value is returned and both rows are committed together.
        """

        def work(uow):
            uow.users.add(UserFactory.build(username="tx-user"))
            uow.books.add(Book(title="Tx Book", price=10))
            return "done"

        assert SQLAlchemyUnitOfWork().execute_in_transaction(work) == "done"

        db.session.expire_all()
        assert db.session.query(User).filter_by(username="tx-user").count() == 1
        assert db.session.query(Book).filter_by(title="Tx Book").count() == 1

    def test_failure_discards_every_write(self, app, db, session):
        """
        GIVEN a unit of work
        WHEN work writes through two repositories and then fails
        THEN the original error propagates and none of the writes remain.
        """

        def work(uow):
            uow.users.add(UserFactory.build(username="ghost"))
            uow.books.add(Book(title="Ghost Book", price=10))
            raise LookupError("late failure")

        with pytest.raises(LookupError, match="late failure"):
            SQLAlchemyUnitOfWork().execute_in_transaction(work)

        assert db.session.query(User).filter_by(username="ghost").count() == 0
        assert db.session.query(Book).filter_by(title="Ghost Book").count() == 0
