"""Model-level validation tests for users, books and ledger rows."""

from __future__ import annotations

import pytest
from sqlalchemy import UniqueConstraint
from sqlalchemy.exc import IntegrityError

from bookshop.models import Book, Transaction, TransactionAction, User, UserRole
from tests.factories.book import BookFactory
from tests.factories.user import UserFactory


class TestUserModel:
    def test_username_is_trimmed(self):
        user = User(username="  alice  ", password_hash="x")
        assert user.username == "alice"

    def test_blank_username_rejected(self):
        with pytest.raises(ValueError, match="Username is required"):
            User(username="   ", password_hash="x")

    def test_unknown_role_rejected(self):
        with pytest.raises(ValueError, match="Unknown role"):
            User(username="bob", password_hash="x", role="superuser")

    def test_negative_balance_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            User(username="bob", password_hash="x", balance=-1)

    def test_defaults_applied_on_insert(self, session):
        user = User(username="dora", password_hash="x")
        session.add(user)
        session.commit()

        assert user.balance == 0
        assert user.role == UserRole.USER.value
        assert user.created_at is not None

    def test_username_unique_constraint(self, session):
        UserFactory(username="taken")
        session.add(User(username="taken", password_hash="x"))
        with pytest.raises(IntegrityError):
            session.flush()
        session.rollback()

    def test_username_lookup_served_by_unique_constraint_only(self):
        table = User.__table__
        unique = [
            c for c in table.constraints
            if isinstance(c, UniqueConstraint) and c.name == "uq_users_username"
        ]
        assert len(unique) == 1
        assert [col.name for col in unique[0].columns] == ["username"]
        assert not [ix for ix in table.indexes if [c.name for c in ix.columns] == ["username"]]


class TestBookAndLedgerModels:
    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            Book(title="Free?", price=-5)

    def test_transaction_action_round_trips(self, session):
        book = BookFactory()
        user = UserFactory()
        session.add(
            Transaction(user_id=user.id, book_id=book.id, action=TransactionAction.BUY, amount=7)
        )
        session.commit()

        stored = session.query(Transaction).one()
        assert stored.action == TransactionAction.BUY
        assert stored.created_at is not None
