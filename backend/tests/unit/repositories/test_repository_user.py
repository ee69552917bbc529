"""Unit tests for UserRepository."""

import pytest
from sqlalchemy.exc import IntegrityError

from bookshop.models import User
from bookshop.repositories.user import UserRepository
from tests.factories.user import UserFactory


class TestUserRepository:
    """Ensure ``UserRepository`` performs core persistence operations."""

    @pytest.fixture()
    def repo(self, session):
        return UserRepository()

    def test_find_all_is_empty_list_without_users(self, repo):
        assert repo.find_all() == []

    def test_find_all_returns_users_ordered_by_id(self, repo, session):
        first = UserFactory()
        second = UserFactory()

        assert [u.id for u in repo.find_all()] == [first.id, second.id]

    def test_get_by_username(self, repo, session):
        u = UserFactory(username="alice")

        fetched = repo.get_by_username("alice")
        assert fetched is not None
        assert fetched.id == u.id
        assert repo.get_by_username("nobody") is None

    def test_exists_by_username(self, repo, session):
        UserFactory(username="bob")

        assert repo.exists_by_username("bob")
        assert not repo.exists_by_username("nonexistent")

    def test_create_stores_given_digest(self, repo, session):
        user = repo.create("digest-value", {"username": "carol", "balance": 50})
        session.commit()

        stored = repo.get(user.id)
        assert stored.password_hash == "digest-value"
        assert stored.balance == 50
        assert stored.role == "user"

    def test_create_duplicate_username_raises_integrity_error(self, repo, session):
        UserFactory(username="dup")

        with pytest.raises(IntegrityError):
            repo.create("x", {"username": "dup"})
        session.rollback()

    def test_update_role(self, repo, session):
        u = UserFactory()

        updated = repo.update_role(u.id, "admin")
        session.commit()

        assert updated is not None
        assert repo.get(u.id).role == "admin"

    def test_update_role_unknown_user(self, repo, session):
        assert repo.update_role(999, "admin") is None

    def test_generic_update_rejects_non_whitelisted_fields(self, repo, session):
        u = UserFactory()

        with pytest.raises(ValueError, match="non-updatable"):
            repo.update(u, balance=1_000_000)

    def test_delete_by_id(self, repo, session):
        u = UserFactory()

        assert repo.delete_by_id(u.id) is True
        session.commit()
        assert repo.get(u.id) is None
        assert repo.delete_by_id(u.id) is False


class TestDebitBalance:
    @pytest.fixture()
    def repo(self, session):
        return UserRepository()

    def test_debit_within_balance(self, repo, session):
        u = UserFactory(balance=100)

        assert repo.debit_balance(u, 30) is True
        session.commit()
        assert u.balance == 70

    def test_debit_exact_balance_reaches_zero(self, repo, session):
        u = UserFactory(balance=100)

        assert repo.debit_balance(u, 100) is True
        assert u.balance == 0

    def test_debit_beyond_balance_changes_nothing(self, repo, session):
        u = UserFactory(balance=10)

        assert repo.debit_balance(u, 11) is False
        assert u.balance == 10

    def test_stale_instance_cannot_overdraw(self, repo, session):
        """
        GIVEN a user instance read while the balance was 100
        WHEN the balance is spent and the same stale instance is debited again
        THEN the guarded update refuses and the balance stays at zero.
        """
        u = UserFactory(balance=100)
        stale = repo.get(u.id)

        assert repo.debit_balance(stale, 100) is True
        assert repo.debit_balance(stale, 100) is False
        session.commit()
        assert session.get(User, u.id).balance == 0
