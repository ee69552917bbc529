"""User repository for persistence and balance mutations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from sqlalchemy import select, update

from bookshop.models.user import User
from bookshop.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never hashes passwords nor issues tokens; callers hand over an already
    computed digest. Balance changes go through :meth:`debit_balance` only.
    """

    model = User

    # ---------------------------- Whitelists ----------------------------

    def _ordering(self):
        return {
            "id": User.id,
            "username": User.username,
            "created_at": User.created_at,
        }

    def _matchable(self):
        return {"username": User.username, "role": User.role}

    def _writable(self):
        """Role is the only field editable through the generic update path."""
        return frozenset({"role"})

    # ---------------------------- Lookup helpers ----------------------------

    def find_all(self) -> list[User]:
        """Return every user ordered by id (possibly empty, never ``None``)."""
        return self.list()

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by exact username.

        :param username: Username to search; surrounding whitespace is ignored.
        :type username: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.username == username.strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_username(self, username: str) -> bool:
        """Return ``True`` when a user with the provided username exists.

        :param username: Username to search.
        :type username: str
        :returns: ``True`` if a row is found; otherwise ``False``.
        :rtype: bool
        """
        stmt = select(User.id).where(User.username == username.strip())
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Mutations ----------------------------

    def create(self, password_hash: str, data: Mapping[str, Any]) -> User:
        """Persist a new user with a precomputed password digest.

        :param password_hash: Digest produced by a password hasher.
        :type password_hash: str
        :param data: Public fields (``username`` and optionally ``role``,
            ``balance``).
        :type data: Mapping[str, Any]
        :returns: The flushed user with its primary key assigned.
        :rtype: User
        :raises sqlalchemy.exc.IntegrityError: On duplicate username.
        """
        user = User(
            username=data["username"],
            password_hash=password_hash,
            balance=int(data.get("balance", 0) or 0),
        )
        if data.get("role"):
            user.role = data["role"]
        return self.add(user)

    def update_role(self, user_id: int, role: str) -> User | None:
        """Change the role of a user and flush.

        :returns: Updated user or ``None`` when it does not exist.
        :rtype: User | None
        """
        user = self.get(user_id)
        if user is None:
            return None
        return self.update(user, role=role)

    def delete_by_id(self, user_id: int) -> bool:
        """Delete a user by id.

        :returns: ``True`` when a row was removed.
        :rtype: bool
        """
        user = self.get(user_id)
        if user is None:
            return False
        self.delete(user)
        return True

    def debit_balance(self, user: User, amount: int) -> bool:
        """Subtract ``amount`` from the balance if it still covers it.

        Issued as one conditional ``UPDATE`` so two concurrent debits can
        never take the balance below zero, whatever was read beforehand.

        :param user: User whose balance is debited.
        :type user: User
        :param amount: Non-negative amount in minor units.
        :type amount: int
        :returns: ``True`` when exactly one row was updated.
        :rtype: bool
        """
        stmt = (
            update(User)
            .where(User.id == user.id, User.balance >= amount)
            .values(balance=User.balance - amount)
            .execution_options(synchronize_session=False)
        )
        result = self.session.execute(stmt)
        # Reload on next access; the in-memory value is stale now
        self.session.expire(user, ["balance"])
        return result.rowcount == 1
