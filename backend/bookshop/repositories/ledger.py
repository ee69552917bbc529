"""Repositories for the purchase ledger and ownership grants."""

from __future__ import annotations

from bookshop.models.ledger import Transaction, UserBook
from bookshop.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Append-only access to :class:`Transaction` rows."""

    model = Transaction

    def _ordering(self):
        return {"id": Transaction.id, "created_at": Transaction.created_at}

    def _matchable(self):
        return {
            "user_id": Transaction.user_id,
            "book_id": Transaction.book_id,
            "action": Transaction.action,
        }

    def list_for_user(self, user_id: int) -> list[Transaction]:
        """Return the ledger of ``user_id``, oldest first.

        :param user_id: Owner of the ledger entries.
        :type user_id: int
        :returns: Transactions (possibly empty).
        :rtype: list[Transaction]
        """
        return self.list(match={"user_id": user_id}, order_by=["created_at"])


class UserBookRepository(BaseRepository[UserBook]):
    """Access to :class:`UserBook` ownership grants."""

    model = UserBook

    def _ordering(self):
        return {"id": UserBook.id, "created_at": UserBook.created_at}

    def _matchable(self):
        return {"user_id": UserBook.user_id, "book_id": UserBook.book_id}

    def list_for_user(self, user_id: int) -> list[UserBook]:
        """Return every ownership grant of ``user_id``, oldest first."""
        return self.list(match={"user_id": user_id}, order_by=["created_at"])
