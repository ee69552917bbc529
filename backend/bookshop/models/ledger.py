"""Append-only purchase ledger and ownership grants."""

from __future__ import annotations

from enum import StrEnum

from sqlalchemy import Enum, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from bookshop.core.extensions import db

from .base import CreatedAtMixin, PKMixin, ReprMixin


class TransactionAction(StrEnum):
    """Kinds of ledger entries."""

    BUY = "BUY"


class Transaction(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    Immutable ledger entry for a completed purchase.

    ``user_id`` and ``book_id`` are plain references: deleting a user or a
    book leaves its ledger history untouched.
    """

    __tablename__ = "transactions"
    __repr_attrs__ = ("user_id", "book_id", "amount")

    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    book_id: Mapped[int] = mapped_column(Integer, nullable=False)
    action: Mapped[TransactionAction] = mapped_column(
        Enum(
            TransactionAction,
            name="transaction_action",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (Index("ix_transactions_user_id", "user_id"),)


class UserBook(PKMixin, ReprMixin, CreatedAtMixin, db.Model):
    """
    Ownership grant: the user possesses the book.

    No uniqueness on ``(user_id, book_id)``; every purchase adds a row.
    """

    __tablename__ = "user_books"
    __repr_attrs__ = ("user_id", "book_id")

    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    book_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (Index("ix_user_books_user_id", "user_id"),)
