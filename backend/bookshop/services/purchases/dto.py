# bookshop/services/purchases/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class PurchaseIn:
    """
    Input DTO for a purchase.

    :param user_id: Buyer.
    :type user_id: int
    :param book_id: Book being bought.
    :type book_id: int
    """

    user_id: int
    book_id: int


@dataclass(frozen=True, slots=True)
class TransactionOut:
    """
    Ledger entry view.

    :param id: Ledger entry id.
    :param book_id: Purchased book.
    :param action: Ledger action (``"BUY"``).
    :param amount: Debited amount in minor units.
    :param created_at: When the entry was recorded.
    """

    id: int
    book_id: int
    action: str
    amount: int
    created_at: datetime


@dataclass(frozen=True, slots=True)
class OwnedBookOut:
    """
    Ownership grant view.

    ``title`` is ``None`` when the book has since left the catalog.
    """

    book_id: int
    title: str | None
    acquired_at: datetime
