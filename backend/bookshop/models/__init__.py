from bookshop.models.book import Book
from bookshop.models.ledger import Transaction, TransactionAction, UserBook
from bookshop.models.user import User, UserRole

__all__ = [
    "Book",
    "Transaction",
    "TransactionAction",
    "User",
    "UserBook",
    "UserRole",
]
