from bookshop.repositories.base import BaseRepository
from bookshop.repositories.book import BookRepository
from bookshop.repositories.ledger import TransactionRepository, UserBookRepository
from bookshop.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BookRepository",
    "TransactionRepository",
    "UserBookRepository",
    "UserRepository",
]
