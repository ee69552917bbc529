"""Book repository (catalog reads)."""

from __future__ import annotations

from bookshop.models.book import Book
from bookshop.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    """Persistence-only repository for :class:`Book`."""

    model = Book

    def _ordering(self):
        return {"id": Book.id, "title": Book.title, "price": Book.price}

    def _matchable(self):
        return {"title": Book.title, "author": Book.author}
