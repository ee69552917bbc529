# bookshop/services/catalog/dto.py
from __future__ import annotations

from dataclasses import dataclass

from bookshop.models.book import Book


@dataclass(frozen=True, slots=True)
class BookOut:
    """
    Public book view.

    :param id: Book id.
    :param title: Display title.
    :param author: Author name, if known.
    :param price: Price in minor currency units.
    """

    id: int
    title: str
    author: str | None
    price: int

    @classmethod
    def from_model(cls, book: Book) -> BookOut:
        return cls(id=book.id, title=book.title, author=book.author, price=book.price)
