# bookshop/services/catalog/service.py
from __future__ import annotations

from bookshop.services._shared.base import BaseService
from bookshop.services._shared.errors import NotFoundError
from bookshop.services.catalog.dto import BookOut


class CatalogService(BaseService):
    """Read-only access to catalog books."""

    def find_by_id(self, book_id: int) -> BookOut:
        """
        Retrieve a book by identifier.

        :raises NotFoundError: If the book does not exist.
        """
        with self.operation_boundary("findBookById"):
            with self.ro_uow() as uow:
                book = uow.books.get(book_id)
                if book is None:
                    raise NotFoundError("Book", book_id)
                return BookOut.from_model(book)
