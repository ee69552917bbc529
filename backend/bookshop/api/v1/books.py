"""Catalog endpoints."""

from __future__ import annotations

from flask import Blueprint

from bookshop.api.deps import catalog_service, json_response, timing
from bookshop.schemas import BookSchema

bp = Blueprint("books", __name__)

book_schema = BookSchema()


@bp.get("/<int:book_id>")
@timing
def get_book(book_id: int):
    """Return one catalog book."""

    book = catalog_service().find_by_id(book_id)
    return json_response({"data": book_schema.dump(book)})
