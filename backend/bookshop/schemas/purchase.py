"""Catalog and purchase schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class PurchaseCreateSchema(Schema):
    """Payload for buying a book as the authenticated user."""

    book_id = fields.Integer(required=True, strict=True, validate=validate.Range(min=1))


class BookSchema(Schema):
    """Public representation of a catalog book."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    author = fields.String(allow_none=True)
    price = fields.Integer(required=True)


class OwnedBookSchema(Schema):
    """A book owned by the authenticated user."""

    book_id = fields.Integer(required=True)
    title = fields.String(allow_none=True)
    acquired_at = fields.DateTime(required=True)


class TransactionSchema(Schema):
    """Ledger entry representation."""

    id = fields.Integer(required=True)
    book_id = fields.Integer(required=True)
    action = fields.String(required=True)
    amount = fields.Integer(required=True)
    created_at = fields.DateTime(required=True)
