"""Catalog book model (read-only from the purchase flow)."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from bookshop.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Book(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Sellable catalog entry.

    Fields
    ------
    title : str
        Display title.
    author : str | None
        Optional author name.
    price : int
        Price in minor currency units (non-negative).
    """

    __tablename__ = "books"
    __repr_attrs__ = ("title",)

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    author: Mapped[str | None] = mapped_column(String(120), nullable=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (CheckConstraint("price >= 0", name="price_non_negative"),)

    @validates("price")
    def _validate_price(self, key: str, value: int) -> int:
        if value is None or int(value) < 0:
            raise ValueError("Price must be a non-negative integer.")
        return int(value)
