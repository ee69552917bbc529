"""User model definition for the bookshop."""

from __future__ import annotations

from enum import StrEnum

from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from bookshop.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class UserRole(StrEnum):
    """Roles stored on a user. Enforcement happens outside this service."""

    USER = "user"
    ADMIN = "admin"


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account identity holding credentials and the spendable balance.

    Fields
    ------
    username : str
        Login handle. Unique per system, stored trimmed.
    password_hash : str
        Opaque salted digest produced by the password hasher.
    balance : int
        Spendable amount in minor currency units. Never negative; only the
        purchase flow mutates it.
    role : str
        One of :class:`UserRole`.
    created_at : datetime
        Creation timestamp (from mixin).
    updated_at : datetime
        Update timestamp (from mixin).
    """

    __tablename__ = "users"
    __repr_attrs__ = ("username",)

    # Columns
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.USER.value, server_default=UserRole.USER.value
    )

    # Constraints
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        CheckConstraint("balance >= 0", name="balance_non_negative"),
    )

    # -------------------- Validators --------------------
    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Normalize and validate username.

        :param key: Field name (``username``).
        :type key: str
        :param value: Username to normalize.
        :type value: str
        :returns: Trimmed username.
        :rtype: str
        :raises ValueError: If username is missing or only whitespace.
        """
        if not isinstance(value, str):
            raise ValueError("Username is required.")
        v = value.strip()
        if not v:
            raise ValueError("Username is required.")
        return v

    @validates("role")
    def _validate_role(self, key: str, value: str) -> str:
        """
        Ensure the role is one of :class:`UserRole`.

        :raises ValueError: If the role is unknown.
        """
        try:
            return UserRole(value).value
        except ValueError:
            raise ValueError(f"Unknown role: {value!r}") from None

    @validates("balance")
    def _validate_balance(self, key: str, value: int) -> int:
        """
        Reject negative balances before they reach the database constraint.

        :raises ValueError: If the balance is negative.
        """
        if value is None or int(value) < 0:
            raise ValueError("Balance must be a non-negative integer.")
        return int(value)
