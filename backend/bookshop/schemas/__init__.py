"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, TokenResponseSchema
from .purchase import BookSchema, OwnedBookSchema, PurchaseCreateSchema, TransactionSchema
from .user import UserCreateSchema, UserRoleUpdateSchema, UserSchema

__all__ = [
    "LoginSchema",
    "TokenResponseSchema",
    "BookSchema",
    "OwnedBookSchema",
    "PurchaseCreateSchema",
    "TransactionSchema",
    "UserCreateSchema",
    "UserRoleUpdateSchema",
    "UserSchema",
]
