"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`bookshop.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``bookshop.services._shared.base``)
    * :class:`BaseService`

- Errors (from ``bookshop.services._shared.errors``)
    * :class:`ErrorKind` and the :class:`ServiceError` hierarchy

- Services
    * :class:`AuthService`, :class:`UserService`, :class:`PurchaseService`,
      :class:`CatalogService` with their DTOs
"""

from __future__ import annotations

from ._shared.base import BaseService
from ._shared.errors import (
    ConflictError,
    ErrorKind,
    InsufficientBalanceError,
    InvalidCredentialsError,
    NotFoundError,
    OperationFailedError,
    PreconditionFailedError,
    ServiceError,
)
from .auth import AuthService, AuthTokenConfig, LoginIn, TokenOut
from .catalog import BookOut, CatalogService
from .purchases import OwnedBookOut, PurchaseIn, PurchaseService, TransactionOut
from .users import UserCreateIn, UserOut, UserRoleUpdateIn, UserService

__all__ = [
    # Base
    "BaseService",
    # Errors
    "ErrorKind",
    "ServiceError",
    "NotFoundError",
    "InvalidCredentialsError",
    "PreconditionFailedError",
    "InsufficientBalanceError",
    "ConflictError",
    "OperationFailedError",
    # Auth
    "AuthService",
    "AuthTokenConfig",
    "LoginIn",
    "TokenOut",
    # Users
    "UserService",
    "UserCreateIn",
    "UserRoleUpdateIn",
    "UserOut",
    # Purchases
    "PurchaseService",
    "PurchaseIn",
    "TransactionOut",
    "OwnedBookOut",
    # Catalog
    "CatalogService",
    "BookOut",
]
