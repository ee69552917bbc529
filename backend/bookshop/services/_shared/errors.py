"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between repositories, domain
models, and application services.

Every error carries an :class:`ErrorKind` tag. Callers branch on the tag, and
the HTTP layer (``bookshop/core/errors.py``) maps it to an RFC 7807 response.
Messages are safe for clients: identifiers, storage errors and tracebacks stay
in the logs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name; SQLite reports the offending
    ``table.column`` pair, so ``uq_users_username`` also matches
    ``users.username``.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g., 'uq_users_username').

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    parts = name.split("_", 2)
    if len(parts) == 3 and parts[0] == "uq":
        return f"{parts[1]}.{parts[2]}" in message
    return False


class ErrorKind(StrEnum):
    """Stable failure categories exposed at the service boundary."""

    NOT_FOUND = "not_found"
    INVALID_CREDENTIALS = "invalid_credentials"
    PRECONDITION_FAILED = "precondition_failed"
    CONFLICT = "conflict"
    OPERATION_FAILED = "operation_failed"


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - The API layer translates them to APIError using :attr:`kind`.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.OPERATION_FAILED


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key. Kept for logs, not rendered.
    :type key: str | int | None
    """

    kind: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND

    entity: str
    key: str | int | None = None

    def __str__(self) -> str:
        return f"{self.entity} not found"


class InvalidCredentialsError(ServiceError):
    """
    Raised when a login fails.

    Unknown usernames and wrong passwords share this exact error and message.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_CREDENTIALS

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class PreconditionFailedError(ServiceError):
    """
    Raised when a business precondition of an operation does not hold.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.PRECONDITION_FAILED

    def __init__(self, message: str = "Precondition failed") -> None:
        super().__init__(message)


class InsufficientBalanceError(PreconditionFailedError):
    """Raised when a user's balance does not cover a book's price."""

    def __init__(self, message: str = "Insufficient balance") -> None:
        super().__init__(message)


@dataclass(slots=True)
class ConflictError(PreconditionFailedError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    kind: ClassVar[ErrorKind] = ErrorKind.CONFLICT

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


@dataclass(slots=True)
class OperationFailedError(ServiceError):
    """
    Raised when an unexpected failure interrupts a service operation.

    The underlying cause is logged by the service and chained via
    ``__cause__``; only the generic message reaches callers.

    :param operation: Public operation name (e.g., "buy").
    :type operation: str
    """

    kind: ClassVar[ErrorKind] = ErrorKind.OPERATION_FAILED

    operation: str

    def __str__(self) -> str:
        return f"Failed to execute {self.operation}"
