# bookshop/services/users/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from bookshop.models.user import User, UserRole


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input DTO for creating a user.

    :param username: Unique login handle.
    :type username: str
    :param password: Raw password; hashed before it reaches storage.
    :type password: str
    :param role: Initial role.
    :type role: str
    :param balance: Opening balance in minor units.
    :type balance: int
    """

    username: str
    password: str
    role: str = UserRole.USER.value
    balance: int = 0


@dataclass(frozen=True, slots=True)
class UserRoleUpdateIn:
    """
    Input DTO for changing a user's role.

    :param user_id: Target user.
    :type user_id: int
    :param role: New role, one of :class:`UserRole`.
    :type role: str
    """

    user_id: int
    role: str


@dataclass(frozen=True, slots=True)
class UserOut:
    """
    Public user view. Never carries the password hash.
    """

    id: int
    username: str
    balance: int
    role: str
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_model(cls, user: User) -> UserOut:
        return cls(
            id=user.id,
            username=user.username,
            balance=user.balance,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
