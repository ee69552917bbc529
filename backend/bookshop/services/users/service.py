"""
UserService
===========

Application service for the ``User`` aggregate: lookups, creation with
password hashing, role changes and removal. Balances are never edited here;
only the purchase flow moves money.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from bookshop.repositories.user import UserRepository
from bookshop.services._shared.base import BaseService
from bookshop.services._shared.errors import (
    ConflictError,
    NotFoundError,
    PreconditionFailedError,
    violates,
)
from bookshop.services._shared.ports import PasswordHasher
from bookshop.services.users.dto import UserCreateIn, UserOut, UserRoleUpdateIn


class UserService(BaseService):
    """
    Application service for the ``User`` aggregate.

    Responsibilities
    ----------------
    - Create users ensuring username uniqueness.
    - Retrieve users by id or username.
    - Change roles and delete users.
    """

    def __init__(self, *, password_hasher: PasswordHasher, **kwargs) -> None:
        super().__init__(**kwargs)
        self.hasher = password_hasher

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def find_all(self) -> list[UserOut]:
        """
        List every user.

        :returns: Public user DTOs, possibly empty.
        :rtype: list[UserOut]
        """
        with self.operation_boundary("findAll"):
            with self.ro_uow() as uow:
                return [UserOut.from_model(u) for u in uow.users.find_all()]

    def find_by_id(self, user_id: int) -> UserOut:
        """
        Retrieve a user by identifier.

        :param user_id: User primary key.
        :type user_id: int
        :returns: Public user DTO.
        :rtype: UserOut
        :raises NotFoundError: If user does not exist.
        """
        with self.operation_boundary("findById"):
            with self.ro_uow() as uow:
                user = uow.users.get(user_id)
                if user is None:
                    raise NotFoundError("User", user_id)
                return UserOut.from_model(user)

    def find_by_username(self, username: str) -> UserOut:
        """
        Retrieve a user by username.

        :raises NotFoundError: If user does not exist.
        """
        with self.operation_boundary("findByUsername"):
            with self.ro_uow() as uow:
                user = uow.users.get_by_username(username)
                if user is None:
                    raise NotFoundError("User", username)
                return UserOut.from_model(user)

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def create(self, dto: UserCreateIn) -> UserOut:
        """
        Create a new user.

        :param dto: Creation input DTO.
        :type dto: UserCreateIn
        :returns: Public user DTO.
        :rtype: UserOut
        :raises ConflictError: If the username is already taken.
        :raises PreconditionFailedError: If a field fails model validation.
        """
        with self.operation_boundary("create"):
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users

                if repo.exists_by_username(dto.username):
                    raise ConflictError("User", "username already in use")

                try:
                    user = repo.create(
                        self.hasher.hash(dto.password),
                        {"username": dto.username, "role": dto.role, "balance": dto.balance},
                    )
                except IntegrityError as exc:
                    if violates(exc, "uq_users_username"):
                        raise ConflictError("User", "username already in use") from exc
                    raise
                except ValueError as exc:
                    raise PreconditionFailedError(str(exc)) from exc

                self.logger.info("User created", extra={"user_id": user.id})
                return UserOut.from_model(user)

    def update_role(self, dto: UserRoleUpdateIn) -> UserOut:
        """
        Change the role of a user.

        :raises NotFoundError: If user does not exist.
        :raises PreconditionFailedError: If the role is unknown.
        """
        with self.operation_boundary("updateRole"):
            with self.rw_uow() as uow:
                try:
                    user = uow.users.update_role(dto.user_id, dto.role)
                except ValueError as exc:
                    raise PreconditionFailedError(str(exc)) from exc
                if user is None:
                    raise NotFoundError("User", dto.user_id)
                return UserOut.from_model(user)

    def delete(self, user_id: int) -> bool:
        """
        Delete a user. Ledger rows referencing it are kept.

        :returns: ``True`` if a user was removed, ``False`` if none existed.
        :rtype: bool
        """
        with self.operation_boundary("delete"):
            with self.rw_uow() as uow:
                deleted = uow.users.delete_by_id(user_id)
            if deleted:
                self.logger.info("User deleted", extra={"user_id": user_id})
            return deleted
