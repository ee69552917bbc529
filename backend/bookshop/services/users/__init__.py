from bookshop.services.users.dto import UserCreateIn, UserOut, UserRoleUpdateIn
from bookshop.services.users.service import UserService

__all__ = ["UserCreateIn", "UserOut", "UserRoleUpdateIn", "UserService"]
