# bookshop/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Login handle as typed by the user.
    :type username: str
    :param password: Raw password (to be verified, never stored or logged).
    :type password: str
    """

    username: str
    password: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenOut:
    """
    Output DTO with an access token.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param expires_in: Token lifetime in seconds.
    :type expires_in: int
    """

    access_token: str
    expires_in: int


# --------------------------- Config DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token lifetime configuration.

    :param expires_in: Access token lifetime in seconds.
    :type expires_in: int
    """

    expires_in: int = 3600
