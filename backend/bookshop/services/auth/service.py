# bookshop/services/auth/service.py
from __future__ import annotations

import logging
from datetime import timedelta

from bookshop.services._shared.base import BaseService
from bookshop.services._shared.errors import InvalidCredentialsError
from bookshop.services._shared.ports import PasswordHasher, TokenProvider
from bookshop.services.auth.dto import AuthTokenConfig, LoginIn, TokenOut

# Verified for unknown usernames so both failure paths cost one hash check.
_DECOY_PASSWORD = "bookshop-decoy-password"  # nosec B105


class AuthService(BaseService):
    """
    Credential verification and access token issuance.

    Tokens carry the user id as their only identifying claim. Unknown
    usernames and wrong passwords are reported identically.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        password_hasher: PasswordHasher,
        token_cfg: AuthTokenConfig | None = None,
        **kwargs,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for issuing JWTs.
        :param password_hasher: Adapter verifying stored digests.
        :param token_cfg: Access token lifetime configuration.
        :param kwargs: Forwarded to :class:`BaseService` (UoW factories, logger).
        """
        super().__init__(**kwargs)
        self.tokens = token_provider
        self.hasher = password_hasher
        self.cfg = token_cfg or AuthTokenConfig()
        self._decoy_hash: str | None = None

    def _decoy_digest(self) -> str:
        if self._decoy_hash is None:
            self._decoy_hash = self.hasher.hash(_DECOY_PASSWORD)
        return self._decoy_hash

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> TokenOut:
        """
        Authenticate credentials and issue an access token.

        :param dto: Login input.
        :returns: Access token and its lifetime in seconds.
        :raises InvalidCredentialsError: If the username is unknown or the
            password does not match.
        :raises OperationFailedError: On storage or signing failures.
        """
        with self.operation_boundary("login"):
            with self.ro_uow() as uow:
                user = uow.users.get_by_username(dto.username)
                if user is None:
                    self.hasher.verify(dto.password, self._decoy_digest())
                    user_id = None
                elif self.hasher.verify(dto.password, user.password_hash):
                    user_id = user.id
                else:
                    user_id = None

            if user_id is None:
                self.logger.warning("Failed login attempt for username: %s", dto.username)
                raise InvalidCredentialsError()

            access = self.tokens.create_access_token(
                identity=user_id,
                expires_delta=timedelta(seconds=self.cfg.expires_in),
            )
            self.logger.info("User logged in", extra={"user_id": user_id})
            return TokenOut(access_token=access, expires_in=self.cfg.expires_in)
