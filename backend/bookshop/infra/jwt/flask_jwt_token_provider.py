"""Access tokens signed by Flask-JWT-Extended."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from bookshop.services._shared.ports import TokenProvider

log = logging.getLogger(__name__)


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    :class:`TokenProvider` backed by the app's ``JWTManager``.

    Signing key and default lifetime come from ``JWT_SECRET_KEY`` and
    ``JWT_ACCESS_TOKEN_EXPIRES``, so every call needs an app context.
    """

    def create_access_token(
        self,
        *,
        identity: str | int,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        # PyJWT rejects non-string subjects
        token = create_access_token(
            identity=str(identity),
            additional_claims=additional_claims,
            expires_delta=expires_delta,
        )
        return cast(str, token)

    def decode(self, token: str) -> dict[str, Any]:
        return cast(dict[str, Any], decode_token(token))

    def verify(self, token: str) -> dict[str, Any] | None:
        try:
            return self.decode(token)
        except (PyJWTError, JWTExtendedException) as exc:
            log.info("Rejected access token: %s", type(exc).__name__)
            return None
