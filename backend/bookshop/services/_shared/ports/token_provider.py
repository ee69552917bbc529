"""Port for issuing and checking access tokens."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any, Protocol

DEFAULT_STUB_LIFETIME = timedelta(minutes=15)


class TokenProvider(Protocol):
    """
    Issues signed, time-bounded access tokens whose subject is a user id.

    Implementations provide :meth:`create_access_token`, :meth:`decode` and
    :meth:`verify`. The claim helpers below work on top of :meth:`decode`.
    """

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]:
        """Return the claims of ``token``; raise when it is invalid."""
        ...

    def verify(self, token: str) -> dict[str, Any] | None:
        """Return the claims of a valid token, ``None`` when invalid or expired."""
        ...

    def get_subject(self, token: str) -> int | str:
        return self.decode(token)["sub"]

    def get_expires_at(self, token: str) -> datetime:
        return datetime.fromtimestamp(int(self.decode(token)["exp"]), tz=UTC)


class StubTokenProvider(TokenProvider):
    """In-memory provider for service tests; tokens read ``access.<id>.<n>``."""

    def __init__(self) -> None:
        self._serial = count(1)
        self._claims: dict[str, dict[str, Any]] = {}

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        n = next(self._serial)
        expires_at = datetime.now(tz=UTC) + (expires_delta or DEFAULT_STUB_LIFETIME)
        token = f"access.{identity}.{n}"
        self._claims[token] = {
            "sub": identity,
            "type": "access",
            "jti": f"jti-{n}",
            "exp": int(expires_at.timestamp()),
            **(additional_claims or {}),
        }
        return token

    def decode(self, token: str) -> dict[str, Any]:
        return self._claims[token]

    def verify(self, token: str) -> dict[str, Any] | None:
        claims = self._claims.get(token)
        if claims is None or claims["exp"] <= datetime.now(tz=UTC).timestamp():
            return None
        return dict(claims)
