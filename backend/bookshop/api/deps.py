"""Shared API helpers: responses, auth guards and service wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from bookshop.core.errors import Unauthorized
from bookshop.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from bookshop.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from bookshop.services import (
    AuthService,
    AuthTokenConfig,
    CatalogService,
    PurchaseService,
    UserService,
)

F = TypeVar("F", bound=Callable[..., Any])


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> int:
    """Return the authenticated user id carried as the JWT subject."""

    identity = get_jwt_identity()
    try:
        return int(identity)
    except (TypeError, ValueError):
        raise Unauthorized("Invalid token subject") from None


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# ------------------------------ Service wiring ------------------------------


def password_hasher() -> WerkzeugPasswordHasher:
    """Build the password hasher from ``PASSWORD_HASH_*`` settings."""

    return WerkzeugPasswordHasher(
        method=current_app.config.get("PASSWORD_HASH_METHOD", "scrypt"),
        salt_length=int(current_app.config.get("PASSWORD_SALT_LENGTH", 16)),
    )


def auth_service() -> AuthService:
    return AuthService(
        token_provider=JWTTokenProvider(),
        password_hasher=password_hasher(),
        token_cfg=AuthTokenConfig(
            expires_in=int(current_app.config.get("TOKEN_EXPIRATION_TIME", 3600))
        ),
    )


def user_service() -> UserService:
    return UserService(password_hasher=password_hasher())


def purchase_service() -> PurchaseService:
    return PurchaseService()


def catalog_service() -> CatalogService:
    return CatalogService()
