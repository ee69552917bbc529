# tests/unit/services/test_auth_service.py
from __future__ import annotations

import logging

import pytest

from bookshop.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from bookshop.services._shared.errors import (
    ErrorKind,
    InvalidCredentialsError,
    OperationFailedError,
)
from bookshop.services._shared.ports.token_provider import StubTokenProvider
from bookshop.services.auth.dto import AuthTokenConfig, LoginIn, TokenOut
from bookshop.services.auth.service import AuthService
from tests.factories.user import UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def service() -> AuthService:
    """Build an AuthService wired to a stub token provider."""
    return AuthService(
        token_provider=StubTokenProvider(),
        password_hasher=WerkzeugPasswordHasher(method="pbkdf2:sha256:1000"),
        token_cfg=AuthTokenConfig(expires_in=900),
    )


# -------------------------------- Tests ----------------------------------- #
def test_login_issues_token_for_user_id(service, session):
    """A correct password yields a token whose subject is the user id."""
    user = UserFactory(username="alice", raw_password="s3cret!")

    out = service.login(LoginIn(username="alice", password="s3cret!"))

    assert isinstance(out, TokenOut)
    assert out.expires_in == 900
    claims = service.tokens.verify(out.access_token)
    assert claims is not None
    assert claims["sub"] == user.id


def test_token_carries_no_credentials(service, session):
    UserFactory(username="alice", raw_password="s3cret!")

    out = service.login(LoginIn(username="alice", password="s3cret!"))

    claims = service.tokens.decode(out.access_token)
    assert "s3cret!" not in repr(claims)
    assert "password" not in claims
    assert "username" not in claims


def test_wrong_password_and_unknown_user_are_indistinguishable(service, session):
    """Both failure paths raise the same error kind with the same message."""
    UserFactory(username="alice", raw_password="s3cret!")

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        service.login(LoginIn(username="alice", password="nope"))
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        service.login(LoginIn(username="nobody", password="nope"))

    assert wrong_password.value.kind is ErrorKind.INVALID_CREDENTIALS
    assert unknown_user.value.kind is ErrorKind.INVALID_CREDENTIALS
    assert str(wrong_password.value) == str(unknown_user.value) == "Invalid credentials"


def test_unknown_user_still_verifies_a_digest(session):
    """The unknown-user path performs one hash verification like the known path."""
    calls = []

    class CountingHasher(WerkzeugPasswordHasher):
        def verify(self, plaintext, digest):
            calls.append(digest)
            return super(CountingHasher, self).verify(plaintext, digest)

    service = AuthService(
        token_provider=StubTokenProvider(),
        password_hasher=CountingHasher(method="pbkdf2:sha256:1000"),
    )

    with pytest.raises(InvalidCredentialsError):
        service.login(LoginIn(username="ghost", password="whatever"))

    assert len(calls) == 1
    assert calls[0].startswith("pbkdf2:sha256:1000$")


def test_failed_login_warns_with_username_only(service, session, caplog):
    UserFactory(username="alice", raw_password="s3cret!")

    with caplog.at_level(logging.WARNING), pytest.raises(InvalidCredentialsError):
        service.login(LoginIn(username="alice", password="hunter2-typo"))

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert any("alice" in r.getMessage() for r in warnings)
    assert all("hunter2-typo" not in r.getMessage() for r in caplog.records)


def test_signing_failure_becomes_operation_failed(session):
    class BrokenTokenProvider(StubTokenProvider):
        def create_access_token(self, **kwargs):
            raise KeyError("signing key missing")

    UserFactory(username="alice", raw_password="s3cret!")
    service = AuthService(
        token_provider=BrokenTokenProvider(),
        password_hasher=WerkzeugPasswordHasher(method="pbkdf2:sha256:1000"),
    )

    with pytest.raises(OperationFailedError) as excinfo:
        service.login(LoginIn(username="alice", password="s3cret!"))

    assert str(excinfo.value) == "Failed to execute login"
    assert isinstance(excinfo.value.__cause__, KeyError)
