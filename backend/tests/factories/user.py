"""Factory Boy definition for :class:`bookshop.models.user.User`."""

from __future__ import annotations

import factory

from bookshop.infra.security.werkzeug_password_hasher import WerkzeugPasswordHasher
from bookshop.models.user import User, UserRole
from tests.factories import BaseFactory

# Same cheap method as TestingConfig so services can verify these digests
HASHER = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")
DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`User` instances.

    Pass ``raw_password`` to choose the password whose digest is stored.
    """

    class Meta:
        model = User

    class Params:
        raw_password = DEFAULT_PASSWORD

    id = None  # let autoincrement handle it
    username = factory.Sequence(lambda n: f"user{n}")
    role = UserRole.USER.value
    balance = 0
    password_hash = factory.LazyAttribute(lambda o: HASHER.hash(o.raw_password))
