"""
bookshop.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) that define the contracts for
credential hashing and token issuance.

These ports decouple the service layer from concrete implementations of
password hashing and token signing.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`: abstraction for access token creation
    and verification, plus the deterministic :class:`~.StubTokenProvider`.

- :mod:`password_hasher`:
    Defines :class:`~.PasswordHasher`: abstraction for salted one-way hashing.

Design Notes
------------
Concrete adapters (Flask-JWT-Extended, Werkzeug) implement these interfaces
under ``bookshop.infra``.
"""

from __future__ import annotations

from .password_hasher import PasswordHasher
from .token_provider import StubTokenProvider, TokenProvider

__all__ = [
    "PasswordHasher",
    "TokenProvider",
    "StubTokenProvider",
]
