"""Salted password digests via :mod:`werkzeug.security`."""

from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from bookshop.services._shared.ports import PasswordHasher


@dataclass(slots=True)
class WerkzeugPasswordHasher(PasswordHasher):
    """
    :class:`PasswordHasher` producing Werkzeug ``method$salt$hash`` strings.

    :param method: Method string with its work factor, e.g. ``"scrypt"`` or
        ``"pbkdf2:sha256:600000"``.
    :param salt_length: Random salt characters per digest.
    """

    method: str = "scrypt"
    salt_length: int = 16

    def hash(self, plaintext: str) -> str:
        if not isinstance(plaintext, str) or not plaintext:
            raise ValueError("Password must be a non-empty string.")
        return generate_password_hash(plaintext, method=self.method, salt_length=self.salt_length)

    def verify(self, plaintext: str, digest: str) -> bool:
        """Constant-time check; malformed digests simply fail."""
        if not isinstance(plaintext, str) or not digest:
            return False
        try:
            return bool(check_password_hash(digest, plaintext))
        except ValueError:
            return False
