from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """
    Port for one-way, salted password hashing.

    Implementations never offer a way back from a digest to the plaintext;
    credentials are checked exclusively through :meth:`verify`.
    """

    def hash(self, plaintext: str) -> str:
        """Return an opaque digest embedding its salt and work factor."""
        ...

    def verify(self, plaintext: str, digest: str) -> bool:
        """Return ``True`` when ``plaintext`` produces ``digest``."""
        ...
