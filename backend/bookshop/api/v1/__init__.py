"""Version 1 routes: health, auth, users, books and purchases."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

from .auth import bp as auth_bp  # noqa: E402
from .books import bp as books_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .purchases import bp as purchases_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# (blueprint, prefix below /api/v1)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),
    (auth_bp, "/auth"),
    (users_bp, "/users"),
    (books_bp, "/books"),
    (purchases_bp, "/purchases"),
]
