"""Environment-driven settings for the bookshop API.

``APP_ENV`` picks one of the classes below; each reads its values from the
process environment (``.env`` is loaded first when present).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read a yes/no flag; unset means ``default``."""
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """
    Read an integer setting.

    :param name: Environment variable name.
    :type name: str
    :param default: Value used when the variable is unset or blank.
    :type default: int
    :returns: Parsed integer.
    :rtype: int
    :raises ValueError: If the variable holds something other than an integer.
    """
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


class BaseConfig:
    """Settings shared by every environment.

    Attributes
    ----------
    APP_VERSION: str
        Reported by ``GET /health``.
    API_BASE_PREFIX: str
        Mount point of the versioned API blueprints.
    JWT_SECRET_KEY: str
        Signing key for access tokens.
    TOKEN_EXPIRATION_TIME: int
        Access token lifetime in seconds, echoed as ``expires_in`` on login.
    PASSWORD_HASH_METHOD: str
        Werkzeug method string with its work factor (``"scrypt"``,
        ``"pbkdf2:sha256:600000"``).
    PASSWORD_SALT_LENGTH: int
        Random salt length for new password digests.
    SQLALCHEMY_DATABASE_URI: str
        Store holding users, books and the purchase ledger.
    USE_PROXYFIX: bool
        Trust ``X-Forwarded-*`` headers from ``PROXYFIX_HOPS`` proxies.
    """

    APP_VERSION = os.getenv("APP_VERSION", "dev")
    API_BASE_PREFIX = "/api"

    # Security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    TOKEN_EXPIRATION_TIME = env_int("TOKEN_EXPIRATION_TIME", 3600)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(seconds=TOKEN_EXPIRATION_TIME)
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")
    PASSWORD_SALT_LENGTH = env_int("PASSWORD_SALT_LENGTH", 16)

    # Storage
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./bookshop.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO")

    # HTTP edge
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = env_int("PROXYFIX_HOPS", 1)

    DEBUG = False
    TESTING = False
    PROPAGATE_EXCEPTIONS = False


class DevelopmentConfig(BaseConfig):
    """Local runs: debug on, short CORS preflight cache."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600


class TestingConfig(BaseConfig):
    """
    Test runs.

    In-memory SQLite unless ``TEST_DATABASE_URL`` points elsewhere, a fixed
    JWT key, and a cheap hashing work factor so fixtures stay fast.
    """

    TESTING = True
    PROPAGATE_EXCEPTIONS = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    JWT_SECRET_KEY = os.getenv("TEST_JWT_SECRET_KEY", "testing-only-jwt-secret-0123456789abcdef")
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"


class ProductionConfig(BaseConfig):
    """Deployed runs; SQL echo is never honored here."""

    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the class named by ``APP_ENV`` (development when unset or unknown)."""
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
