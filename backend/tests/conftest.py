"""Pytest fixtures configuring an isolated database per test.

Each test gets a freshly created schema on the in-memory SQLite database of
:class:`TestingConfig`. Services commit for real, so the schema is dropped
afterwards instead of relying on an outer transaction.
"""

from __future__ import annotations

import os

import pytest
from flask_jwt_extended import create_access_token

from bookshop.core.config import TestingConfig
from bookshop.core.extensions import db as _db  # Flask-SQLAlchemy instance
from bookshop.factory import create_app  # application factory under test


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestingConfig` applied.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture()
def db(app):
    """Create all tables for one test and drop them afterwards.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application, used inside an
        active application context.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def session(db):
    """Return the Flask-scoped session and wire it into Factory Boy."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(db.session)
    yield db.session
    SQLAlchemySession.set(None)


@pytest.fixture()
def client(app, db):
    """Return a Flask test client sharing the per-test schema."""
    return app.test_client()


@pytest.fixture()
def auth_header(app):
    """Build ``Authorization`` headers for a given user id."""

    def _build(user_id: int) -> dict[str, str]:
        token = create_access_token(identity=str(user_id))
        return {"Authorization": f"Bearer {token}"}

    return _build
