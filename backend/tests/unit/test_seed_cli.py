"""Tests for the ``flask seed`` command group."""

from __future__ import annotations

from sqlalchemy import func, select

from bookshop.models.book import Book
from bookshop.models.user import User
from bookshop.seeds.seed_data import BOOK_FIXTURES, USER_FIXTURES


def _count(db, model) -> int:
    return db.session.scalar(select(func.count()).select_from(model))


def test_seed_run_is_idempotent(app, db) -> None:
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed", "run"])
    second = runner.invoke(args=["seed", "run"])

    assert first.exit_code == 0, first.output
    assert f"created={len(USER_FIXTURES):>2}" in first.output
    assert second.exit_code == 0, second.output
    assert "created= 0" in second.output
    assert _count(db, User) == len(USER_FIXTURES)
    assert _count(db, Book) == len(BOOK_FIXTURES)


def test_seeded_users_can_log_in(app, db) -> None:
    app.test_cli_runner().invoke(args=["seed", "run"])

    resp = app.test_client().post(
        "/api/v1/auth/login", json={"username": "bob", "password": "bobPass12345"}
    )

    assert resp.status_code == 200


def test_seed_fresh_requires_confirmation(app, db) -> None:
    result = app.test_cli_runner().invoke(args=["seed", "fresh"], input="n\n")

    assert result.exit_code != 0
    assert _count(db, User) == 0


def test_seed_fresh_with_yes(app, db) -> None:
    result = app.test_cli_runner().invoke(args=["seed", "fresh", "--yes"])

    assert result.exit_code == 0, result.output
    assert _count(db, User) == len(USER_FIXTURES)
