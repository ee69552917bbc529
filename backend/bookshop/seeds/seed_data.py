"""Demo accounts and catalog for local databases.

Seeding is idempotent: users are matched by username and books by title, and
rows that already exist are never modified.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select

from bookshop.models.book import Book
from bookshop.models.user import User, UserRole
from bookshop.services._shared.ports import PasswordHasher

LOGGER = logging.getLogger(__name__)

# table name -> Counter({"created": n, "existing": m})
SeedReport = dict[str, Counter[str]]

# Amounts in minor currency units
USER_FIXTURES: list[dict[str, Any]] = [
    {"username": "alice", "password": "alicePass123", "role": UserRole.ADMIN, "balance": 10_000},
    {"username": "bob", "password": "bobPass12345", "role": UserRole.USER, "balance": 2_500},
    {"username": "carol", "password": "carolPass123", "role": UserRole.USER, "balance": 0},
]

BOOK_FIXTURES: list[dict[str, Any]] = [
    {"title": "The Pragmatic Programmer", "author": "Andrew Hunt", "price": 3_999},
    {"title": "Fluent Python", "author": "Luciano Ramalho", "price": 4_950},
    {"title": "Designing Data-Intensive Applications", "author": "Martin Kleppmann", "price": 4_200},
    {"title": "Free Sample Chapter", "author": None, "price": 0},
]


def seed_users(database: SQLAlchemy, hasher: PasswordHasher) -> Counter[str]:
    """Insert missing demo users with hashed passwords and opening balances."""
    session = database.session
    tally: Counter[str] = Counter()
    with session.begin():
        for fixture in USER_FIXTURES:
            found = session.scalar(select(User.id).where(User.username == fixture["username"]))
            if found is not None:
                tally["existing"] += 1
                continue
            session.add(
                User(
                    username=fixture["username"],
                    password_hash=hasher.hash(fixture["password"]),
                    role=fixture["role"].value,
                    balance=fixture["balance"],
                )
            )
            tally["created"] += 1
    LOGGER.debug("Users seeded: %s", dict(tally))
    return tally


def seed_books(database: SQLAlchemy) -> Counter[str]:
    """Insert missing catalog books."""
    session = database.session
    tally: Counter[str] = Counter()
    with session.begin():
        for fixture in BOOK_FIXTURES:
            found = session.scalar(select(Book.id).where(Book.title == fixture["title"]))
            if found is not None:
                tally["existing"] += 1
                continue
            session.add(Book(**fixture))
            tally["created"] += 1
    LOGGER.debug("Books seeded: %s", dict(tally))
    return tally


def run_all(database: SQLAlchemy, hasher: PasswordHasher) -> SeedReport:
    """Seed users, then books, and report per-table counters."""
    LOGGER.info("Seeding demo data")
    return {
        "users": seed_users(database, hasher),
        "books": seed_books(database),
    }


__all__ = ["BOOK_FIXTURES", "USER_FIXTURES", "SeedReport", "run_all", "seed_books", "seed_users"]
