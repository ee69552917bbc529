"""Factory Boy base bound to the session of the running test."""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Holder for the session the ``session`` fixture hands to the factories."""

    current = None

    @classmethod
    def set(cls, session) -> None:
        cls.current = session

    @classmethod
    def get(cls):
        if cls.current is None:
            raise RuntimeError("No factory session; request the 'session' fixture.")
        return cls.current


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Commits each object so a rolled-back unit of work cannot remove it."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "commit"
