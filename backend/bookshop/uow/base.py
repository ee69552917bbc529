"""
Unit of Work contract shared by the services.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Self, TypeVar

T = TypeVar("T")


class UnitOfWork(ABC):
    """
    One transactional scope with repositories sharing its session.

    Implementations expose ``users``, ``books``, ``transactions`` and
    ``user_books`` and decide on exit whether staged writes become durable.
    """

    @abstractmethod
    def __enter__(self) -> Self: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...

    def execute_in_transaction(self, work: Callable[[Self], T]) -> T:
        """Run ``work`` inside this unit of work and return its result.

        Writes made by ``work`` through the exposed repositories become
        visible together on success. Any exception undoes all of them and
        propagates unchanged.

        :param work: Callable receiving the entered unit of work.
        :type work: Callable[[UnitOfWork], T]
        :returns: Whatever ``work`` returns.
        :rtype: T
        """
        with self:
            return work(self)
