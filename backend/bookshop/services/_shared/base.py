# bookshop/services/_shared/base.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from bookshop.services._shared.errors import OperationFailedError, ServiceError
from bookshop.uow.base import UnitOfWork
from bookshop.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Wrap every public operation in :meth:`operation_boundary` so callers only
      ever see :class:`ServiceError` subclasses.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - UoW factories are injectable so tests and worker threads can bind their
      own sessions.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(
        self,
        *,
        uow_factory: Callable[[], UnitOfWork] | None = None,
        ro_uow_factory: Callable[[], UnitOfWork] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the base service.

        :param uow_factory: Builds read-write units of work.
        :type uow_factory: Callable[[], UnitOfWork] | None
        :param ro_uow_factory: Builds read-only units of work.
        :type ro_uow_factory: Callable[[], UnitOfWork] | None
        :param logger: Logger used for operation failures.
        :type logger: logging.Logger | None
        """
        self._uow_factory = uow_factory
        self._ro_uow_factory = ro_uow_factory
        self.logger = logger or logging.getLogger(type(self).__module__)

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> UnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: UnitOfWork
        """
        if self._uow_factory is not None:
            return self._uow_factory()
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> UnitOfWork:
        """
        Create a read-only Unit of Work at :attr:`DEFAULT_READ_ISOLATION`.

        :returns: Read-only UoW instance.
        :rtype: UnitOfWork
        """
        if self._ro_uow_factory is not None:
            return self._ro_uow_factory()
        return SQLAlchemyReadOnlyUnitOfWork(isolation_level=self.DEFAULT_READ_ISOLATION)

    # -------------------------- Error handling ------------------------------

    @contextmanager
    def operation_boundary(self, operation: str) -> Iterator[None]:
        """
        Normalize failures escaping a public operation.

        :class:`ServiceError` subclasses pass through untouched. Anything else
        is logged with its traceback and replaced by
        :class:`OperationFailedError` chained to the original exception.

        :param operation: Public operation name used in logs and the message.
        :type operation: str
        :raises OperationFailedError: On any non-service failure.
        """
        try:
            yield
        except ServiceError:
            raise
        except Exception as exc:
            self.logger.error(
                "Failed to execute %s method: %s",
                operation,
                exc,
                exc_info=True,
                extra={"operation": operation},
            )
            raise OperationFailedError(operation) from exc
