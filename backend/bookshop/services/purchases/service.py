"""
PurchaseService
===============

Moves money from a user's balance into the ledger in exchange for a book.

A purchase is one unit of work: the balance debit, the ``Transaction`` entry
and the ``UserBook`` grant are committed together or not at all.
"""

from __future__ import annotations

from bookshop.models.base import utcnow
from bookshop.models.ledger import Transaction, TransactionAction, UserBook
from bookshop.services._shared.base import BaseService
from bookshop.services._shared.errors import InsufficientBalanceError, NotFoundError
from bookshop.services.purchases.dto import OwnedBookOut, PurchaseIn, TransactionOut
from bookshop.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


class PurchaseService(BaseService):
    """
    Application service for buying books and reading the resulting ledger.
    """

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def buy(self, user_id: int, book_id: int) -> bool:
        """
        Buy ``book_id`` for ``user_id``.

        The user row is locked before the balance is read, and the debit is a
        guarded ``UPDATE``; two concurrent purchases can never overdraw the
        account.

        :param user_id: Buyer.
        :type user_id: int
        :param book_id: Book to buy.
        :type book_id: int
        :returns: ``True`` once the purchase is committed.
        :rtype: bool
        :raises NotFoundError: If the user, then the book, does not exist.
        :raises InsufficientBalanceError: If the balance is below the price.
        :raises OperationFailedError: On any other failure (nothing is persisted).
        """
        dto = PurchaseIn(user_id=user_id, book_id=book_id)
        with self.operation_boundary("buy"):
            return self.rw_uow().execute_in_transaction(lambda uow: self._buy(uow, dto))

    def _buy(self, uow: SQLAlchemyUnitOfWork, dto: PurchaseIn) -> bool:
        user = uow.users.get_for_update(dto.user_id)
        if user is None:
            raise NotFoundError("User", dto.user_id)

        book = uow.books.get(dto.book_id)
        if book is None:
            raise NotFoundError("Book", dto.book_id)

        price = book.price
        if user.balance < price:
            raise InsufficientBalanceError()

        if not uow.users.debit_balance(user, price):
            # Another purchase spent the balance since it was read
            raise InsufficientBalanceError()

        now = utcnow()
        uow.transactions.add(
            Transaction(
                user_id=user.id,
                book_id=book.id,
                action=TransactionAction.BUY,
                amount=price,
                created_at=now,
            )
        )
        uow.user_books.add(UserBook(user_id=user.id, book_id=book.id, created_at=now))

        self.logger.info(
            "Book purchased",
            extra={"user_id": user.id, "book_id": book.id, "operation": "buy"},
        )
        return True

    # --------------------------------------------------------------------- #
    # Ledger views
    # --------------------------------------------------------------------- #

    def transactions(self, user_id: int) -> list[TransactionOut]:
        """
        List the ledger entries of a user, oldest first.

        :raises NotFoundError: If the user does not exist.
        """
        with self.operation_boundary("transactions"):
            with self.ro_uow() as uow:
                if uow.users.get(user_id) is None:
                    raise NotFoundError("User", user_id)
                return [
                    TransactionOut(
                        id=t.id,
                        book_id=t.book_id,
                        action=TransactionAction(t.action).value,
                        amount=t.amount,
                        created_at=t.created_at,
                    )
                    for t in uow.transactions.list_for_user(user_id)
                ]

    def owned_books(self, user_id: int) -> list[OwnedBookOut]:
        """
        List the books a user owns, one entry per purchase.

        :raises NotFoundError: If the user does not exist.
        """
        with self.operation_boundary("ownedBooks"):
            with self.ro_uow() as uow:
                if uow.users.get(user_id) is None:
                    raise NotFoundError("User", user_id)
                owned: list[OwnedBookOut] = []
                titles: dict[int, str | None] = {}
                for grant in uow.user_books.list_for_user(user_id):
                    if grant.book_id not in titles:
                        book = uow.books.get(grant.book_id)
                        titles[grant.book_id] = book.title if book is not None else None
                    owned.append(
                        OwnedBookOut(
                            book_id=grant.book_id,
                            title=titles[grant.book_id],
                            acquired_at=grant.created_at,
                        )
                    )
                return owned
