from bookshop.services.purchases.dto import OwnedBookOut, PurchaseIn, TransactionOut
from bookshop.services.purchases.service import PurchaseService

__all__ = ["OwnedBookOut", "PurchaseIn", "PurchaseService", "TransactionOut"]
