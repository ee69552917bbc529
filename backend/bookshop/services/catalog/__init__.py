from bookshop.services.catalog.dto import BookOut
from bookshop.services.catalog.service import CatalogService

__all__ = ["BookOut", "CatalogService"]
