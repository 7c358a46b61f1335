"""Service layer for docstore."""
from docstore.services.factory import StoreFactory, get_store_factory

__all__ = ["StoreFactory", "get_store_factory"]
