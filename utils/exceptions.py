"""
utils/exceptions.py
-------------------
Error types shared by the storage and catalog layers.
"""


class CatalogError(Exception):
    """Base class for every error raised by this project."""


class EntityNotFoundError(CatalogError):
    """Requested id is absent from a collection."""

    def __init__(self, collection: str, entity_id: str):
        self.collection = collection
        self.entity_id = entity_id
        super().__init__(f"Cannot find entity with id {entity_id!r} in {collection!r}")


class StorageError(CatalogError):
    """The underlying key-value store is unreachable or holds corrupt data."""
