"""
clipstore.errors

Exception hierarchy for the record store. Storage engine failures are
wrapped in one of these types so callers never branch on SQLAlchemy or
SQLite specifics.
"""

__all__ = [
    "ClipStoreError",
    "StoreInitError",
    "StoreWriteError",
    "StoreReadError",
    "NotFound",
]


class ClipStoreError(Exception):
    """Root exception for all clipstore errors."""


class StoreInitError(ClipStoreError):
    """Raised when the store file or schema cannot be set up, or the store is used before it is."""


class StoreWriteError(ClipStoreError):
    """Raised when an insert, update or delete fails."""


class StoreReadError(ClipStoreError):
    """Raised when a query fails."""


class NotFound(ClipStoreError):
    """Raised when no record matches the requested id or hash."""
