"""
clipstore.services
Service layer of the record store.
"""

from .record_store import RecordStore  # noqa: F401

__all__ = ["RecordStore"]
