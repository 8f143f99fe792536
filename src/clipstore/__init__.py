"""
clipstore

Local persistence layer for clipboard history: a SQLite-backed record store with
content deduplication, bounded retention and highlighted substring search.

Usage::

    from clipstore import RecordStore, SearchQuery, StoreSettings

    with RecordStore(StoreSettings(data_dir="~/.clipstore")) as store:
        store.insert_or_touch("hello world")
        hits = store.search(SearchQuery(key="world"))
        store.evict_over_limit(1000)
"""

from . import constants  # noqa: F401
from .config import LoggingSettings, StoreSettings, get_settings
from .constants import DataType
from .errors import (
    ClipStoreError,
    NotFound,
    StoreInitError,
    StoreReadError,
    StoreWriteError,
)
from .logger import configure_logging
from .models import Record, RecordEntity, SearchHit, SearchQuery
from .services import RecordStore
from .utils import content_hash, highlight

__version__ = "0.1.0"

__all__ = [
    "ClipStoreError",
    "DataType",
    "LoggingSettings",
    "NotFound",
    "Record",
    "RecordEntity",
    "RecordStore",
    "SearchHit",
    "SearchQuery",
    "StoreInitError",
    "StoreReadError",
    "StoreSettings",
    "StoreWriteError",
    "configure_logging",
    "content_hash",
    "get_settings",
    "highlight",
]
