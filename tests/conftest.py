import logging
from pathlib import Path

import pytest

from clipstore.config import StoreSettings
from clipstore.services import RecordStore

CLIPSTORE_ENV_VARS = [
    "CLIPSTORE_ENV",
    "CLIPSTORE_HOME",
    "CLIPSTORE_DATA_DIR",
    "CLIPSTORE_DB_FILE",
    "CLIPSTORE_SEARCH_LIMIT",
    "CLIPSTORE_RETENTION_LIMIT",
    "CLIPSTORE_EVICTION_SLACK",
    "CLIPSTORE_HIGHLIGHT_OPEN",
    "CLIPSTORE_HIGHLIGHT_CLOSE",
    "CLIPSTORE_ECHO_SQL",
    "CLIPSTORE_LOG_LEVEL",
    "CLIPSTORE_LOG_FILE",
    "CLIPSTORE_LOG_ARCHIVE_DAYS",
]


class FakeClock:
    """Deterministic millisecond clock; advances only when told to."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int = 1000) -> int:
        self.now += millis
        return self.now


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of the settings under test."""
    for key in CLIPSTORE_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_clipstore_logger():
    """Undo any dictConfig applied by a test."""
    yield
    logger = logging.getLogger("clipstore")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "appdata"


@pytest.fixture
def settings(data_dir: Path) -> StoreSettings:
    return StoreSettings(data_dir=data_dir)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(settings: StoreSettings, clock: FakeClock) -> RecordStore:
    """An initialized store backed by a file in a temporary directory."""
    store = RecordStore(settings, clock=clock)
    store.initialize()
    yield store
    store.close()
