"""
clipstore.config
Configuration and settings management for the clipboard record store.
Overview:
- Provides Pydantic-based settings classes for the store and its logging.
- Each settings class inherits from FactoryBaseSettings and supports environment variable
    overrides via Field aliases.
Contents:
- Imports:
    - AppEnv / APP_ENV / APP_ROOT: Environment detection and app-data directory resolution.
    - FactoryBaseSettings: Base settings class with factory pattern support.
    - get_settings: Factory function for retrieving settings instances (exported).
- Settings Classes:
    - StoreSettings:
        Location of the SQLite file, search and retention tuning, highlight delimiters
        and SQL echo. Provides database_path and database_url properties.
    - LoggingSettings:
        Log level, optional JSON-lines log file and the number of archived log files kept.
Design Notes:
- All settings classes use Pydantic Field with aliases to support environment variable
    configuration (e.g., CLIPSTORE_DATA_DIR, CLIPSTORE_SEARCH_LIMIT).
- Default values are provided for all fields enabling zero-configuration startup.
- data_dir defaults to None and is resolved through AppEnv.app_data_dir() only when the
    database path is requested, so a missing home directory surfaces at store
    initialization instead of at import.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field

from clipstore.config.base import APP_ENV, APP_ROOT, AppEnv  # noqa: F401
from clipstore.config.factory import FactoryBaseSettings
from clipstore.config.factory import get_settings  # noqa: F401  This is used externally
from clipstore.constants import (
    DEFAULT_RETENTION_LIMIT,
    DEFAULT_SEARCH_LIMIT,
    EVICTION_SLACK,
    HIGHLIGHT_CLOSE,
    HIGHLIGHT_OPEN,
    SQLITE_FILE,
)


class StoreSettings(FactoryBaseSettings):
    """
    Record store configuration settings.
    """

    data_dir: Optional[Path] = Field(
        default=None,
        alias="CLIPSTORE_DATA_DIR",
        description="Directory holding the SQLite file. Defaults to the platform app-data directory.",
    )
    file_name: str = Field(
        default=SQLITE_FILE,
        alias="CLIPSTORE_DB_FILE",
        description="File name of the SQLite database.",
    )
    search_limit: int = Field(
        default=DEFAULT_SEARCH_LIMIT,
        ge=0,
        alias="CLIPSTORE_SEARCH_LIMIT",
        description="Maximum number of hits returned by a search without an explicit limit.",
    )
    retention_limit: int = Field(
        default=DEFAULT_RETENTION_LIMIT,
        ge=0,
        alias="CLIPSTORE_RETENTION_LIMIT",
        description="Number of records kept when eviction runs without an explicit limit.",
    )
    eviction_slack: int = Field(
        default=EVICTION_SLACK,
        ge=0,
        alias="CLIPSTORE_EVICTION_SLACK",
        description="Excess over the retention limit required before eviction deletes anything.",
    )
    highlight_open: str = Field(
        default=HIGHLIGHT_OPEN,
        alias="CLIPSTORE_HIGHLIGHT_OPEN",
        description="Delimiter placed before each search match.",
    )
    highlight_close: str = Field(
        default=HIGHLIGHT_CLOSE,
        alias="CLIPSTORE_HIGHLIGHT_CLOSE",
        description="Delimiter placed after each search match.",
    )
    echo_sql: bool = Field(
        default=False,
        alias="CLIPSTORE_ECHO_SQL",
        description="Log every SQL statement issued by the engine.",
    )

    @property
    def database_path(self) -> Path:
        """Full path of the SQLite file, resolving the app-data directory if needed."""
        data_dir = self.data_dir if self.data_dir is not None else AppEnv.app_data_dir()
        return Path(data_dir).expanduser() / self.file_name

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL of the SQLite file."""
        return f"sqlite:///{self.database_path.as_posix()}"


class LoggingSettings(FactoryBaseSettings):
    """
    Logging configuration settings.
    """

    log_level: str = Field(
        default="info",
        alias="CLIPSTORE_LOG_LEVEL",
        description="Log level for the clipstore loggers.",
    )
    log_file: Optional[Path] = Field(
        default=None,
        alias="CLIPSTORE_LOG_FILE",
        description="JSON-lines log file. Console only when unset.",
    )
    archive_days: int = Field(
        default=10,
        ge=0,
        alias="CLIPSTORE_LOG_ARCHIVE_DAYS",
        description="Number of archived log files to keep.",
    )


__all__ = [
    "APP_ENV",
    "APP_ROOT",
    "AppEnv",
    "FactoryBaseSettings",
    "LoggingSettings",
    "StoreSettings",
    "get_settings",
]
