"""
clipstore.logger

Logging setup for the record store.

configure_logging() applies a dictConfig with a plain console handler and, when a
log file is configured, a JSON-lines file handler (python-json-logger). On each
configuration the previous log file is archived once a day and only the newest
archives are kept.
"""

import logging
from datetime import datetime
from logging import Logger as T_Logger
from logging.config import dictConfig
from pathlib import Path
from typing import Optional

from pythonjsonlogger.json import JsonFormatter  # type: ignore # noqa F401

from clipstore.config import LoggingSettings, get_settings
from clipstore.constants import APP_NAME
from clipstore.utils import get_time

ARCHIVE_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def build_logging_config(settings: LoggingSettings) -> dict:
    """Build the dictConfig mapping for *settings*."""
    level = settings.log_level.upper()
    handlers = ["console"]
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
        },
        "loggers": {
            APP_NAME: {
                "handlers": handlers,
                "level": level,
                "propagate": False,
            },
        },
    }
    if settings.log_file is not None:
        config["handlers"]["file"] = {
            "class": "logging.FileHandler",
            "filename": str(settings.log_file),
            "formatter": "json",
            "level": level,
        }
        handlers.append("file")
    return config


def configure_logging(settings: Optional[LoggingSettings] = None) -> T_Logger:
    """
    Configure the clipstore logger tree and return its root logger.

    Args:
        settings: Logging settings; loaded through get_settings when omitted.

    Returns:
        The "clipstore" logger.
    """
    settings = settings or get_settings(LoggingSettings)
    if settings.log_file is not None:
        log_file = Path(settings.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        archive_daily_log_file(log_file)
        manage_logfile_archives(log_file, settings.archive_days)

    dictConfig(build_logging_config(settings))
    logger = logging.getLogger(APP_NAME)
    logger.getChild("SYSTEM").debug("Logger for %s initialized.", APP_NAME)
    return logger


def _archives(log_file: Path) -> list[Path]:
    return sorted(
        log_file.parent.glob(f"{log_file.stem}_*{log_file.suffix}"),
        key=lambda f: f.stat().st_mtime,
        reverse=True,
    )


def archive_daily_log_file(log_file: Path) -> Optional[Path]:
    """
    Archive *log_file* by renaming it with a timestamp, at most once per 24 hours.

    Returns:
        The archive path, or None when nothing was archived.
    """
    system_logger = logging.getLogger(APP_NAME).getChild("SYSTEM")
    current_time = get_time().replace(tzinfo=None)
    archive_files = _archives(log_file)
    if archive_files:
        latest_archive = archive_files[0]
        timestamp_str = latest_archive.stem.replace(f"{log_file.stem}_", "")
        try:
            timestamp = datetime.strptime(timestamp_str, ARCHIVE_TIMESTAMP_FORMAT)
        except ValueError:
            system_logger.warning(
                "Could not parse timestamp from archive file %s, skipping archiving.",
                latest_archive,
            )
            return None
        if (current_time - timestamp).total_seconds() < 24 * 3600:
            system_logger.debug(
                "Latest archive %s is less than 24 hours old, skipping archiving.",
                latest_archive,
            )
            return None

    if not log_file.exists():
        return None
    stamp = current_time.strftime(ARCHIVE_TIMESTAMP_FORMAT)
    archive_path = log_file.with_name(f"{log_file.stem}_{stamp}{log_file.suffix}")
    system_logger.debug("Archiving log file %s to %s", log_file, archive_path)
    log_file.rename(archive_path)
    return archive_path


def manage_logfile_archives(log_file: Path, days_to_keep: int = 10) -> list[Path]:
    """
    Delete all but the *days_to_keep* most recent archives of *log_file*.

    Returns:
        The deleted archive paths.
    """
    system_logger = logging.getLogger(APP_NAME).getChild("SYSTEM")
    archive_files = _archives(log_file)
    if len(archive_files) <= days_to_keep:
        system_logger.debug("No old archive files to delete.")
        return []
    deleted = archive_files[days_to_keep:]
    for archive_file in deleted:
        system_logger.debug("Deleting old archive file: %s", archive_file)
        archive_file.unlink()
    return deleted
