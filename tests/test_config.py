import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from clipstore.config import AppEnv, LoggingSettings, StoreSettings, get_settings


# region StoreSettings


def test_store_settings_defaults():
    settings = StoreSettings()
    assert settings.data_dir is None
    assert settings.file_name == "data.sqlite"
    assert settings.search_limit == 300
    assert settings.retention_limit == 1000
    assert settings.eviction_slack == 50
    assert settings.highlight_open == "<mark>"
    assert settings.highlight_close == "</mark>"
    assert settings.echo_sql is False


def test_store_settings_env_overrides(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("CLIPSTORE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CLIPSTORE_SEARCH_LIMIT", "25")
    monkeypatch.setenv("CLIPSTORE_EVICTION_SLACK", "5")
    settings = StoreSettings()
    assert settings.data_dir == tmp_path
    assert settings.search_limit == 25
    assert settings.eviction_slack == 5


def test_store_settings_init_kwargs_win_over_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("CLIPSTORE_SEARCH_LIMIT", "25")
    assert StoreSettings(search_limit=7).search_limit == 7


def test_store_settings_rejects_negative_limits(monkeypatch):
    monkeypatch.setenv("CLIPSTORE_SEARCH_LIMIT", "-1")
    with pytest.raises(ValidationError):
        StoreSettings()


def test_database_path_and_url(tmp_path: Path):
    settings = StoreSettings(data_dir=tmp_path, file_name="clips.sqlite")
    assert settings.database_path == tmp_path / "clips.sqlite"
    assert settings.database_url == f"sqlite:///{(tmp_path / 'clips.sqlite').as_posix()}"


def test_database_path_falls_back_to_app_data_dir(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("CLIPSTORE_HOME", str(tmp_path / "home"))
    settings = StoreSettings()
    assert settings.database_path == (tmp_path / "home").resolve() / "data.sqlite"


def test_get_settings_is_cached():
    assert get_settings(LoggingSettings) is get_settings(LoggingSettings)


def test_logging_settings_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("CLIPSTORE_LOG_LEVEL", "debug")
    monkeypatch.setenv("CLIPSTORE_LOG_FILE", str(tmp_path / "clipstore.jsonl"))
    settings = LoggingSettings()
    assert settings.log_level == "debug"
    assert settings.log_file == tmp_path / "clipstore.jsonl"
    assert settings.archive_days == 10


# endregion
# region AppEnv


def test_app_data_dir_xdg(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    assert AppEnv.app_data_dir() == (tmp_path / "clipstore").resolve()


def test_app_data_dir_linux_default(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.delenv("XDG_DATA_HOME", raising=False)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert AppEnv.app_data_dir() == (tmp_path / ".local" / "share" / "clipstore").resolve()


def test_app_data_dir_macos(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(sys, "platform", "darwin")
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert (
        AppEnv.app_data_dir()
        == (tmp_path / "Library" / "Application Support" / "clipstore").resolve()
    )


def test_app_data_dir_override(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("CLIPSTORE_HOME", str(tmp_path))
    assert AppEnv.app_data_dir() == tmp_path.resolve()


@pytest.mark.parametrize("env", ["prod", "docker", "dev"])
def test_environment_from_variable(monkeypatch, env):
    monkeypatch.setenv("CLIPSTORE_ENV", env)
    assert AppEnv.environment() == env


@pytest.mark.parametrize("value", [None, "staging", ""])
def test_environment_defaults_to_dev(monkeypatch, value):
    if value is None:
        monkeypatch.delenv("CLIPSTORE_ENV", raising=False)
    else:
        monkeypatch.setenv("CLIPSTORE_ENV", value)
    assert AppEnv.environment() == "dev"


# endregion
