from __future__ import annotations

import logging
from pathlib import Path

import pytest

from campcrap.config import (
    DEFAULT_EVENT_YEAR,
    ConfigurationError,
    StorageConfig,
    get_database_config,
    get_event_config,
    get_storage_config,
    optional_env_var,
    resolve_log_level,
    validate_year,
)


def test_optional_env_var_strips_and_treats_blank_as_unset(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  2024 ")
    monkeypatch.setenv("BLANK_VAR", "")

    assert optional_env_var("EXAMPLE_VAR") == "2024"
    assert optional_env_var("BLANK_VAR") is None


def test_storage_config_uses_data_dir_env(campcrap_env: Path) -> None:
    config = get_storage_config()

    assert config.resolve_data_dir() == campcrap_env.resolve()
    assert config.default_export_dir() == campcrap_env.resolve() / "exports"


def test_storage_config_creates_database_directory(tmp_path: Path) -> None:
    config = StorageConfig(data_dir=tmp_path / "nested" / "dir")

    path = config.database_path()

    assert path.parent.is_dir()
    assert config.database_uri() == f"sqlite+pysqlite:///{path}"


def test_database_uri_env_overrides_storage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///elsewhere.db")

    assert get_database_config().uri == "sqlite+pysqlite:///elsewhere.db"


def test_database_uri_defaults_to_data_dir(
    monkeypatch: pytest.MonkeyPatch, campcrap_env: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI")

    uri = get_database_config().uri

    assert uri.startswith("sqlite+pysqlite:///")
    assert uri.endswith(str(campcrap_env.resolve() / "campcrap.db"))


def test_event_config_defaults(campcrap_env: Path) -> None:
    config = get_event_config()

    assert config.current_year == DEFAULT_EVENT_YEAR
    assert config.export_dir == campcrap_env.resolve() / "exports"
    assert config.export_filename("2024", "20240101_120000") == "CampCrap_2024_20240101_120000.xlsx"


def test_event_config_reads_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CAMPCRAP_YEAR", "2026")
    monkeypatch.setenv("CAMPCRAP_EXPORT_DIR", str(tmp_path / "backups"))

    config = get_event_config()

    assert config.current_year == "2026"
    assert config.export_dir == Path(tmp_path / "backups")


@pytest.mark.parametrize("value", ["25", "20x5", "", "20255"])
def test_validate_year_rejects_malformed_years(value: str) -> None:
    with pytest.raises(ConfigurationError):
        validate_year(value)


def test_validate_year_strips() -> None:
    assert validate_year(" 2025 ") == "2025"


def test_resolve_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_log_level(None) == logging.INFO
    assert resolve_log_level("debug") == logging.DEBUG
    assert resolve_log_level(logging.WARNING) == logging.WARNING

    monkeypatch.setenv("CAMPCRAP_LOG_LEVEL", "error")
    assert resolve_log_level(None) == logging.ERROR

    with pytest.raises(ConfigurationError):
        resolve_log_level("chatty")
