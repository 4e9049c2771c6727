"""Event-year configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var
from .errors import ConfigurationError
from .storage import StorageConfig, get_storage_config

DEFAULT_EVENT_YEAR: Final[str] = "2025"
EXPORT_FILENAME_PREFIX: Final[str] = "CampCrap"


@dataclass(frozen=True, slots=True)
class EventConfig:
    current_year: str
    export_dir: Path

    def export_filename(self, year: str, stamp: str) -> str:
        return f"{EXPORT_FILENAME_PREFIX}_{year}_{stamp}.xlsx"


def validate_year(value: str) -> str:
    """Return ``value`` stripped, or raise if it is not a four-digit year."""

    year = value.strip()
    if len(year) != 4 or not year.isdigit():
        raise ConfigurationError(f"Invalid event year: {value!r}")
    return year


def get_event_config(*, storage: StorageConfig | None = None) -> EventConfig:
    year = optional_env_var("CAMPCRAP_YEAR") or DEFAULT_EVENT_YEAR
    export_dir = optional_env_var("CAMPCRAP_EXPORT_DIR")
    storage_config = storage or get_storage_config()
    return EventConfig(
        current_year=validate_year(year),
        export_dir=Path(export_dir) if export_dir else storage_config.default_export_dir(),
    )
