"""SQLAlchemy adapter package for the CampCrap record store."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyItemRepository,
    SqlAlchemyLocationRepository,
    SqlAlchemyPersonRepository,
    storage_errors,
)
from .unit_of_work import (
    SqlAlchemyInventoryUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyInventoryUnitOfWork",
    "SqlAlchemyItemRepository",
    "SqlAlchemyLocationRepository",
    "SqlAlchemyPersonRepository",
    "StartupError",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
    "storage_errors",
]
