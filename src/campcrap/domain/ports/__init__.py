"""Domain port definitions for adapters."""

from __future__ import annotations

from .devices import FileChannel, PhotoCapture, TagScanner
from .persistence import ItemRepository, LocationRepository, PersonRepository, Repository
from .unit_of_work import (
    InventoryRepositories,
    InventoryUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)
from .workbook import (
    CamperRow,
    ItemRow,
    LocationRow,
    ParsedWorkbook,
    RowFailure,
    SheetRow,
    WorkbookReader,
    WorkbookWriter,
    YearSnapshot,
)

__all__ = [
    "CamperRow",
    "FileChannel",
    "InventoryRepositories",
    "InventoryUnitOfWork",
    "ItemRepository",
    "ItemRow",
    "LocationRepository",
    "LocationRow",
    "ParsedWorkbook",
    "PersonRepository",
    "PhotoCapture",
    "Repository",
    "RepositoryCollection",
    "RowFailure",
    "SheetRow",
    "TagScanner",
    "UnitOfWork",
    "WorkbookReader",
    "WorkbookWriter",
    "YearSnapshot",
]
