"""Workbook import and export against the record store.

Import flow:
1) a workbook reader parses the file into row records
2) locations, campers and items are reconciled in that order
3) each row folds into an :class:`ImportResult` as inserted, skipped or errored
"""

from __future__ import annotations

from .engine import import_workbook, reconcile_workbook
from .export import export_year, snapshot_year
from .outcome import (
    Errored,
    ExportResult,
    ImportResult,
    Inserted,
    RowOutcome,
    Skipped,
    SkipReason,
)

__all__ = [
    "Errored",
    "ExportResult",
    "ImportResult",
    "Inserted",
    "RowOutcome",
    "SkipReason",
    "Skipped",
    "export_year",
    "import_workbook",
    "reconcile_workbook",
    "snapshot_year",
]
