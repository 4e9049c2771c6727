"""Serialize one year of the record store through a workbook writer."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from campcrap.domain.ports.workbook import YearSnapshot

from .outcome import ExportResult

if TYPE_CHECKING:
    from campcrap.domain.ports.devices import FileChannel
    from campcrap.domain.ports.workbook import WorkbookWriter
    from campcrap.domain.records import RecordStore


log = getLogger(__name__)


def snapshot_year(store: RecordStore, year: str) -> YearSnapshot:
    """Collect everything exported for ``year``, infrastructure and removed items included."""

    return YearSnapshot(
        year=year,
        people=store.list_people(year, include_infrastructure=True),
        locations=store.list_locations(year),
        items=store.list_items(year, include_removed=True),
    )


def export_year(
    store: RecordStore,
    writer: WorkbookWriter,
    destination: FileChannel,
    year: str,
) -> ExportResult:
    snapshot = snapshot_year(store, year)
    log.info(
        "Exporting %s: %s campers, %s locations, %s items",
        year,
        len(snapshot.people),
        len(snapshot.locations),
        len(snapshot.items),
    )
    writer(snapshot, destination)
    return ExportResult(
        path=Path(destination.name),
        campers=len(snapshot.people),
        locations=len(snapshot.locations),
        items=len(snapshot.items),
    )
