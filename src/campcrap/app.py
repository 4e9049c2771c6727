"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from logging import getLogger
from typing import TYPE_CHECKING

from campcrap.adapters.openpyxl import PathFileChannel, read_workbook, write_workbook
from campcrap.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyInventoryUnitOfWork,
    is_started,
    startup,
)
from campcrap.config import get_event_config, validate_year
from campcrap.domain.model import ItemUpdate
from campcrap.domain.ports.unit_of_work import InventoryUnitOfWork
from campcrap.domain.reconciliation import export_year as export_year_snapshot
from campcrap.domain.reconciliation import import_workbook as import_into_store
from campcrap.domain.records import RecordStore
from campcrap.domain.tag_lookup import TagLookup

if TYPE_CHECKING:
    from pathlib import Path

    from campcrap.domain.ports.devices import PhotoCapture
    from campcrap.domain.ports.workbook import WorkbookReader, WorkbookWriter
    from campcrap.domain.reconciliation import ExportResult, ImportResult
    from campcrap.domain.tag_lookup import TagLookupResult

UnitOfWorkFactory = Callable[[], InventoryUnitOfWork]

EXPORT_STAMP_FORMAT = "%Y%m%d_%H%M%S"


log = getLogger(__name__)


def build_record_store(unit_of_work_factory: UnitOfWorkFactory | None = None) -> RecordStore:
    """Return a record store, starting the SQLAlchemy adapter when none is given."""

    if unit_of_work_factory is not None:
        return RecordStore(unit_of_work_factory)
    if not is_started():
        startup()
    return RecordStore(SqlAlchemyInventoryUnitOfWork)


def _resolve_year(year: str | None) -> str:
    return validate_year(year) if year else get_event_config().current_year


def prepare_year(
    year: str | None = None,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> tuple[int, int]:
    """Make sure the infrastructure person and "Camp Storage" exist for ``year``."""

    effective_year = _resolve_year(year)
    store = build_record_store(unit_of_work_factory)
    infrastructure_id = store.ensure_infrastructure_person(effective_year)
    storage_id = store.ensure_default_storage_location(effective_year)
    log.info(
        "Year %s ready: infrastructure person %s, storage location %s",
        effective_year,
        infrastructure_id,
        storage_id,
    )
    return infrastructure_id, storage_id


def export_year(
    *,
    year: str | None = None,
    output: Path | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    writer: WorkbookWriter = write_workbook,
    now: datetime | None = None,
) -> ExportResult:
    """Write ``year`` to ``output`` or a time-stamped file in the export directory."""

    config = get_event_config()
    effective_year = validate_year(year) if year else config.current_year
    if output is None:
        stamp = (now or datetime.now()).strftime(EXPORT_STAMP_FORMAT)  # noqa: DTZ005
        output = config.export_dir / config.export_filename(effective_year, stamp)

    store = build_record_store(unit_of_work_factory)
    result = export_year_snapshot(store, writer, PathFileChannel(output), effective_year)
    log.info(result.summary())
    return result


def import_workbook(
    path: Path,
    *,
    year: str | None = None,
    skip_existing: bool = True,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    reader: WorkbookReader = read_workbook,
) -> ImportResult:
    """Import the workbook at ``path`` into ``year`` (the current year by default)."""

    effective_year = _resolve_year(year)
    store = build_record_store(unit_of_work_factory)
    log.info("Starting import of %s into %s", path, effective_year)
    return import_into_store(
        reader,
        PathFileChannel(path),
        store,
        effective_year,
        skip_existing=skip_existing,
    )


def lookup_tag(
    tag_id: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> TagLookupResult:
    return TagLookup(build_record_store(unit_of_work_factory)).lookup(tag_id)


def assign_tag(
    item_id: int,
    tag_id: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> bool:
    return TagLookup(build_record_store(unit_of_work_factory)).assign(item_id, tag_id)


def relocate_item(
    item_id: int,
    location_id: int,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> bool:
    return TagLookup(build_record_store(unit_of_work_factory)).relocate(item_id, location_id)


def attach_item_photo(
    item_id: int,
    camera: PhotoCapture,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> bool:
    """Capture a photo and store its path on the item; ``False`` if cancelled or missing."""

    photo_path = camera.capture()
    if not photo_path:
        log.info("Photo capture cancelled for item %s", item_id)
        return False
    store = build_record_store(unit_of_work_factory)
    return store.update_item(item_id, ItemUpdate(photo_path=photo_path))
