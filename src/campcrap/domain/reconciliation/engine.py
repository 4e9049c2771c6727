"""Merge parsed workbook rows into the record store.

Rows are reconciled in three passes (locations, campers, items) so that item
rows can refer to owners and locations imported earlier in the same run.
Names are resolved through transient name -> id indexes built from the store
at the start of each pass and extended as rows are inserted.

Each row is committed on its own. A failing row is recorded and the run goes
on; nothing already written is rolled back.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from campcrap.domain.errors import WorkbookError
from campcrap.domain.model import INFRASTRUCTURE_NAME, EntityKind, RemovalStatus

from .outcome import Errored, ImportResult, Inserted, Skipped, SkipReason

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from campcrap.domain.model import Person
    from campcrap.domain.ports.devices import FileChannel
    from campcrap.domain.ports.workbook import (
        CamperRow,
        ItemRow,
        LocationRow,
        ParsedWorkbook,
        SheetRow,
        WorkbookReader,
    )
    from campcrap.domain.records import RecordStore

    from .outcome import RowOutcome


log = getLogger(__name__)


def _first_ids[TKey](pairs: Sequence[tuple[TKey, int | None]]) -> dict[TKey, int]:
    # Listings are name-ordered, so the first id seen for a key wins.
    index: dict[TKey, int] = {}
    for key, entity_id in pairs:
        if entity_id is not None:
            index.setdefault(key, entity_id)
    return index


def _guarded[TRow: SheetRow](
    kind: EntityKind,
    row: TRow,
    handle: Callable[[TRow], RowOutcome],
) -> RowOutcome:
    if not row.name:
        return Skipped(kind, row.row_number, SkipReason.BLANK_NAME)
    try:
        return handle(row)
    except Exception as exc:  # noqa: BLE001
        return Errored(kind, row.sheet, row.row_number, str(exc) or type(exc).__name__)


class _Reconciliation:
    def __init__(self, store: RecordStore, target_year: str, *, skip_existing: bool) -> None:
        self.store = store
        self.year = target_year
        self.skip_existing = skip_existing
        self.result = ImportResult()

    def _record(self, outcome: RowOutcome) -> None:
        if isinstance(outcome, Errored):
            log.warning("Import error: %s", outcome.describe())
        self.result.record(outcome)

    def _people(self) -> list[Person]:
        return self.store.list_people(self.year)

    def _location_ids(self) -> dict[str, int]:
        return _first_ids(
            [(location.name, location.id) for location in self.store.list_locations(self.year)]
        )

    def _record_failures(self, parsed: ParsedWorkbook, kind: EntityKind) -> None:
        for failure in parsed.failures_for(kind):
            self._record(Errored(kind, failure.sheet, failure.row_number, failure.message))

    # Locations ---------------------------------------------------------------

    def locations(self, rows: Sequence[LocationRow]) -> None:
        known = self._location_ids()

        def handle(row: LocationRow) -> RowOutcome:
            if row.name in known and self.skip_existing:
                return Skipped(EntityKind.LOCATION, row.row_number, SkipReason.EXISTING)
            location_id = self.store.create_location(
                name=row.name, year=self.year, description=row.description
            )
            known.setdefault(row.name, location_id)
            return Inserted(EntityKind.LOCATION, row.row_number, location_id)

        for row in rows:
            self._record(_guarded(EntityKind.LOCATION, row, handle))

    # Campers -----------------------------------------------------------------

    def campers(self, rows: Sequence[CamperRow]) -> None:
        known = _first_ids(
            [((person.name, person.email), person.id) for person in self._people()]
        )
        has_infrastructure = self.store.get_infrastructure_person(self.year) is not None

        def handle(row: CamperRow) -> RowOutcome:
            nonlocal has_infrastructure
            key = (row.name, row.email)
            if key in known and self.skip_existing:
                return Skipped(EntityKind.CAMPER, row.row_number, SkipReason.EXISTING)
            # Only the first infrastructure row of a year keeps the flag.
            is_infrastructure = row.name == INFRASTRUCTURE_NAME and not has_infrastructure
            person_id = self.store.create_person(
                name=row.name,
                year=self.year,
                email=row.email,
                real_name=row.real_name,
                entry_date=row.entry_date,
                exit_date=row.exit_date,
                camp_name=row.camp_name,
                notes=row.notes,
                skipping=row.skipping,
                is_infrastructure=is_infrastructure,
                years_attended=row.years_attended,
                has_ticket=row.has_ticket,
                paid_dues=row.paid_dues,
                photo_path=row.photo_path or None,
            )
            has_infrastructure = has_infrastructure or is_infrastructure
            known.setdefault(key, person_id)
            return Inserted(EntityKind.CAMPER, row.row_number, person_id)

        for row in rows:
            self._record(_guarded(EntityKind.CAMPER, row, handle))

    # Items -------------------------------------------------------------------

    def items(self, rows: Sequence[ItemRow]) -> None:
        owners = _first_ids([(person.name, person.id) for person in self._people()])
        locations = self._location_ids()
        known = {
            (view.item.name, view.item.owner_id, view.item.location_id)
            for view in self.store.list_items(self.year, include_removed=True)
        }

        def handle(row: ItemRow) -> RowOutcome:
            owner_id = owners.get(row.camper_name)
            location_id = locations.get(row.location_name)
            if owner_id is None or location_id is None:
                missing: list[str] = []
                if owner_id is None:
                    missing.append(f"camper {row.camper_name!r}")
                if location_id is None:
                    missing.append(f"location {row.location_name!r}")
                return Errored(
                    EntityKind.ITEM,
                    row.sheet,
                    row.row_number,
                    "could not find " + " or ".join(missing),
                )
            key = (row.name, owner_id, location_id)
            if key in known and self.skip_existing:
                return Skipped(EntityKind.ITEM, row.row_number, SkipReason.EXISTING)
            status = RemovalStatus.parse(row.removal_status)
            item_id = self.store.create_item(
                name=row.name,
                year=self.year,
                owner_id=owner_id,
                location_id=location_id,
                description=row.description,
                photo_path=row.photo_path or None,
            )
            if status is not RemovalStatus.ACTIVE:
                self.store.set_removal_status(item_id, status)
            known.add(key)
            return Inserted(EntityKind.ITEM, row.row_number, item_id)

        for row in rows:
            self._record(_guarded(EntityKind.ITEM, row, handle))

    def run(self, parsed: ParsedWorkbook) -> ImportResult:
        self._record_failures(parsed, EntityKind.LOCATION)
        self.locations(parsed.locations)
        self._record_failures(parsed, EntityKind.CAMPER)
        self.campers(parsed.campers)
        self._record_failures(parsed, EntityKind.ITEM)
        self.items(parsed.items)
        return self.result


def reconcile_workbook(
    parsed: ParsedWorkbook,
    store: RecordStore,
    target_year: str,
    *,
    skip_existing: bool = True,
) -> ImportResult:
    """Insert the rows of ``parsed`` into ``target_year``.

    With ``skip_existing`` a row matching an existing record (locations by
    name, campers by name and email, items by name, owner and location) is
    counted as skipped. Without it every row is inserted; nothing is ever
    overwritten.
    """

    log.info(
        "Reconciling workbook into %s: %s locations, %s campers, %s items (skip_existing=%s)",
        target_year,
        len(parsed.locations),
        len(parsed.campers),
        len(parsed.items),
        skip_existing,
    )
    result = _Reconciliation(store, target_year, skip_existing=skip_existing).run(parsed)
    log.info(
        "Finished import into %s: imported=%s, skipped=%s, errors=%s",
        target_year,
        result.total_imported,
        result.total_skipped,
        len(result.errors),
    )
    return result


def import_workbook(
    reader: WorkbookReader,
    source: FileChannel,
    store: RecordStore,
    target_year: str,
    *,
    skip_existing: bool = True,
) -> ImportResult:
    """Parse ``source`` and reconcile it; an unreadable workbook yields a failed result."""

    try:
        parsed = reader(source)
    except WorkbookError as exc:
        log.warning("Import aborted: %s", exc)
        return ImportResult.failed(str(exc))
    return reconcile_workbook(parsed, store, target_year, skip_existing=skip_existing)
