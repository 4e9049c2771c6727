"""Read and write CampCrap workbooks with openpyxl."""

from __future__ import annotations

from io import BytesIO
from logging import getLogger
from typing import TYPE_CHECKING

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from pydantic import ValidationError

from campcrap.domain.errors import WorkbookError
from campcrap.domain.model import EntityKind
from campcrap.domain.ports.workbook import ParsedWorkbook, RowFailure

from .layout import CAMPERS, ITEMS, LOCATIONS, WIDTH_UNITS_PER_CHAR, SheetLayout, layout_for_sheet
from .schema import CamperRowModel, ItemRowModel, LocationRowModel, SheetRowModel, is_blank_row

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from openpyxl.worksheet.worksheet import Worksheet

    from campcrap.domain.model import ItemView, Location, Person
    from campcrap.domain.ports.devices import FileChannel
    from campcrap.domain.ports.workbook import YearSnapshot

    type CellValue = str | int | None


log = getLogger(__name__)

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(fill_type="solid", start_color="D9D9D9", end_color="D9D9D9")

_ROW_MODELS: dict[EntityKind, type[SheetRowModel]] = {
    EntityKind.LOCATION: LocationRowModel,
    EntityKind.CAMPER: CamperRowModel,
    EntityKind.ITEM: ItemRowModel,
}


# Reading ---------------------------------------------------------------------


def read_workbook(source: FileChannel) -> ParsedWorkbook:
    """Parse every ``Campers_``/``Locations_``/``Items_`` sheet of ``source``.

    Rows are numbered as the spreadsheet numbers them, so the first data row
    is row 2. Fully empty rows are dropped. A workbook that cannot be opened
    raises :class:`WorkbookError` whatever openpyxl failed on; a single
    unparseable row becomes a :class:`RowFailure` instead.
    """

    try:
        with source.open_read() as stream:
            payload = BytesIO(stream.read())
        workbook = load_workbook(payload, read_only=True, data_only=True)
    except Exception as exc:
        raise WorkbookError(f"Could not open workbook {source.name}: {exc}") from exc

    parsed = ParsedWorkbook()
    try:
        for sheet_name in workbook.sheetnames:
            layout = layout_for_sheet(sheet_name)
            if layout is None:
                log.debug("Ignoring sheet %s", sheet_name)
                continue
            rows = workbook[sheet_name].iter_rows(min_row=2, values_only=True)
            _read_sheet(parsed, layout, sheet_name, rows)
    except Exception as exc:
        raise WorkbookError(f"Could not read workbook {source.name}: {exc}") from exc
    finally:
        workbook.close()

    log.info(
        "Parsed %s: %s locations, %s campers, %s items, %s bad rows",
        source.name,
        len(parsed.locations),
        len(parsed.campers),
        len(parsed.items),
        len(parsed.failures),
    )
    return parsed


def _read_sheet(
    parsed: ParsedWorkbook,
    layout: SheetLayout,
    sheet_name: str,
    rows: Iterable[tuple[object, ...]],
) -> None:
    model_type = _ROW_MODELS[layout.kind]
    for row_number, values in enumerate(rows, start=2):
        if is_blank_row(values):
            continue
        cells = dict(zip(layout.fields, values, strict=False))
        try:
            model = model_type.model_validate(cells)
        except ValidationError as exc:
            parsed.failures.append(
                RowFailure(layout.kind, sheet_name, row_number, _first_error(exc))
            )
            continue
        if isinstance(model, LocationRowModel):
            parsed.locations.append(model.to_row(sheet=sheet_name, row_number=row_number))
        elif isinstance(model, CamperRowModel):
            parsed.campers.append(model.to_row(sheet=sheet_name, row_number=row_number))
        elif isinstance(model, ItemRowModel):
            parsed.items.append(model.to_row(sheet=sheet_name, row_number=row_number))


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


# Writing ---------------------------------------------------------------------


def _flag(value: bool) -> str:  # noqa: FBT001
    return "TRUE" if value else "FALSE"


def _camper_values(person: Person) -> list[CellValue]:
    return [
        person.id,
        person.name,
        person.email,
        person.real_name,
        person.entry_date,
        person.exit_date,
        person.camp_name,
        person.notes,
        person.year,
        _flag(person.skipping),
        person.years_attended,
        _flag(person.has_ticket),
        _flag(person.paid_dues),
        person.photo_path or None,
    ]


def _location_values(location: Location) -> list[CellValue]:
    return [location.id, location.name, location.description, location.year]


def _item_values(view: ItemView) -> list[CellValue]:
    item = view.item
    return [
        item.id,
        item.name,
        item.description,
        item.owner_id,
        view.owner_name,
        item.location_id,
        view.location_name,
        item.photo_path or None,
        item.year,
        item.created_at.isoformat(),
        item.removal_status.value,
    ]


def _write_sheet(
    workbook: Workbook,
    layout: SheetLayout,
    year: str,
    rows: Sequence[list[CellValue]],
) -> None:
    worksheet: Worksheet = workbook.create_sheet(layout.sheet_name(year))
    worksheet.append(list(layout.headers))
    for cell in worksheet[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
    for row in rows:
        worksheet.append(row)
    for index, width in enumerate(layout.widths, start=1):
        worksheet.column_dimensions[get_column_letter(index)].width = width / WIDTH_UNITS_PER_CHAR


def write_workbook(snapshot: YearSnapshot, destination: FileChannel) -> None:
    """Write the three sheets for ``snapshot.year`` to ``destination``."""

    workbook = Workbook()
    default_sheet = workbook.active
    if default_sheet is not None:
        workbook.remove(default_sheet)

    _write_sheet(
        workbook, CAMPERS, snapshot.year, [_camper_values(person) for person in snapshot.people]
    )
    _write_sheet(
        workbook,
        LOCATIONS,
        snapshot.year,
        [_location_values(location) for location in snapshot.locations],
    )
    _write_sheet(workbook, ITEMS, snapshot.year, [_item_values(view) for view in snapshot.items])

    buffer = BytesIO()
    try:
        workbook.save(buffer)
    except Exception as exc:
        raise WorkbookError(f"Could not serialize workbook {destination.name}: {exc}") from exc

    try:
        with destination.open_write() as stream:
            stream.write(buffer.getvalue())
    except OSError as exc:
        raise WorkbookError(f"Could not write workbook {destination.name}: {exc}") from exc
    log.info("Wrote workbook %s", destination.name)


if TYPE_CHECKING:
    from campcrap.domain.ports.workbook import WorkbookReader, WorkbookWriter

    _reader_check: WorkbookReader = read_workbook
    _writer_check: WorkbookWriter = write_workbook
