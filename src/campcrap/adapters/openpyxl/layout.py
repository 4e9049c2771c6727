"""Sheet layout shared by the workbook reader and writer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from campcrap.domain.model import EntityKind

# Column widths are kept in 1/256 character units, as spreadsheet apps store them.
WIDTH_UNITS_PER_CHAR: Final[int] = 256


@dataclass(frozen=True, slots=True)
class SheetLayout:
    kind: EntityKind
    prefix: str
    fields: tuple[str, ...]
    headers: tuple[str, ...]
    widths: tuple[int, ...]

    def sheet_name(self, year: str) -> str:
        return f"{self.prefix}{year}"

    def matches(self, sheet_name: str) -> bool:
        return sheet_name.startswith(self.prefix)


CAMPERS: Final = SheetLayout(
    kind=EntityKind.CAMPER,
    prefix="Campers_",
    fields=(
        "id",
        "name",
        "email",
        "real_name",
        "entry_date",
        "exit_date",
        "camp_name",
        "notes",
        "year",
        "skipping",
        "years_attended",
        "has_ticket",
        "paid_dues",
        "photo_path",
    ),
    headers=(
        "ID",
        "Name",
        "Email",
        "Real Name",
        "Entry Date",
        "Exit Date",
        "Camp Name",
        "Notes",
        "Year",
        "Skipping",
        "Years Attended",
        "Has Ticket Current Year",
        "Paid Dues Current Year",
        "Photo Path",
    ),
    widths=(2000, 6000, 8000, 6000, 4000, 4000, 6000, 8000, 2000, 3000, 6000, 4000, 4000, 8000),
)

LOCATIONS: Final = SheetLayout(
    kind=EntityKind.LOCATION,
    prefix="Locations_",
    fields=("id", "name", "description", "year"),
    headers=("ID", "Name", "Description", "Year"),
    widths=(2000, 8000, 10000, 2000),
)

ITEMS: Final = SheetLayout(
    kind=EntityKind.ITEM,
    prefix="Items_",
    fields=(
        "id",
        "name",
        "description",
        "camper_id",
        "camper_name",
        "location_id",
        "location_name",
        "photo_path",
        "year",
        "created_date",
        "removal_status",
    ),
    headers=(
        "ID",
        "Name",
        "Description",
        "Camper ID",
        "Camper Name",
        "Location ID",
        "Location Name",
        "Photo Path",
        "Year",
        "Created Date",
        "Removal Status",
    ),
    widths=(2000, 8000, 10000, 3000, 6000, 3000, 6000, 8000, 2000, 4000, 4000),
)

# Export order; import order is decided by the reconciliation engine.
SHEET_LAYOUTS: Final[tuple[SheetLayout, ...]] = (CAMPERS, LOCATIONS, ITEMS)


def layout_for_sheet(sheet_name: str) -> SheetLayout | None:
    for layout in SHEET_LAYOUTS:
        if layout.matches(sheet_name):
            return layout
    return None
