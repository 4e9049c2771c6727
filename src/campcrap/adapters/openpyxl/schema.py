"""Pydantic models for spreadsheet rows.

Cells arrive as whatever openpyxl produced (``str``, ``int``, ``float``,
``bool``, ``datetime`` or ``None``). The before-validators fold them into the
text and flag values the domain row records expect.
"""

from __future__ import annotations

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, field_validator

from campcrap.domain.ports.workbook import CamperRow, ItemRow, LocationRow

TRUE_WORDS: frozenset[str] = frozenset({"TRUE", "YES", "1"})

_CAMPER_TEXT_FIELDS = (
    "name",
    "email",
    "real_name",
    "entry_date",
    "exit_date",
    "camp_name",
    "notes",
    "years_attended",
    "photo_path",
)


def _cell_text(value: object) -> str:
    # bool is checked first: it is an int subclass.
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value))
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, datetime | date | time):
        return value.isoformat()
    return ""


def _cell_flag(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int | float):
        return value != 0
    if isinstance(value, str):
        return value.strip().upper() in TRUE_WORDS
    return False


def is_blank_row(values: tuple[object, ...]) -> bool:
    return all(_cell_text(value) == "" for value in values)


class SheetRowModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = ""


class LocationRowModel(SheetRowModel):
    description: str = ""

    _text = field_validator("name", "description", mode="before")(_cell_text)

    def to_row(self, *, sheet: str, row_number: int) -> LocationRow:
        return LocationRow(
            sheet=sheet,
            row_number=row_number,
            name=self.name,
            description=self.description,
        )


class CamperRowModel(SheetRowModel):
    email: str = ""
    real_name: str = ""
    entry_date: str = ""
    exit_date: str = ""
    camp_name: str = ""
    notes: str = ""
    skipping: bool = False
    years_attended: str = ""
    has_ticket: bool = False
    paid_dues: bool = False
    photo_path: str = ""

    _text = field_validator(*_CAMPER_TEXT_FIELDS, mode="before")(_cell_text)
    _flags = field_validator("skipping", "has_ticket", "paid_dues", mode="before")(_cell_flag)

    def to_row(self, *, sheet: str, row_number: int) -> CamperRow:
        return CamperRow(
            sheet=sheet,
            row_number=row_number,
            name=self.name,
            email=self.email,
            real_name=self.real_name,
            entry_date=self.entry_date,
            exit_date=self.exit_date,
            camp_name=self.camp_name,
            notes=self.notes,
            skipping=self.skipping,
            years_attended=self.years_attended,
            has_ticket=self.has_ticket,
            paid_dues=self.paid_dues,
            photo_path=self.photo_path,
        )


class ItemRowModel(SheetRowModel):
    description: str = ""
    camper_name: str = ""
    location_name: str = ""
    photo_path: str = ""
    removal_status: str = ""

    _text = field_validator(
        "name",
        "description",
        "camper_name",
        "location_name",
        "photo_path",
        "removal_status",
        mode="before",
    )(_cell_text)

    def to_row(self, *, sheet: str, row_number: int) -> ItemRow:
        return ItemRow(
            sheet=sheet,
            row_number=row_number,
            name=self.name,
            description=self.description,
            camper_name=self.camper_name,
            location_name=self.location_name,
            photo_path=self.photo_path,
            removal_status=self.removal_status,
        )
